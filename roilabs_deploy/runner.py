"""
Deployment runner.

Takes a DeploymentConfig and a ContractSpec through

    Unconfigured -> Validated -> Submitted -> Confirmed | Failed

Every network call made before the transaction is broadcast is retried on
transient transport errors. The broadcast itself is never repeated: a lost
connection at that point is reported as an unknown outcome.
"""

import time
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

import requests
from eth_abi import is_encodable
from eth_account import Account
from eth_utils.abi import collapse_if_tuple
from loguru import logger
from web3 import Web3
from web3.exceptions import ContractLogicError, TimeExhausted, Web3RPCError

from .artifacts.loader import get_constructor_abi, load_artifact
from .config import DeploymentConfig
from .exceptions import (
    ChainIdMismatchError,
    ConfigurationError,
    ConfirmationTimeoutError,
    ConstructorArgumentError,
    DeploymentRevertedError,
    InsufficientFundsError,
    NetworkError,
    OutcomeUnknownError,
    SubmissionError,
)
from .contracts.base import is_valid_address
from .manifest import check_manifest_writable, write_manifest
from .types import ContractSpec, DeploymentResult, DeploymentStatus

TRANSIENT_ERRORS = (
    requests.exceptions.ConnectionError,
    requests.exceptions.Timeout,
    ConnectionResetError,
    TimeoutError,
)

RPC_REQUEST_TIMEOUT = 30


class RunnerState(str, Enum):
    UNCONFIGURED = "unconfigured"
    VALIDATED = "validated"
    SUBMITTED = "submitted"
    CONFIRMED = "confirmed"
    FAILED = "failed"


_TRANSITIONS = {
    RunnerState.UNCONFIGURED: {RunnerState.VALIDATED, RunnerState.FAILED},
    RunnerState.VALIDATED: {RunnerState.SUBMITTED, RunnerState.FAILED},
    RunnerState.SUBMITTED: {RunnerState.CONFIRMED, RunnerState.FAILED},
}


def default_web3_factory(config: DeploymentConfig) -> Web3:
    """HTTP Web3 client with the provider's own retries switched off."""
    provider = Web3.HTTPProvider(
        config.rpc_url,
        request_kwargs={"timeout": RPC_REQUEST_TIMEOUT},
        exception_retry_configuration=None,
    )
    return Web3(provider)


class DeploymentRunner:
    """
    Deploys one contract, once.

    Args:
        config: Network and signer configuration
        spec: Contract name and constructor arguments
        web3_factory: Builds the Web3 client from the config; called only
                      after validation has passed
        sleep: Used between retries
    """

    def __init__(
        self,
        config: DeploymentConfig,
        spec: ContractSpec,
        web3_factory: Callable[[DeploymentConfig], Any] = default_web3_factory,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.config = config
        self.spec = spec
        self.state = RunnerState.UNCONFIGURED
        self.result: Optional[DeploymentResult] = None

        self._web3_factory = web3_factory
        self._sleep = sleep
        self._w3 = None
        self._account = None
        self._abi: List[Dict[str, Any]] = []
        self._bytecode = ""
        self._args: List[Any] = []

    def run(self) -> DeploymentResult:
        """
        Validate, submit and confirm.

        Returns:
            Confirmed DeploymentResult

        Raises:
            DeploymentError: Any subclass, see exceptions.py
            RuntimeError: If this runner has already been used
        """
        if self.state is not RunnerState.UNCONFIGURED:
            raise RuntimeError(
                f"DeploymentRunner already used (state: {self.state.value}); "
                "create a new runner for another deployment"
            )

        try:
            self.validate()
            self.submit()
            return self.confirm()
        finally:
            if self.state is not RunnerState.CONFIRMED:
                self.state = RunnerState.FAILED

    def validate(self) -> None:
        """Check config, artifact and constructor arguments. No network access."""
        self._require(RunnerState.UNCONFIGURED)
        self.config.validate()

        artifact = load_artifact(self.spec.name, self.config.artifacts_dir)
        self._abi = artifact.get("abi", [])
        self._bytecode = artifact.get("bytecode") or ""
        if self._bytecode in ("", "0x"):
            raise ConfigurationError(
                f"Artifact for {self.spec.name} has no bytecode; "
                "interfaces and abstract contracts cannot be deployed"
            )

        self._args = check_constructor_args(self.spec, self._abi)
        self._account = Account.from_key(self.config.private_key)
        # Once broadcast, a manifest failure can only be logged
        check_manifest_writable(self.config.deployments_dir, self.config.network)
        self._transition(RunnerState.VALIDATED)

    def submit(self) -> DeploymentResult:
        """Build, sign and broadcast the contract-creation transaction."""
        self._require(RunnerState.VALIDATED)
        config = self.config
        w3 = self._w3 = self._web3_factory(config)
        deployer = self._account.address

        chain_id = self._call("chain id", lambda: w3.eth.chain_id)
        if config.chain_id is not None and chain_id != config.chain_id:
            raise ChainIdMismatchError(
                f"RPC endpoint serves chain {chain_id}, but network "
                f"'{config.network}' expects chain {config.chain_id}"
            )

        logger.info(f"Deploying {self.spec.name} with account: {deployer}")
        balance = self._call("balance", lambda: w3.eth.get_balance(deployer))
        logger.info(f"Account balance: {Web3.from_wei(balance, 'ether')} ETH")

        nonce = self._call(
            "nonce", lambda: w3.eth.get_transaction_count(deployer, "pending")
        )
        constructor = w3.eth.contract(abi=self._abi, bytecode=self._bytecode).constructor(
            *self._args
        )
        gas_estimate = self._call(
            "gas estimate", lambda: constructor.estimate_gas({"from": deployer})
        )
        gas = int(gas_estimate * config.gas_multiplier)
        tx = self._call(
            "transaction",
            lambda: constructor.build_transaction(
                {"from": deployer, "nonce": nonce, "gas": gas, "chainId": chain_id}
            ),
        )

        fee_per_gas = tx.get("maxFeePerGas") or tx.get("gasPrice") or 0
        required = tx["gas"] * fee_per_gas + tx.get("value", 0)
        if balance < required:
            raise InsufficientFundsError(
                f"Insufficient funds: deployment needs up to "
                f"{Web3.from_wei(required, 'ether')} ETH, "
                f"{deployer} holds {Web3.from_wei(balance, 'ether')} ETH"
            )

        signed = self._account.sign_transaction(tx)
        tx_hash = Web3.to_hex(signed.hash)

        self.result = DeploymentResult(
            contract_name=self.spec.name,
            network=config.network,
            deployer=deployer,
            tx_hash=tx_hash,
            constructor_args=tuple(self._args),
            chain_id=chain_id,
        )

        logger.info(f"Sending deployment transaction {tx_hash} (nonce {nonce}, gas {gas})")
        try:
            try:
                sent_hash = w3.eth.send_raw_transaction(signed.raw_transaction)
            except TRANSIENT_ERRORS as e:
                self._record()
                raise OutcomeUnknownError(
                    f"Connection lost while broadcasting {self.spec.name} deployment: {e}",
                    tx_hash,
                ) from e
            except (ContractLogicError, Web3RPCError, ValueError) as e:
                raise SubmissionError(
                    f"Node rejected {self.spec.name} deployment: {e}", tx_hash
                ) from e

            if Web3.to_hex(sent_hash) != tx_hash:
                logger.warning(
                    f"Node reported hash {Web3.to_hex(sent_hash)}, expected {tx_hash}"
                )

            self._transition(RunnerState.SUBMITTED)
            self._record()
        except KeyboardInterrupt:
            self._record()
            raise OutcomeUnknownError(
                f"Interrupted while broadcasting {self.spec.name} deployment",
                tx_hash,
            ) from None

        logger.info(f"Transaction sent: {tx_hash}")
        return self.result

    def confirm(self) -> DeploymentResult:
        """Wait for one confirmation and read back the contract address."""
        self._require(RunnerState.SUBMITTED)
        result = self.result
        timeout = self.config.confirmation_timeout
        deadline = time.monotonic() + timeout

        logger.info(f"Waiting up to {timeout:.0f}s for confirmation...")
        receipt = None
        try:
            while receipt is None:
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    raise TimeExhausted(f"no receipt after {timeout:.0f}s")
                try:
                    receipt = self._w3.eth.wait_for_transaction_receipt(
                        result.tx_hash,
                        timeout=remaining,
                        poll_latency=self.config.poll_latency,
                    )
                except TRANSIENT_ERRORS as e:
                    # Reading the receipt is safe to repeat; the broadcast is not
                    logger.warning(f"Lost connection while waiting for receipt: {e}")
                    self._sleep(min(self.config.poll_latency, max(remaining, 0)))
        except TimeExhausted:
            raise ConfirmationTimeoutError(
                f"{self.spec.name} deployment not confirmed within {timeout:.0f}s",
                result.tx_hash,
            ) from None
        except KeyboardInterrupt:
            raise OutcomeUnknownError(
                f"Interrupted while waiting for {self.spec.name} deployment",
                result.tx_hash,
            ) from None

        result.record_receipt(receipt)
        self._record()

        if result.status is DeploymentStatus.REVERTED:
            self._transition(RunnerState.FAILED)
            raise DeploymentRevertedError(
                f"{self.spec.name} deployment reverted in block {result.block_number}",
                result.tx_hash,
            )

        self._transition(RunnerState.CONFIRMED)
        self.report()
        return result

    def report(self) -> None:
        result = self.result
        logger.success(f"{result.contract_name} deployed to: {result.contract_address}")
        logger.success(f"Transaction hash: {result.tx_hash}")
        logger.info(f"Block: {result.block_number}, gas used: {result.gas_used}")
        link = self.config.explorer_link("address", result.contract_address)
        if link:
            logger.info(f"Explorer: {link}")

    def _call(self, what: str, fn: Callable[[], Any]) -> Any:
        """Run a pre-broadcast network call with bounded retries."""
        attempts = self.config.max_retries + 1
        delay = self.config.retry_backoff
        for attempt in range(1, attempts + 1):
            try:
                return fn()
            except TRANSIENT_ERRORS as e:
                if attempt == attempts:
                    raise NetworkError(
                        f"RPC endpoint unreachable while fetching {what} "
                        f"after {attempts} attempt(s): {e}"
                    ) from e
                logger.warning(
                    f"Transient error fetching {what} (attempt {attempt}/{attempts}): "
                    f"{e}; retrying in {delay:.1f}s"
                )
                self._sleep(delay)
                delay *= 2
            except (ContractLogicError, Web3RPCError) as e:
                raise SubmissionError(f"Node rejected {what} for {self.spec.name}: {e}") from e

    def _record(self) -> None:
        """Write the manifest; after broadcast a failure must not mask the outcome."""
        try:
            write_manifest(self.config.deployments_dir, self.result, self.config.compiler)
        except (OSError, TypeError, ValueError) as e:
            logger.warning(
                f"Could not write deployment manifest for {self.result.tx_hash}: {e}"
            )

    def _require(self, state: RunnerState) -> None:
        if self.state is not state:
            raise RuntimeError(
                f"Runner is {self.state.value}, expected {state.value}"
            )

    def _transition(self, state: RunnerState) -> None:
        if state not in _TRANSITIONS.get(self.state, set()):
            raise RuntimeError(f"Invalid transition {self.state.value} -> {state.value}")
        logger.debug(f"Runner state: {self.state.value} -> {state.value}")
        self.state = state


def check_constructor_args(spec: ContractSpec, abi: List[Dict[str, Any]]) -> List[Any]:
    """
    Match constructor arguments against the ABI.

    Args:
        spec: Contract name and arguments
        abi: Contract ABI

    Returns:
        Arguments ready for encoding, with addresses checksummed

    Raises:
        ConstructorArgumentError: On wrong arity, missing values, or a value
            that cannot be encoded as its declared type
    """
    constructor = get_constructor_abi(abi)
    inputs = constructor.get("inputs", []) if constructor else []
    args = list(spec.constructor_args)
    signature = ", ".join(f"{i['type']} {i.get('name', '')}".strip() for i in inputs)

    if len(args) != len(inputs):
        raise ConstructorArgumentError(
            f"{spec.name} constructor({signature}) takes {len(inputs)} "
            f"argument(s), got {len(args)}"
        )

    checked = []
    for position, (item, value) in enumerate(zip(inputs, args)):
        label = item.get("name") or f"argument {position}"
        abi_type = collapse_if_tuple(item)

        if value is None or (isinstance(value, str) and not value.strip()):
            raise ConstructorArgumentError(
                f"Missing constructor argument {label} ({abi_type}) for {spec.name}"
            )

        if abi_type == "address":
            if not isinstance(value, str) or not is_valid_address(value):
                raise ConstructorArgumentError(
                    f"Constructor argument {label} for {spec.name} is not an address: {value!r}"
                )
            value = Web3.to_checksum_address(value)
        elif not is_encodable(abi_type, value):
            raise ConstructorArgumentError(
                f"Constructor argument {label} for {spec.name} cannot be encoded "
                f"as {abi_type}: {value!r}"
            )

        checked.append(value)

    return checked


def deploy(config: DeploymentConfig, spec: ContractSpec, **kwargs) -> DeploymentResult:
    """Run a single deployment with a fresh runner."""
    return DeploymentRunner(config, spec, **kwargs).run()
