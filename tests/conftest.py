"""Shared pytest fixtures for roilabs-deploy tests."""

import shutil
from pathlib import Path
from typing import Any, Dict, List

import pytest
import requests
from eth_account import Account
from hexbytes import HexBytes
from web3 import Web3
from web3.exceptions import TimeExhausted

from roilabs_deploy.config import DeploymentConfig

# Well-known throwaway key from the eth-account documentation
TEST_PRIVATE_KEY = "4c0883a69102937d6231471b5dbb6204fe5129617082792ae468d01a3f362318"

USDC_ADDRESS = "0x833589fCD6eDb6E08f4c7C32D4f71b54bdA02913"
FEE_WALLET = "0x1111111111111111111111111111111111111111"
ROUTER_ADDRESS = "0x4752ba5DBc23f44D87826276BF6Fd6b1C372aD24"


class FakeEth:
    """
    Minimal stand-in for web3's Eth module.

    Every method counts as one network call. Failures can be scripted per
    method through `fail_times` (transient errors raised before success).
    """

    def __init__(self, chain_id: int = 8453, balance: int = 10**18):
        self._chain_id = chain_id
        self.balance = balance
        self.gas_estimate = 500_000
        self.gas_price = 10**9
        self.calls: List[str] = []
        self.fail_times: Dict[str, int] = {}
        self.send_error: Exception = None
        self.receipt_status = 1
        self.receipt_error: BaseException = None
        self.nonces: Dict[str, int] = {}
        self.pending: Dict[str, Dict[str, Any]] = {}
        self.sent: List[bytes] = []
        self.built: List[Dict[str, Any]] = []

    @property
    def network_calls(self) -> int:
        return len(self.calls)

    def _hit(self, method: str) -> None:
        self.calls.append(method)
        remaining = self.fail_times.get(method, 0)
        if remaining:
            self.fail_times[method] = remaining - 1
            raise requests.exceptions.ConnectionError(f"connection reset during {method}")

    @property
    def chain_id(self) -> int:
        self._hit("chain_id")
        return self._chain_id

    def get_balance(self, address):
        self._hit("get_balance")
        return self.balance

    def get_transaction_count(self, address, block_identifier="latest"):
        self._hit("get_transaction_count")
        return self.nonces.get(address, 0)

    def contract(self, abi, bytecode):
        return FakeContractFactory(self, abi, bytecode)

    def send_raw_transaction(self, raw_transaction):
        self._hit("send_raw_transaction")
        if self.send_error is not None:
            raise self.send_error
        raw = bytes(raw_transaction)
        self.sent.append(raw)
        tx_hash = Web3.keccak(raw)

        sender = Account.recover_transaction(raw)
        nonce = self.nonces.get(sender, 0)
        self.nonces[sender] = nonce + 1
        # Stands in for keccak(rlp([sender, nonce])); only uniqueness matters here
        address = Web3.to_checksum_address(Web3.to_hex(Web3.keccak(text=f"{sender}:{nonce}")[-20:]))
        self.pending[Web3.to_hex(tx_hash)] = {"contractAddress": address}
        return HexBytes(tx_hash)

    def wait_for_transaction_receipt(self, transaction_hash, timeout=120, poll_latency=0.1):
        self._hit("wait_for_transaction_receipt")
        if self.receipt_error is not None:
            raise self.receipt_error
        pending = self.pending[Web3.to_hex(HexBytes(transaction_hash))]
        return {
            "transactionHash": HexBytes(transaction_hash),
            "status": self.receipt_status,
            "contractAddress": pending["contractAddress"] if self.receipt_status else None,
            "blockNumber": 12_345_678,
            "gasUsed": self.gas_estimate,
        }


class FakeContractFactory:
    def __init__(self, eth: FakeEth, abi, bytecode):
        self.eth = eth
        self.abi = abi
        self.bytecode = bytecode

    def constructor(self, *args):
        return FakeConstructor(self, args)


class FakeConstructor:
    def __init__(self, factory: FakeContractFactory, args):
        self.factory = factory
        self.args = args

    def estimate_gas(self, transaction=None):
        self.factory.eth._hit("estimate_gas")
        return self.factory.eth.gas_estimate

    def build_transaction(self, transaction):
        self.factory.eth._hit("build_transaction")
        tx = dict(transaction)
        tx.setdefault("value", 0)
        tx["data"] = self.factory.bytecode
        tx["gasPrice"] = self.factory.eth.gas_price
        self.factory.eth.built.append(tx)
        return tx


class FakeWeb3:
    def __init__(self, **kwargs):
        self.eth = FakeEth(**kwargs)


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def artifacts_dir(fixtures_dir: Path, tmp_path: Path) -> Path:
    """Copy the sample Hardhat artifacts into a writable temp directory."""
    target = tmp_path / "artifacts" / "contracts"
    shutil.copytree(fixtures_dir / "artifacts" / "contracts", target)
    return target


@pytest.fixture
def deployments_dir(tmp_path: Path) -> Path:
    return tmp_path / "deployments"


@pytest.fixture
def base_env(artifacts_dir: Path, deployments_dir: Path) -> Dict[str, str]:
    """Environment for a complete LPLock deployment on Base."""
    return {
        "PRIVATE_KEY": TEST_PRIVATE_KEY,
        "RPC_URL": "https://mainnet.base.org",
        "USDC_BASE_ADDRESS": USDC_ADDRESS,
        "PLATFORM_FEE_WALLET": FEE_WALLET,
        "ROUTER_ADDRESS": ROUTER_ADDRESS,
        "ARTIFACTS_DIR": str(artifacts_dir),
        "DEPLOYMENTS_DIR": str(deployments_dir),
    }


@pytest.fixture
def config(base_env: Dict[str, str]) -> DeploymentConfig:
    return DeploymentConfig.from_env(base_env)


@pytest.fixture
def fake_web3() -> FakeWeb3:
    return FakeWeb3()


@pytest.fixture
def web3_factory(fake_web3: FakeWeb3):
    """Factory returning the fake client; records how often it was used."""

    def factory(config):
        factory.created += 1
        return fake_web3

    factory.created = 0
    return factory


@pytest.fixture
def no_sleep():
    """Replacement for time.sleep that records requested delays."""

    def sleep(seconds):
        sleep.delays.append(seconds)

    sleep.delays = []
    return sleep


@pytest.fixture
def timeout_error():
    return TimeExhausted("Transaction is not in the chain after 300 seconds")
