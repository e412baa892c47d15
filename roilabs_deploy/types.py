"""Data types for roilabs-deploy."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


@dataclass(frozen=True)
class ContractSpec:
    """A named artifact plus the constructor arguments to deploy it with."""

    name: str  # e.g., "LPLock"
    constructor_args: List[Any] = field(default_factory=list)


class DeploymentStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    REVERTED = "reverted"


@dataclass
class DeploymentResult:
    """
    Outcome of a single deployment.

    Created when the transaction is broadcast, finalized exactly once by
    record_receipt(), and read-only afterwards.
    """

    # Known at broadcast time
    contract_name: str
    network: str
    deployer: str
    tx_hash: str
    constructor_args: Tuple[Any, ...] = ()
    chain_id: Optional[int] = None

    # Filled in from the receipt
    contract_address: Optional[str] = None
    block_number: Optional[int] = None
    gas_used: Optional[int] = None
    status: DeploymentStatus = DeploymentStatus.PENDING

    _finalized: bool = field(default=False, init=False, repr=False, compare=False)

    def __post_init__(self):
        self.constructor_args = tuple(self.constructor_args)

    def __setattr__(self, name, value):
        if getattr(self, "_finalized", False):
            raise AttributeError(
                f"DeploymentResult for {self.tx_hash} is final; cannot set {name}"
            )
        super().__setattr__(name, value)

    @property
    def is_final(self) -> bool:
        return self._finalized

    def record_receipt(self, receipt: Dict[str, Any]) -> None:
        """
        Apply a transaction receipt and freeze the result.

        Args:
            receipt: Receipt as returned by wait_for_transaction_receipt
        """
        if receipt.get("status") == 1:
            self.status = DeploymentStatus.CONFIRMED
            self.contract_address = receipt.get("contractAddress")
        else:
            self.status = DeploymentStatus.REVERTED
        self.block_number = receipt.get("blockNumber")
        self.gas_used = receipt.get("gasUsed")
        self._finalized = True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "contract": self.contract_name,
            "network": self.network,
            "chain_id": self.chain_id,
            "deployer": self.deployer,
            "constructor_args": [_jsonable(a) for a in self.constructor_args],
            "tx_hash": self.tx_hash,
            "address": self.contract_address,
            "block": self.block_number,
            "gas_used": self.gas_used,
            "status": self.status.value,
        }


def _jsonable(value: Any) -> Any:
    if isinstance(value, (bytes, bytearray)):
        return "0x" + bytes(value).hex()
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    return value
