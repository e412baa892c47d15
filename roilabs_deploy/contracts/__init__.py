"""Wrappers for the deployable RoiLabs contracts."""
from ..exceptions import UnknownContractError
from .base import BaseContract
from .lp_lock import LPLockContract
from .roi_token import RoiTokenContract
from .token_lock import TokenLockContract

CONTRACTS = {
    LPLockContract.CONTRACT_NAME: LPLockContract,
    TokenLockContract.CONTRACT_NAME: TokenLockContract,
    RoiTokenContract.CONTRACT_NAME: RoiTokenContract,
}


def get_contract_wrapper(contract_name: str) -> type:
    """Look up the wrapper class for a contract name."""
    try:
        return CONTRACTS[contract_name]
    except KeyError:
        available = ", ".join(CONTRACTS.keys())
        raise UnknownContractError(
            f"Unknown contract: {contract_name}. Available contracts: {available}"
        ) from None


__all__ = [
    "BaseContract",
    "LPLockContract",
    "TokenLockContract",
    "RoiTokenContract",
    "CONTRACTS",
    "get_contract_wrapper",
]
