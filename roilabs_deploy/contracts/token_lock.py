"""TokenLock contract wrapper for deployment."""

from typing import Any, Dict

from .base import BaseContract


class TokenLockContract(BaseContract):
    """
    Wrapper for TokenLock deployment.

    TokenLock takes no constructor arguments; the deployer becomes owner.
    """

    CONTRACT_NAME = "TokenLock"

    def encode_constructor_params(self) -> Dict[str, Any]:
        return {}
