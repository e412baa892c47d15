"""
RoiToken contract wrapper for deployment.

RoiToken creates its own trading pair through the DEX router passed to the
constructor, so the router address must be correct for the target chain.
"""

from typing import Any, Dict

from .base import BaseContract


class RoiTokenContract(BaseContract):
    """Wrapper for RoiToken deployment."""

    CONTRACT_NAME = "RoiToken"
    CONSTRUCTOR_ENV = ("ROUTER_ADDRESS",)

    def encode_constructor_params(self, router_address: str) -> Dict[str, Any]:
        """
        Encode constructor parameters for deployment.

        Args:
            router_address: Uniswap-V2-style router on the target chain

        Returns:
            Dictionary of constructor parameters

        Raises:
            ConstructorArgumentError: If the router address is invalid
        """
        return {
            "_router": self.validate_address(router_address, "Router address"),
        }
