"""
LPLock contract wrapper for deployment.

LPLock holds liquidity-pool tokens until their unlock time and charges its
lock fee in USDC, forwarded to the platform fee wallet.
"""

from typing import Any, Dict

from ..exceptions import ConstructorArgumentError
from .base import BaseContract


class LPLockContract(BaseContract):
    """Wrapper for LPLock deployment."""

    CONTRACT_NAME = "LPLock"
    CONSTRUCTOR_ENV = ("USDC_BASE_ADDRESS", "PLATFORM_FEE_WALLET")

    def encode_constructor_params(
        self,
        usdc_address: str,
        fee_wallet: str
    ) -> Dict[str, Any]:
        """
        Encode constructor parameters for deployment.

        Args:
            usdc_address: USDC token address on the target chain
            fee_wallet: Address receiving platform fees

        Returns:
            Dictionary of constructor parameters

        Raises:
            ConstructorArgumentError: If validation fails
        """
        usdc_address = self.validate_address(usdc_address, "USDC address")
        fee_wallet = self.validate_address(fee_wallet, "Platform fee wallet")

        if usdc_address == fee_wallet:
            raise ConstructorArgumentError(
                "Platform fee wallet cannot be the USDC token contract"
            )

        return {
            "_usdc": usdc_address,
            "_feeWallet": fee_wallet,
        }
