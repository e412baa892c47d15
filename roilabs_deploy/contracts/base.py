"""
Shared behaviour for deployable contract wrappers.

Each wrapper knows its contract's constructor: which parameters it takes,
how to validate them, and which environment variables supply them.
"""

from typing import Any, Dict, Tuple

from web3 import Web3

from ..config import DeploymentConfig
from ..exceptions import ConfigurationError, ConstructorArgumentError
from ..types import ContractSpec


class BaseContract:
    """Base wrapper; subclasses set CONTRACT_NAME and CONSTRUCTOR_ENV."""

    CONTRACT_NAME = ""
    # Environment variables feeding the constructor, in argument order
    CONSTRUCTOR_ENV: Tuple[str, ...] = ()

    @classmethod
    def for_config(cls, config: DeploymentConfig) -> ContractSpec:
        """
        Build the ContractSpec from addresses held in the config.

        Args:
            config: Deployment configuration

        Returns:
            ContractSpec ready for the runner

        Raises:
            ConfigurationError: Naming the first missing variable
        """
        values = []
        for env_name in cls.CONSTRUCTOR_ENV:
            value = config.contract_addresses.get(env_name)
            if not value:
                raise ConfigurationError(
                    f"Missing constructor argument for {cls.CONTRACT_NAME}: "
                    f"set {env_name} in the environment"
                )
            values.append(value)

        wrapper = cls()
        return wrapper.contract_spec(*values)

    def encode_constructor_params(self, *args: Any) -> Dict[str, Any]:
        """Validate constructor parameters and key them by ABI name."""
        raise NotImplementedError

    def contract_spec(self, *args: Any) -> ContractSpec:
        """Validate parameters and return them as an ordered ContractSpec."""
        params = self.encode_constructor_params(*args)
        return ContractSpec(name=self.CONTRACT_NAME, constructor_args=list(params.values()))

    @staticmethod
    def validate_address(value: str, label: str) -> str:
        """
        Check an address argument and return it checksummed.

        Raises:
            ConstructorArgumentError: If the address is malformed
        """
        if not value or not isinstance(value, str):
            raise ConstructorArgumentError(f"{label} is required")

        value = value.strip()
        if not value.startswith("0x"):
            raise ConstructorArgumentError(f"Invalid {label}: must start with 0x")

        if len(value) != 42:
            raise ConstructorArgumentError(f"{label} must be 42 characters")

        if not is_valid_address(value):
            raise ConstructorArgumentError(f"Invalid {label}: {value}")

        if int(value, 16) == 0:
            raise ConstructorArgumentError(f"{label} cannot be the zero address")

        return Web3.to_checksum_address(value)


def is_valid_address(value: str) -> bool:
    """
    Check that a string is a hex address with a correct checksum.

    All-lowercase and all-uppercase addresses carry no checksum and are
    accepted; mixed case must match EIP-55 exactly.
    """
    if not Web3.is_address(value):
        return False
    body = value[2:]
    if body != body.lower() and body != body.upper():
        return Web3.is_checksum_address(value)
    return True
