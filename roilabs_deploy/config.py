"""
Deployment configuration.

A DeploymentConfig is built once at process start, usually from the
environment, and passed into the runner. Nothing below reads os.environ
directly.
"""

import math
import string
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from eth_account import Account

from .constants import (
    ADDRESS_ENV_VARS,
    COMPILER_SETTINGS,
    DEFAULT_ARTIFACTS_DIR,
    DEFAULT_CONFIRMATION_TIMEOUT,
    DEFAULT_DEPLOYMENTS_DIR,
    DEFAULT_GAS_MULTIPLIER,
    DEFAULT_MAX_RETRIES,
    DEFAULT_NETWORK,
    DEFAULT_POLL_LATENCY,
    DEFAULT_RETRY_BACKOFF,
    NETWORK_CONFIG,
)
from .exceptions import ConfigurationError


def normalize_private_key(raw: str) -> str:
    """
    Normalize a signing key to 0x-prefixed, lowercase hex.

    Accepts the key with or without the 0x prefix, since .env files in
    the wild use both conventions.

    Args:
        raw: Key as found in configuration

    Returns:
        Normalized key, e.g. '0x4c08...'

    Raises:
        ConfigurationError: If the key is not 32 bytes of hex
    """
    key = raw.strip()
    if key[:2].lower() == "0x":
        key = key[2:]

    if len(key) != 64 or any(c not in string.hexdigits for c in key):
        raise ConfigurationError(
            "Invalid signing key: expected 64 hex characters (32 bytes), "
            "optionally prefixed with 0x"
        )

    return "0x" + key.lower()


@dataclass(frozen=True)
class DeploymentConfig:
    """Everything a deployment needs to know about network and signer."""

    rpc_url: str
    private_key: str = field(repr=False)
    network: str = DEFAULT_NETWORK
    chain_id: Optional[int] = None
    explorer_url: Optional[str] = None
    explorer_api_key: Optional[str] = field(default=None, repr=False)
    contract_addresses: Dict[str, str] = field(default_factory=dict)
    confirmation_timeout: float = DEFAULT_CONFIRMATION_TIMEOUT
    poll_latency: float = DEFAULT_POLL_LATENCY
    max_retries: int = DEFAULT_MAX_RETRIES
    retry_backoff: float = DEFAULT_RETRY_BACKOFF
    gas_multiplier: float = DEFAULT_GAS_MULTIPLIER
    artifacts_dir: Path = Path(DEFAULT_ARTIFACTS_DIR)
    deployments_dir: Path = Path(DEFAULT_DEPLOYMENTS_DIR)
    compiler: Dict[str, Any] = field(default_factory=lambda: dict(COMPILER_SETTINGS))

    def __post_init__(self):
        # Blank values are left for validate() so it can name the field
        rpc_url = (self.rpc_url or "").strip()
        private_key = (self.private_key or "").strip()
        if private_key:
            private_key = normalize_private_key(private_key)

        object.__setattr__(self, "rpc_url", rpc_url)
        object.__setattr__(self, "private_key", private_key)
        object.__setattr__(self, "artifacts_dir", Path(self.artifacts_dir))
        object.__setattr__(self, "deployments_dir", Path(self.deployments_dir))

    @classmethod
    def from_env(cls, environ: Mapping[str, str]) -> "DeploymentConfig":
        """
        Build a config from an environment mapping.

        Args:
            environ: Usually os.environ, after .env has been loaded

        Returns:
            DeploymentConfig for the selected network preset

        Raises:
            ConfigurationError: If the network is unknown or a numeric
                override cannot be parsed
        """
        network = environ.get("NETWORK") or DEFAULT_NETWORK
        if network not in NETWORK_CONFIG:
            available = ", ".join(NETWORK_CONFIG.keys())
            raise ConfigurationError(
                f"Unknown network: {network}. Available networks: {available}"
            )
        preset = NETWORK_CONFIG[network]

        addresses = {
            name: environ[name].strip()
            for name in ADDRESS_ENV_VARS
            if environ.get(name, "").strip()
        }

        return cls(
            rpc_url=environ.get("RPC_URL") or environ.get("BASE_RPC_URL") or "",
            private_key=environ.get("PRIVATE_KEY", ""),
            network=network,
            chain_id=preset["chain_id"],
            explorer_url=preset["block_explorer_url"],
            explorer_api_key=environ.get("BASESCAN_API_KEY") or None,
            contract_addresses=addresses,
            confirmation_timeout=_parse_number(
                environ, "CONFIRMATION_TIMEOUT", float, DEFAULT_CONFIRMATION_TIMEOUT
            ),
            max_retries=_parse_number(environ, "MAX_RETRIES", int, DEFAULT_MAX_RETRIES),
            artifacts_dir=Path(environ.get("ARTIFACTS_DIR") or DEFAULT_ARTIFACTS_DIR),
            deployments_dir=Path(
                environ.get("DEPLOYMENTS_DIR") or DEFAULT_DEPLOYMENTS_DIR
            ),
        )

    def validate(self) -> None:
        """
        Check that the config is complete enough to submit a transaction.

        Raises:
            ConfigurationError: Naming the first missing or invalid field
        """
        if not self.private_key:
            raise ConfigurationError(
                "Missing signing key: set PRIVATE_KEY in the environment"
            )
        if not self.rpc_url:
            raise ConfigurationError(
                "Missing RPC endpoint: set RPC_URL in the environment"
            )
        if not self.rpc_url.startswith(("http://", "https://")):
            raise ConfigurationError(
                f"Invalid RPC endpoint: {self.rpc_url} is not an http(s) URL"
            )
        if not math.isfinite(self.confirmation_timeout) or self.confirmation_timeout <= 0:
            raise ConfigurationError(
                "Confirmation timeout must be a finite number greater than 0"
            )
        if not math.isfinite(self.poll_latency) or self.poll_latency <= 0:
            raise ConfigurationError("Poll interval must be a finite number greater than 0")
        if self.max_retries < 0:
            raise ConfigurationError("Max retries cannot be negative")
        if not math.isfinite(self.gas_multiplier) or self.gas_multiplier < 1:
            raise ConfigurationError("Gas multiplier must be at least 1")

    @property
    def deployer_address(self) -> str:
        """Checksummed address derived from the signing key."""
        if not self.private_key:
            raise ConfigurationError("Missing signing key: set PRIVATE_KEY in the environment")
        return Account.from_key(self.private_key).address

    def explorer_link(self, kind: str, value: str) -> Optional[str]:
        """Block explorer URL for an address or tx, if an explorer is known."""
        if not self.explorer_url:
            return None
        return f"{self.explorer_url}/{kind}/{value}"


def _parse_number(environ: Mapping[str, str], name: str, cast, default):
    raw = environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return cast(raw.strip())
    except ValueError:
        raise ConfigurationError(f"Invalid {name}: {raw!r} is not a number") from None
