"""Network and compiler constants for roilabs-deploy."""

# Mirrors the hardhat.config.js network block of the contracts repo
NETWORK_CONFIG = {
    "base": {
        "chain_id": 8453,
        "chain_name": "Base",
        "block_explorer_url": "https://basescan.org",
        "explorer_api_url": "https://api.basescan.org/api",
    },
    "base-sepolia": {
        "chain_id": 84532,
        "chain_name": "Base Sepolia",
        "block_explorer_url": "https://sepolia.basescan.org",
        "explorer_api_url": "https://api-sepolia.basescan.org/api",
    },
}

DEFAULT_NETWORK = "base"

# solc settings the artifacts were compiled with
COMPILER_SETTINGS = {
    "version": "0.8.20",
    "optimizer": {"enabled": True, "runs": 200},
}

DEFAULT_ARTIFACTS_DIR = "artifacts/contracts"
DEFAULT_DEPLOYMENTS_DIR = "deployments"

DEFAULT_CONFIRMATION_TIMEOUT = 300.0
DEFAULT_POLL_LATENCY = 2.0
DEFAULT_MAX_RETRIES = 3
DEFAULT_RETRY_BACKOFF = 1.0
DEFAULT_GAS_MULTIPLIER = 1.2

# Environment variables holding constructor addresses
ADDRESS_ENV_VARS = (
    "USDC_BASE_ADDRESS",
    "PLATFORM_FEE_WALLET",
    "ROUTER_ADDRESS",
)
