"""
Artifact loader for compiled smart contracts.

This module provides functions to load ABI, bytecode, and other metadata
from the Hardhat-compiled contract artifacts.
"""

import json
from pathlib import Path
from typing import Any, Dict, Optional, Union

from ..constants import DEFAULT_ARTIFACTS_DIR
from ..exceptions import ArtifactNotFoundError, UnknownContractError

# Hardhat writes artifacts relative to the project root
ARTIFACTS_DIR = Path(DEFAULT_ARTIFACTS_DIR)

# Contract name mappings
CONTRACT_PATHS = {
    "LPLock": "LPLock.sol/LPLock.json",
    "TokenLock": "TokenLock.sol/TokenLock.json",
    "RoiToken": "RoiToken.sol/RoiToken.json",
}


def load_artifact(
    contract_name: str, artifacts_dir: Optional[Union[Path, str]] = None
) -> Dict[str, Any]:
    """
    Load the complete artifact JSON for a contract.

    Args:
        contract_name: Name of the contract (e.g., 'LPLock', 'RoiToken')
        artifacts_dir: Hardhat artifacts/contracts directory
                       (defaults to ./artifacts/contracts)

    Returns:
        Complete artifact dictionary including ABI, bytecode, and metadata

    Raises:
        UnknownContractError: If the contract name is not recognized
        ArtifactNotFoundError: If the artifact file doesn't exist
    """
    if contract_name not in CONTRACT_PATHS:
        available = ", ".join(CONTRACT_PATHS.keys())
        raise UnknownContractError(
            f"Unknown contract: {contract_name}. "
            f"Available contracts: {available}"
        )

    root = Path(artifacts_dir) if artifacts_dir is not None else ARTIFACTS_DIR
    artifact_path = root / CONTRACT_PATHS[contract_name]

    if not artifact_path.exists():
        raise ArtifactNotFoundError(
            f"Artifact file not found: {artifact_path}\n"
            f"Make sure the contracts have been compiled with 'npx hardhat compile'"
        )

    with open(artifact_path, "r") as f:
        return json.load(f)


def get_abi(contract_name: str, artifacts_dir: Optional[Union[Path, str]] = None) -> list:
    """
    Get the ABI for a specific contract.

    Args:
        contract_name: Name of the contract
        artifacts_dir: Hardhat artifacts directory

    Returns:
        Contract ABI as a list
    """
    artifact = load_artifact(contract_name, artifacts_dir)
    return artifact.get("abi", [])


def get_bytecode(contract_name: str, artifacts_dir: Optional[Union[Path, str]] = None) -> str:
    """
    Get the deployment bytecode for a specific contract.

    Args:
        contract_name: Name of the contract
        artifacts_dir: Hardhat artifacts directory

    Returns:
        Bytecode as a hex string (with '0x' prefix)
    """
    artifact = load_artifact(contract_name, artifacts_dir)
    return artifact.get("bytecode", "0x")


def get_deployed_bytecode(
    contract_name: str, artifacts_dir: Optional[Union[Path, str]] = None
) -> str:
    """Get the runtime bytecode for a specific contract."""
    artifact = load_artifact(contract_name, artifacts_dir)
    return artifact.get("deployedBytecode", "0x")


def get_constructor_abi(abi: list) -> Optional[Dict[str, Any]]:
    """
    Find the constructor entry of an ABI.

    Args:
        abi: Contract ABI

    Returns:
        The constructor ABI item, or None when the contract declares no
        constructor (it then takes no arguments)
    """
    for item in abi:
        if item.get("type") == "constructor":
            return item
    return None


def get_contract_metadata(
    contract_name: str, artifacts_dir: Optional[Union[Path, str]] = None
) -> Dict[str, Any]:
    """
    Get metadata about the contract compilation.

    Args:
        contract_name: Name of the contract
        artifacts_dir: Hardhat artifacts directory

    Returns:
        Dictionary containing contract and source names, the artifact
        format, and the constructor signature
    """
    artifact = load_artifact(contract_name, artifacts_dir)
    constructor = get_constructor_abi(artifact.get("abi", []))
    inputs = constructor.get("inputs", []) if constructor else []

    return {
        "contractName": artifact.get("contractName"),
        "sourceName": artifact.get("sourceName"),
        "format": artifact.get("_format"),
        "constructor": [f"{inp['type']} {inp.get('name', '')}".strip() for inp in inputs],
    }


def list_available_contracts() -> list:
    """
    List all deployable contracts known to the package.

    Returns:
        List of contract names
    """
    return list(CONTRACT_PATHS.keys())


def validate_artifacts(artifacts_dir: Optional[Union[Path, str]] = None) -> Dict[str, bool]:
    """
    Validate that all expected artifacts are present.

    Returns:
        Dictionary mapping contract names to availability status
    """
    status = {}
    for contract_name in CONTRACT_PATHS:
        try:
            load_artifact(contract_name, artifacts_dir)
            status[contract_name] = True
        except (ArtifactNotFoundError, UnknownContractError, json.JSONDecodeError):
            status[contract_name] = False

    return status
