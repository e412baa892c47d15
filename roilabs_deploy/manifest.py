"""Deployment manifest files, one per contract and network."""

import json
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional, Union

from loguru import logger

from .exceptions import ConfigurationError
from .types import DeploymentResult


def get_manifest_path(
    deployments_dir: Union[Path, str], network: str, contract_name: str
) -> Path:
    """
    Get manifest file path.

    Returns:
        Path to <deployments_dir>/<network>/<contract_name>.json
    """
    return Path(deployments_dir) / network / f"{contract_name}.json"


def check_manifest_writable(deployments_dir: Union[Path, str], network: str) -> Path:
    """
    Make sure manifests for a network can be written.

    Creates the network directory and writes then removes a scratch file
    in it.

    Raises:
        ConfigurationError: If the directory cannot be created or written
    """
    directory = Path(deployments_dir) / network
    scratch = directory / ".write-check"
    try:
        directory.mkdir(parents=True, exist_ok=True)
        scratch.write_text("")
        scratch.unlink()
    except OSError as e:
        raise ConfigurationError(
            f"Cannot write deployment manifests to {directory}: {e}"
        ) from e
    return directory


def load_manifest(path: Union[Path, str]) -> Optional[Dict[str, Any]]:
    """Load a manifest, or None if it does not exist yet."""
    path = Path(path)
    if not path.exists():
        return None
    with open(path) as f:
        return json.load(f)


def write_manifest(
    deployments_dir: Union[Path, str],
    result: DeploymentResult,
    compiler: Optional[Dict[str, Any]] = None,
) -> Path:
    """
    Record a deployment in its manifest.

    The same transaction may be written twice (at broadcast, then after
    confirmation); a different transaction moves the previous entry into
    the history list.

    Args:
        deployments_dir: Root directory for manifests
        result: Deployment to record
        compiler: Compiler settings the artifact was built with

    Returns:
        Path of the written manifest
    """
    path = get_manifest_path(deployments_dir, result.network, result.contract_name)
    path.parent.mkdir(parents=True, exist_ok=True)

    manifest = load_manifest(path) or {"latest": None, "history": []}
    previous = manifest.get("latest")
    if previous and previous.get("tx_hash") != result.tx_hash:
        manifest.setdefault("history", []).append(previous)

    entry = result.to_dict()
    entry["compiler"] = compiler
    entry["recorded_at"] = datetime.now(timezone.utc).isoformat()
    manifest["latest"] = entry

    tmp_path = path.with_suffix(".json.tmp")
    with open(tmp_path, "w") as f:
        json.dump(manifest, f, indent=2)
    os.replace(tmp_path, path)

    logger.debug(f"Manifest written: {path}")
    return path
