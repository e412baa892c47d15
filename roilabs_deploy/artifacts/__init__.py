"""Artifact loading utilities for compiled smart contracts."""
from .loader import get_abi, get_bytecode, get_constructor_abi, load_artifact

__all__ = ["get_abi", "get_bytecode", "get_constructor_abi", "load_artifact"]
