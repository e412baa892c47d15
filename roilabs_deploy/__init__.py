"""
RoiLabs Contract Deployment Package

Deploys the compiled LPLock, TokenLock and RoiToken contracts to Base from
Hardhat artifacts, with validated configuration, bounded retries and a
deployment manifest for every run.
"""

__version__ = "1.0.0"
__author__ = "RoiLabs"

from .artifacts.loader import (
    get_abi,
    get_bytecode,
    load_artifact,
    get_contract_metadata
)

from .config import DeploymentConfig, normalize_private_key
from .contracts import LPLockContract, RoiTokenContract, TokenLockContract
from .exceptions import (
    ConfigurationError,
    ConfirmationTimeoutError,
    DeploymentError,
    NetworkError,
    OutcomeUnknownError,
    SubmissionError,
)
from .runner import DeploymentRunner, deploy
from .types import ContractSpec, DeploymentResult, DeploymentStatus

__all__ = [
    'get_abi',
    'get_bytecode',
    'load_artifact',
    'get_contract_metadata',
    'DeploymentConfig',
    'normalize_private_key',
    'LPLockContract',
    'TokenLockContract',
    'RoiTokenContract',
    'DeploymentRunner',
    'deploy',
    'ContractSpec',
    'DeploymentResult',
    'DeploymentStatus',
    'DeploymentError',
    'ConfigurationError',
    'NetworkError',
    'SubmissionError',
    'OutcomeUnknownError',
    'ConfirmationTimeoutError',
]
