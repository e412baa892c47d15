"""Exception hierarchy for roilabs-deploy."""

from typing import Optional


class DeploymentError(Exception):
    """Base exception for every deployment failure."""

    def __init__(self, message: str, tx_hash: Optional[str] = None):
        super().__init__(message)
        self.tx_hash = tx_hash


class ConfigurationError(DeploymentError, ValueError):
    """Raised when configuration is missing or malformed. Never touches the network."""

    pass


class UnknownContractError(ConfigurationError):
    """Raised when a contract name has no known artifact."""

    pass


class ArtifactNotFoundError(ConfigurationError, FileNotFoundError):
    """Raised when a compiled artifact file is absent."""

    pass


class ConstructorArgumentError(ConfigurationError):
    """Raised when constructor arguments do not match the ABI."""

    pass


class ChainIdMismatchError(ConfigurationError):
    """Raised when the RPC endpoint serves a different chain than configured."""

    pass


class NetworkError(DeploymentError, ConnectionError):
    """Raised when the endpoint stays unreachable after pre-broadcast retries."""

    pass


class SubmissionError(DeploymentError):
    """Raised when the node rejects the deployment transaction."""

    pass


class InsufficientFundsError(SubmissionError):
    """Raised when the deployer cannot cover gas for the deployment."""

    pass


class DeploymentRevertedError(SubmissionError):
    """Raised when the deployment was mined with status 0."""

    pass


class OutcomeUnknownError(DeploymentError):
    """Raised when a transaction may be on-chain but was not seen confirmed."""

    def __init__(self, message: str, tx_hash: Optional[str] = None):
        if tx_hash:
            message = (
                f"{message}. Check transaction {tx_hash} manually before "
                "re-submitting"
            )
        super().__init__(message, tx_hash)


class ConfirmationTimeoutError(OutcomeUnknownError):
    """Raised when no receipt arrives within the confirmation timeout."""

    pass
