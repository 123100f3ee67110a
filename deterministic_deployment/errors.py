"""Error taxonomy for the deterministic deployment pipeline."""
from __future__ import annotations

from typing import Optional


class DeploymentError(RuntimeError):
    """Base class for every failure raised by the pipeline.

    ``stage`` names the part of the pipeline that failed so callers can report
    it without re-running with verbose logging.
    """

    stage = "pipeline"

    def __init__(self, message: str, *, stage: Optional[str] = None) -> None:
        super().__init__(message)
        if stage is not None:
            self.stage = stage

    def __str__(self) -> str:
        return f"[{self.stage}] {super().__str__()}"


class MalformedHex(DeploymentError, ValueError):
    """Raised when a hex string contains characters outside ``[0-9a-fA-F]``."""

    stage = "codec"


class InvalidAddress(DeploymentError, ValueError):
    """Raised when an address is not exactly 20 bytes."""

    stage = "derivation"


class InvalidNonce(DeploymentError, ValueError):
    """Raised when a nonce is negative, not an integer or out of range."""

    stage = "derivation"


class InvalidTransaction(DeploymentError, ValueError):
    """Raised when a transaction field cannot be assembled."""

    stage = "assembly"


class MissingCredential(DeploymentError):
    """Raised when neither a mnemonic nor a private key is configured."""

    stage = "credentials"


class InvalidCredential(DeploymentError):
    """Raised when the configured secret is rejected by the key derivation."""

    stage = "credentials"


class SigningFailure(DeploymentError):
    stage = "signing"


class StorageFailure(DeploymentError):
    """Raised when an artifact cannot be written or read back."""

    stage = "storage"

    def __init__(self, message: str, *, path: Optional[str] = None, stage: Optional[str] = None) -> None:
        super().__init__(message, stage=stage)
        self.path = path


class CompilerOutputError(DeploymentError):
    stage = "compiler"


class ConfigurationError(DeploymentError):
    stage = "configuration"


class ProviderError(DeploymentError):
    """Raised when the chain provider cannot answer a gas estimation query."""

    stage = "provider"


__all__ = [
    "CompilerOutputError",
    "ConfigurationError",
    "DeploymentError",
    "InvalidAddress",
    "InvalidCredential",
    "InvalidNonce",
    "InvalidTransaction",
    "MalformedHex",
    "MissingCredential",
    "ProviderError",
    "SigningFailure",
    "StorageFailure",
]
