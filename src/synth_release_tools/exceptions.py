"""Custom exception classes for synth-release-tools."""

from typing import Optional


class ReleaseToolError(Exception):
    """Base exception for release and multisig tooling errors."""

    pass


class ManifestValidationError(ReleaseToolError, ValueError):
    """Raised when a release manifest does not match the expected schema."""

    pass


class InvalidReleaseVersionError(ReleaseToolError, ValueError):
    """Raised when a release label is not a semantic version."""

    pass


class UnsupportedNetworkError(ReleaseToolError, ValueError):
    """Raised when a network has no multisig configuration."""

    pass


class SignerNotConfiguredError(ReleaseToolError, ValueError):
    """Raised when no delegate signer can be resolved from key material."""

    pass


class InvalidSenderError(ReleaseToolError, ValueError):
    """Raised when a queued multisig call is not sent from the Safe itself."""

    pass


class SafeServiceError(ReleaseToolError, RuntimeError):
    """Raised when the Safe transaction service rejects or fails a request."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        response_body: Optional[str] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.response_body = response_body
