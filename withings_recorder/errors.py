"""Error taxonomy for a recorder run."""

from __future__ import annotations


class RecorderError(RuntimeError):
    """Base class for failures raised by the recorder."""


class StorageError(RecorderError):
    """Raised when the credential record is missing, unreadable or unwritable."""


class ProviderSessionError(RecorderError):
    """Raised when Withings returns a malformed or unexpected response.

    This is the only error class that triggers a retry of the whole run.
    """


class TokenRejectedError(ProviderSessionError):
    """Raised when Withings rejects the access token presented with a call."""


class TransformError(RecorderError):
    """Raised when a measure type code is not in the catalog (strict mode)."""


class SinkWriteError(RecorderError):
    """Raised when the time-series store refuses a batch of samples."""


class AuthorizationError(RecorderError):
    """Raised when the interactive authorization cannot be completed."""


__all__ = [
    "RecorderError",
    "StorageError",
    "ProviderSessionError",
    "TokenRejectedError",
    "TransformError",
    "SinkWriteError",
    "AuthorizationError",
]
