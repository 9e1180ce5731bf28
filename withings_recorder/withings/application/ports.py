"""Ports for the Withings application layer."""

from __future__ import annotations

from typing import Protocol, Sequence, runtime_checkable

from ...errors import (
    AuthorizationError,
    ProviderSessionError,
    SinkWriteError,
    StorageError,
    TokenRejectedError,
    TransformError,
)
from ...models import Credential, FetchWindow, RawMeasureGroup, Sample, TokenGrant


@runtime_checkable
class CredentialStore(Protocol):
    """Load and persist the credential record between runs."""

    def load(self) -> Credential:
        """Return the stored credential or raise ``StorageError``."""

    def save(self, credential: Credential) -> None:
        """Replace the stored credential or raise ``StorageError``."""


@runtime_checkable
class TokenProvider(Protocol):
    """OAuth2 mechanics of the Withings account service."""

    def authorization_url(self, credential: Credential, state: str) -> str:
        """Return the URL a user visits to grant access."""

    def exchange_code(self, credential: Credential, code: str) -> TokenGrant:
        """Exchange an authorization code for a token grant."""

    def refresh(self, credential: Credential) -> TokenGrant:
        """Perform the refresh grant with the credential's refresh token."""


@runtime_checkable
class MeasurementsPort(Protocol):
    """Read measurement groups from the Withings API."""

    def fetch(
        self, access_token: str, window: FetchWindow, codes: Sequence[int]
    ) -> list[RawMeasureGroup]:
        """Return the measurement groups recorded inside ``window``."""


@runtime_checkable
class SampleSink(Protocol):
    """Destination accepting batches of samples."""

    def write(self, samples: Sequence[Sample]) -> None:
        """Persist ``samples`` or raise ``SinkWriteError``."""


__all__ = [
    "AuthorizationError",
    "CredentialStore",
    "MeasurementsPort",
    "ProviderSessionError",
    "SampleSink",
    "SinkWriteError",
    "StorageError",
    "TokenProvider",
    "TokenRejectedError",
    "TransformError",
]
