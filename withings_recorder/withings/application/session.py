from __future__ import annotations

import logging
import time
from typing import Callable, Tuple

from ...models import Credential
from .ports import CredentialStore, ProviderSessionError, TokenProvider

logger = logging.getLogger(__name__)


class TokenSession:
    """Hand out a usable access token, refreshing and persisting it when stale."""

    def __init__(
        self,
        store: CredentialStore,
        provider: TokenProvider,
        *,
        clock: Callable[[], float] = time.time,
        expiry_margin: int = 60,
    ) -> None:
        self._store = store
        self._provider = provider
        self._clock = clock
        self._expiry_margin = expiry_margin
        self.refresh_count = 0

    def with_valid_token(
        self, credential: Credential, *, force_refresh: bool = False
    ) -> Tuple[str, Credential]:
        """Return an access token together with the credential that holds it.

        A refreshed credential is saved before this method returns, so the
        store never lags behind a token pair the provider has already rotated.
        """

        access_token = credential.access_token
        if (
            access_token
            and not force_refresh
            and not credential.is_expired(self._clock(), self._expiry_margin)
        ):
            return access_token, credential

        if not credential.refresh_token:
            raise ProviderSessionError("No Withings refresh token in credential")

        logger.debug(
            "refreshing access token (expires_at=%s, forced=%s)",
            credential.expires_at,
            force_refresh,
        )
        grant = self._provider.refresh(credential)
        updated = credential.with_grant(grant)
        self._store.save(updated)
        self.refresh_count += 1
        logger.info("refreshed access token, valid until %s", updated.expires_at)
        return grant.access_token, updated


__all__ = ["TokenSession"]
