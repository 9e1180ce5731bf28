from __future__ import annotations

import logging
import secrets
from typing import Optional
from urllib.parse import parse_qs, urlsplit

from ...models import Credential
from .ports import AuthorizationError, CredentialStore, TokenProvider

logger = logging.getLogger(__name__)


def extract_code(redirect_url: str) -> str:
    """Pull the ``code`` query parameter out of a pasted redirect URL."""

    query = parse_qs(urlsplit(redirect_url.strip()).query)
    codes = query.get("code")
    if not codes or not codes[0]:
        raise AuthorizationError("Redirect URL does not contain an authorization code")
    return codes[0]


class AuthorizeUseCase:
    """One-time bootstrap that stores the first token pair for a user."""

    def __init__(self, store: CredentialStore, provider: TokenProvider) -> None:
        self._store = store
        self._provider = provider
        self._credential: Optional[Credential] = None

    def authorization_url(self, state: Optional[str] = None) -> str:
        self._credential = self._store.load()
        return self._provider.authorization_url(
            self._credential, state or secrets.token_urlsafe(16)
        )

    def complete(self, redirect_url: str) -> Credential:
        credential = self._credential or self._store.load()
        code = extract_code(redirect_url)
        grant = self._provider.exchange_code(credential, code)
        updated = credential.with_grant(grant)
        self._store.save(updated)
        logger.info("authorized Withings user %s", updated.user_id)
        return updated


__all__ = ["AuthorizeUseCase", "extract_code"]
