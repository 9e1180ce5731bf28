"""OAuth2 token handling against the Withings account service."""

from __future__ import annotations

import time
from typing import Any, Callable, Dict
from urllib.parse import urlencode

import httpx

from ...models import Credential, TokenGrant
from ...settings import Settings
from ..application.ports import ProviderSessionError, TokenProvider

SCOPE = "user.metrics"


class WithingsOAuthClient(TokenProvider):
    """Request and refresh Withings OAuth2 tokens."""

    def __init__(
        self,
        http_client: httpx.Client,
        settings: Settings,
        *,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._http_client = http_client
        self._settings = settings
        self._clock = clock

    def authorization_url(self, credential: Credential, state: str) -> str:
        params = {
            "response_type": "code",
            "client_id": credential.client_id,
            "scope": SCOPE,
            "redirect_uri": credential.callback_url,
            "state": state,
        }
        return f"{self._settings.account_url}/oauth2_user/authorize2?{urlencode(params)}"

    def exchange_code(self, credential: Credential, code: str) -> TokenGrant:
        return self._request_token(
            {
                "grant_type": "authorization_code",
                "client_id": credential.client_id,
                "client_secret": credential.client_secret,
                "code": code,
                "redirect_uri": credential.callback_url,
            },
            fallback_refresh_token=None,
        )

    def refresh(self, credential: Credential) -> TokenGrant:
        if not credential.refresh_token:
            raise ProviderSessionError("No Withings refresh token in credential")
        return self._request_token(
            {
                "grant_type": "refresh_token",
                "client_id": credential.client_id,
                "client_secret": credential.client_secret,
                "refresh_token": credential.refresh_token,
            },
            fallback_refresh_token=credential.refresh_token,
        )

    def _request_token(
        self, payload: Dict[str, Any], *, fallback_refresh_token: str | None
    ) -> TokenGrant:
        response = self._http_client.post(
            f"{self._settings.wbsapi_url}/v2/oauth2",
            data={"action": "requesttoken", **payload},
        )
        if response.status_code != 200:
            raise ProviderSessionError(
                f"Withings token request failed with HTTP {response.status_code}"
            )

        try:
            data = response.json()
        except ValueError as exc:
            raise ProviderSessionError("Withings token response is not JSON") from exc

        if not isinstance(data, dict) or data.get("status") != 0:
            error = data.get("error") if isinstance(data, dict) else data
            raise ProviderSessionError(f"Withings API error: {error}")

        body = data.get("body") or {}
        if not isinstance(body, dict):
            raise ProviderSessionError("Withings token response body is not an object")
        access_token = body.get("access_token")
        refresh_token = body.get("refresh_token") or fallback_refresh_token
        expires_in = body.get("expires_in")

        if not access_token:
            raise ProviderSessionError("Withings token response missing access token")
        if not refresh_token:
            raise ProviderSessionError("Withings token response missing refresh token")
        if expires_in is None:
            raise ProviderSessionError("Withings token response missing expires_in")
        try:
            lifetime = int(expires_in)
        except (TypeError, ValueError) as exc:
            raise ProviderSessionError(
                f"Withings token response has invalid expires_in: {expires_in!r}"
            ) from exc

        user_id = body.get("userid")
        return TokenGrant(
            access_token=access_token,
            refresh_token=refresh_token,
            expires_at=int(self._clock()) + lifetime,
            user_id=str(user_id) if user_id is not None else None,
        )


def create_withings_oauth_client(
    *, http_client: httpx.Client, settings: Settings
) -> TokenProvider:
    return WithingsOAuthClient(http_client=http_client, settings=settings)


__all__ = ["SCOPE", "WithingsOAuthClient", "create_withings_oauth_client"]
