from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class TokenGrant(BaseModel):
    """Token triple issued by the Withings OAuth2 endpoint."""

    access_token: str
    refresh_token: str
    expires_at: int = Field(..., description="Absolute expiry as epoch seconds")
    user_id: Optional[str] = None


class Credential(BaseModel):
    """OAuth2 application and user credentials persisted between runs."""

    # Hand-edited YAML often carries the numeric Withings user id unquoted.
    model_config = ConfigDict(coerce_numbers_to_str=True)

    client_id: str
    client_secret: str
    callback_url: str
    user_id: Optional[str] = None
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
    expires_at: Optional[int] = Field(
        None, description="Absolute access token expiry as epoch seconds"
    )

    def with_grant(self, grant: TokenGrant) -> "Credential":
        """Return a copy carrying the tokens of ``grant``."""

        update = {
            "access_token": grant.access_token,
            "refresh_token": grant.refresh_token,
            "expires_at": grant.expires_at,
        }
        if grant.user_id is not None:
            update["user_id"] = grant.user_id
        return self.model_copy(update=update)

    def is_expired(self, now: float, margin: int = 0) -> bool:
        if not self.access_token or self.expires_at is None:
            return True
        return self.expires_at - margin <= now
