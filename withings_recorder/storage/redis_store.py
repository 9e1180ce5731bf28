from __future__ import annotations

import logging
from typing import Optional, Protocol

from pydantic import ValidationError
from upstash_redis import Redis

from ..errors import StorageError
from ..models import Credential

logger = logging.getLogger(__name__)


class RedisClient(Protocol):
    """Minimal Redis client interface used by the credential store."""

    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str, ex: int | None = None) -> None:
        ...


def get_redis(url: str, token: str) -> RedisClient:
    """Factory helper that provides an Upstash Redis REST client."""

    return Redis(url=url, token=token)


class RedisCredentialStore:
    """Keep the whole credential record as one JSON value under ``key``.

    A single ``SET`` replaces the record, so readers never observe a mix of
    old and new tokens.
    """

    def __init__(self, redis: RedisClient, key: str = "withings_credentials") -> None:
        self._redis = redis
        self._key = key

    def load(self) -> Credential:
        try:
            raw = self._redis.get(self._key)
        except Exception as exc:
            raise StorageError(f"Cannot read {self._key!r} from Redis: {exc}") from exc
        if not raw:
            raise StorageError(f"No credentials stored in Redis under {self._key!r}")
        try:
            return Credential.model_validate_json(raw)
        except ValidationError as exc:
            raise StorageError(f"Invalid credentials under {self._key!r}: {exc}") from exc

    def save(self, credential: Credential) -> None:
        try:
            self._redis.set(self._key, credential.model_dump_json())
        except Exception as exc:
            raise StorageError(f"Cannot write {self._key!r} to Redis: {exc}") from exc
        logger.debug("saved credentials to Redis key %s", self._key)


__all__ = ["RedisClient", "RedisCredentialStore", "get_redis"]
