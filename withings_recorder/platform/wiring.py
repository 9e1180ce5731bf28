"""Wiring of settings into concrete adapters and use cases."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

import httpx

from ..influx import InfluxSampleSink, create_influx_client
from ..settings import Settings
from ..storage import RedisCredentialStore, YamlCredentialStore, get_redis
from ..withings.application import (
    AuthorizeUseCase,
    CredentialStore,
    RecordStatusUseCase,
    TokenSession,
)
from ..withings.infrastructure import (
    create_withings_measurements_adapter,
    create_withings_oauth_client,
)


def provide_credential_store(settings: Settings) -> CredentialStore:
    if settings.credential_backend == "redis":
        if not settings.upstash_redis_rest_url or not settings.upstash_redis_rest_token:
            raise ValueError(
                "UPSTASH_REDIS_REST_URL and UPSTASH_REDIS_REST_TOKEN are required "
                "for the redis credential backend"
            )
        redis = get_redis(settings.upstash_redis_rest_url, settings.upstash_redis_rest_token)
        return RedisCredentialStore(redis, settings.credentials_key)
    return YamlCredentialStore(settings.credentials_path)


@contextmanager
def provide_record_status_use_case(
    settings: Settings, *, dry_run: bool = False
) -> Iterator[RecordStatusUseCase]:
    store = provide_credential_store(settings)
    sink = None if dry_run else InfluxSampleSink(create_influx_client(settings))
    with httpx.Client(timeout=settings.http_timeout) as http_client:
        session = TokenSession(
            store,
            create_withings_oauth_client(http_client=http_client, settings=settings),
            expiry_margin=settings.token_expiry_margin,
        )
        yield RecordStatusUseCase(
            store,
            session,
            create_withings_measurements_adapter(http_client=http_client, settings=settings),
            sink,
            max_retries=settings.max_retries,
            window_days=settings.window_days,
            strict_catalog=settings.strict_catalog,
        )


@contextmanager
def provide_authorize_use_case(settings: Settings) -> Iterator[AuthorizeUseCase]:
    store = provide_credential_store(settings)
    with httpx.Client(timeout=settings.http_timeout) as http_client:
        yield AuthorizeUseCase(
            store, create_withings_oauth_client(http_client=http_client, settings=settings)
        )


__all__ = [
    "provide_authorize_use_case",
    "provide_credential_store",
    "provide_record_status_use_case",
]
