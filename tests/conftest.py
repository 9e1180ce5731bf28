"""Shared test fixtures and doubles."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, List, Optional, Sequence

import pytest

from withings_recorder.models import (
    Credential,
    FetchWindow,
    RawMeasureGroup,
    Sample,
    TokenGrant,
)
from withings_recorder.settings import Settings
from withings_recorder.withings.application.ports import (
    CredentialStore,
    MeasurementsPort,
    SampleSink,
    StorageError,
    TokenProvider,
)

from tests.builders import NOW, make_credential


@dataclass
class _Expectation:
    expected: Dict[str, Any]
    returns: Any = None
    raises: Exception | None = None


class CredentialStoreFake(CredentialStore):
    """In-memory credential store that records every save."""

    def __init__(self, credential: Optional[Credential] = None) -> None:
        self.credential = credential
        self.saved: List[Credential] = []
        self.load_count = 0
        self._save_errors: list[Exception] = []

    def expect_save_failure(self, error: Exception) -> "CredentialStoreFake":
        self._save_errors.append(error)
        return self

    def assert_last_saved(self, *, access_token: str | None = None) -> None:
        assert self.saved, "save() was not called"
        if access_token is not None:
            assert (
                self.saved[-1].access_token == access_token
            ), f"Expected last saved token {access_token!r}, saw {self.saved[-1].access_token!r}"

    def load(self) -> Credential:
        self.load_count += 1
        if self.credential is None:
            raise StorageError("no credential stored")
        return self.credential

    def save(self, credential: Credential) -> None:
        if self._save_errors:
            raise self._save_errors.pop(0)
        self.saved.append(credential)
        self.credential = credential


class TokenProviderFake(TokenProvider):
    """Token provider double with queued refresh outcomes."""

    def __init__(self) -> None:
        self._expected_refresh: list[_Expectation] = []
        self._expected_exchange: list[_Expectation] = []
        self.refreshed_with: list[Optional[str]] = []
        self.exchanged_codes: list[str] = []

    def expect_refresh(
        self, *, returns: TokenGrant | None = None, raises: Exception | None = None
    ) -> "TokenProviderFake":
        self._expected_refresh.append(_Expectation({}, returns, raises))
        return self

    def expect_exchange(
        self,
        code: str | None = None,
        *,
        returns: TokenGrant | None = None,
        raises: Exception | None = None,
    ) -> "TokenProviderFake":
        self._expected_exchange.append(_Expectation({"code": code}, returns, raises))
        return self

    def authorization_url(self, credential: Credential, state: str) -> str:
        return f"https://account.example.com/authorize?client_id={credential.client_id}&state={state}"

    def exchange_code(self, credential: Credential, code: str) -> TokenGrant:
        self.exchanged_codes.append(code)
        expectation = self._expected_exchange.pop(0)
        expected_code = expectation.expected.get("code")
        if expected_code is not None and expected_code != code:
            raise AssertionError(f"Expected exchange_code({expected_code!r}) but got {code!r}")
        if expectation.raises:
            raise expectation.raises
        return expectation.returns

    def refresh(self, credential: Credential) -> TokenGrant:
        self.refreshed_with.append(credential.refresh_token)
        if not self._expected_refresh:
            raise AssertionError("Unexpected refresh() call")
        expectation = self._expected_refresh.pop(0)
        if expectation.raises:
            raise expectation.raises
        return expectation.returns


class MeasurementsFake(MeasurementsPort):
    """Measurement fetcher double returning queued responses."""

    def __init__(self) -> None:
        self._expected_fetch: list[_Expectation] = []
        self.calls: list[tuple[str, FetchWindow, tuple[int, ...]]] = []

    def expect_fetch(
        self, *, returns: Any = None, raises: Exception | None = None, times: int = 1
    ) -> "MeasurementsFake":
        for _ in range(times):
            self._expected_fetch.append(_Expectation({}, returns, raises))
        return self

    def assert_last_fetch(self, access_token: str | None = None) -> None:
        assert self.calls, "fetch() was not called"
        if access_token is not None:
            assert (
                self.calls[-1][0] == access_token
            ), f"Expected fetch with {access_token!r}, saw {self.calls[-1][0]!r}"

    def fetch(
        self, access_token: str, window: FetchWindow, codes: Sequence[int]
    ) -> list[RawMeasureGroup]:
        self.calls.append((access_token, window, tuple(codes)))
        if self._expected_fetch:
            expectation = self._expected_fetch.pop(0)
            if expectation.raises:
                raise expectation.raises
            return list(expectation.returns or [])
        return []


class SinkSpy(SampleSink):
    """Sample sink recording each written batch."""

    def __init__(self, raises: Exception | None = None) -> None:
        self.batches: list[list[Sample]] = []
        self._raises = raises

    def write(self, samples: Sequence[Sample]) -> None:
        self.batches.append(list(samples))
        if self._raises:
            raise self._raises


@pytest.fixture
def settings() -> Settings:
    """Canonical settings instance reused across tests."""

    return Settings(
        _env_file=None,
        wbsapi_url="https://wbs.example.com",
        account_url="https://account.example.com",
        credential_backend="file",
        credentials_path="/tmp/withings-test/credentials.yaml",
        influxdb_host="influx.example.com",
        influxdb_database="withings",
    )


@pytest.fixture
def credential() -> Credential:
    return make_credential()


@pytest.fixture
def expired_credential() -> Credential:
    return make_credential(expires_at=NOW - 10)


@pytest.fixture
def store_fake(credential: Credential) -> CredentialStoreFake:
    return CredentialStoreFake(credential)


@pytest.fixture
def provider_fake() -> TokenProviderFake:
    return TokenProviderFake()


@pytest.fixture
def measurements_fake() -> MeasurementsFake:
    return MeasurementsFake()


@pytest.fixture
def sink_spy() -> SinkSpy:
    return SinkSpy()


@pytest.fixture
def today() -> date:
    return date(2024, 1, 8)
