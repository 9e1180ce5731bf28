from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, List

import pytest
from click.testing import CliRunner

from withings_recorder import main
from withings_recorder.errors import AuthorizationError, ProviderSessionError
from withings_recorder.models import RunReport, Sample
from withings_recorder.settings import Settings

from tests.builders import NOW


class RecordStatusStub:
    def __init__(self, *, report: RunReport | None = None, raises: Exception | None = None) -> None:
        self.dry_runs: List[bool] = []
        self._report = report or RunReport(attempts=1)
        self._raises = raises

    def run(self, *, dry_run: bool = False) -> RunReport:
        self.dry_runs.append(dry_run)
        if self._raises:
            raise self._raises
        return self._report


class AuthorizeStub:
    def __init__(self, raises: Exception | None = None) -> None:
        self.completed: List[str] = []
        self._raises = raises

    def authorization_url(self, state: str | None = None) -> str:
        return "https://account.example.com/oauth2_user/authorize2?client_id=x"

    def complete(self, redirect_url: str) -> None:
        if self._raises:
            raise self._raises
        self.completed.append(redirect_url)


@pytest.fixture
def logging_calls(monkeypatch: pytest.MonkeyPatch) -> List[Dict[str, Any]]:
    calls: List[Dict[str, Any]] = []
    monkeypatch.setattr(main, "configure_logging", lambda **kwargs: calls.append(kwargs))
    return calls


@pytest.fixture(autouse=True)
def _settings(monkeypatch: pytest.MonkeyPatch, settings: Settings) -> None:
    monkeypatch.setattr(main, "get_settings", lambda: settings)


def _install_record_status(monkeypatch: pytest.MonkeyPatch, stub: RecordStatusStub) -> Dict[str, Any]:
    seen: Dict[str, Any] = {}

    @contextmanager
    def provide(settings: Settings, *, dry_run: bool = False):
        seen["dry_run"] = dry_run
        yield stub

    monkeypatch.setattr(main, "provide_record_status_use_case", provide)
    return seen


def test_record_status_runs_use_case(
    monkeypatch: pytest.MonkeyPatch, logging_calls: List[Dict[str, Any]], settings: Settings
) -> None:
    stub = RecordStatusStub(
        report=RunReport(
            attempts=1,
            samples=[Sample(metric_name="weight", value=70.0, timestamp=NOW)],
            written=True,
        )
    )
    seen = _install_record_status(monkeypatch, stub)

    result = CliRunner().invoke(main.cli, ["record-status"])

    assert result.exit_code == 0, result.output
    assert stub.dry_runs == [False]
    assert seen["dry_run"] is False
    assert logging_calls == [
        {"log_to_file": True, "log_file": settings.log_file, "verbose": False}
    ]


def test_record_status_dry_run_and_verbose(
    monkeypatch: pytest.MonkeyPatch, logging_calls: List[Dict[str, Any]]
) -> None:
    stub = RecordStatusStub()
    seen = _install_record_status(monkeypatch, stub)

    result = CliRunner().invoke(main.cli, ["--no-log", "-v", "record-status", "-d"])

    assert result.exit_code == 0, result.output
    assert stub.dry_runs == [True]
    assert seen["dry_run"] is True
    assert logging_calls[0]["log_to_file"] is False
    assert logging_calls[0]["verbose"] is True


def test_record_status_failure_is_logged_not_raised(
    monkeypatch: pytest.MonkeyPatch,
    logging_calls: List[Dict[str, Any]],
    caplog: pytest.LogCaptureFixture,
) -> None:
    _install_record_status(monkeypatch, RecordStatusStub(raises=ProviderSessionError("boom")))

    result = CliRunner().invoke(main.cli, ["record-status"])

    assert result.exit_code == 0
    assert result.exception is None
    errors = [r for r in caplog.records if r.levelname == "ERROR"]
    assert errors and "record-status failed" in errors[0].getMessage()
    assert errors[0].exc_info is not None


def test_authorize_prompts_for_redirect(monkeypatch: pytest.MonkeyPatch) -> None:
    stub = AuthorizeStub()

    @contextmanager
    def provide(settings: Settings):
        yield stub

    monkeypatch.setattr(main, "provide_authorize_use_case", provide)

    result = CliRunner().invoke(
        main.cli, ["authorize"], input="https://example.com/cb?code=abc\n"
    )

    assert result.exit_code == 0, result.output
    assert "Log in here:" in result.output
    assert "authorize2?client_id=x" in result.output
    assert "authorization successful" in result.output
    assert stub.completed == ["https://example.com/cb?code=abc"]


def test_authorize_failure_exits_non_zero(monkeypatch: pytest.MonkeyPatch) -> None:
    @contextmanager
    def provide(settings: Settings):
        yield AuthorizeStub(raises=AuthorizationError("no code"))

    monkeypatch.setattr(main, "provide_authorize_use_case", provide)

    result = CliRunner().invoke(main.cli, ["authorize"], input="https://example.com/cb\n")

    assert result.exit_code == 1
    assert "no code" in result.output


def test_main_returns_exit_code(
    monkeypatch: pytest.MonkeyPatch, logging_calls: List[Dict[str, Any]]
) -> None:
    _install_record_status(monkeypatch, RecordStatusStub(raises=RuntimeError("boom")))

    assert main.main(["record-status"]) == 0
    assert main.main(["--version"]) == 0
