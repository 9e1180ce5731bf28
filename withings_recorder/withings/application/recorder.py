"""Application service driving one end-to-end ``record-status`` run."""

from __future__ import annotations

import logging
from datetime import date
from typing import Callable, Optional

from ...domain.catalog import known_codes
from ...domain.transform import transform
from ...domain.window import fetch_window
from ...models import Credential, RunReport, TransformResult
from .ports import (
    CredentialStore,
    MeasurementsPort,
    ProviderSessionError,
    SampleSink,
    TokenRejectedError,
)
from .session import TokenSession

logger = logging.getLogger(__name__)


class RecordStatusUseCase:
    """Fetch recent measurements and forward them to the time-series store.

    Every attempt runs the full sequence: token check, fetch, transform and
    write. Only :class:`ProviderSessionError` restarts the sequence, at most
    ``max_retries`` times; any other error ends the run immediately.
    """

    def __init__(
        self,
        store: CredentialStore,
        session: TokenSession,
        fetcher: MeasurementsPort,
        sink: Optional[SampleSink],
        *,
        max_retries: int = 5,
        window_days: int = 7,
        strict_catalog: bool = False,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._store = store
        self._session = session
        self._fetcher = fetcher
        self._sink = sink
        self._max_retries = max_retries
        self._window_days = window_days
        self._strict_catalog = strict_catalog
        self._today = today
        self._credential: Optional[Credential] = None

    def run(self, *, dry_run: bool = False) -> RunReport:
        if not dry_run and self._sink is None:
            raise ValueError("A sample sink is required unless running dry")

        self._credential = self._store.load()
        refreshes_before = self._session.refresh_count
        force_refresh = False
        tries = 0
        while True:
            try:
                result, written = self._attempt(
                    force_refresh=force_refresh, dry_run=dry_run
                )
                break
            except ProviderSessionError as exc:
                tries += 1
                if tries > self._max_retries:
                    raise
                logger.info(
                    "caught error %s, retrying (%d/%d)",
                    type(exc).__name__,
                    tries,
                    self._max_retries,
                )
                force_refresh = isinstance(exc, TokenRejectedError)

        return RunReport(
            attempts=tries + 1,
            samples=result.samples,
            unknown_codes=result.unknown_codes,
            written=written,
            refreshed=self._session.refresh_count > refreshes_before,
        )

    def _attempt(
        self, *, force_refresh: bool, dry_run: bool
    ) -> tuple[TransformResult, bool]:
        # Keep the refreshed credential even if a later step fails, so the
        # next attempt starts from the newest token pair.
        access_token, self._credential = self._session.with_valid_token(
            self._credential, force_refresh=force_refresh
        )
        window = fetch_window(self._today(), self._window_days)
        groups = self._fetcher.fetch(access_token, window, known_codes())
        result = transform(groups, strict=self._strict_catalog)

        for sample in result.samples:
            logger.debug(sample.describe())
        if result.unknown_codes:
            logger.warning(
                "skipped %d measures with unknown type codes: %s",
                result.unknown_total,
                dict(sorted(result.unknown_codes.items())),
            )

        sink = self._sink
        if dry_run or sink is None:
            logger.info("dry run, not writing %d samples", len(result.samples))
            return result, False

        sink.write(result.samples)
        logger.info("wrote %d samples", len(result.samples))
        return result, True


__all__ = ["RecordStatusUseCase"]
