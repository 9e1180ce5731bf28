from __future__ import annotations

from datetime import date, datetime, time, timedelta

from ..models import FetchWindow


def _midnight(day: date) -> int:
    return int(datetime.combine(day, time.min).timestamp())


def fetch_window(today: date, days: int = 7) -> FetchWindow:
    """Cover local midnight ``days`` ago through the last second of ``today``."""

    if days < 0:
        raise ValueError("days must not be negative")
    start = _midnight(today - timedelta(days=days))
    end = _midnight(today + timedelta(days=1)) - 1
    return FetchWindow(startdate=start, enddate=end)


__all__ = ["fetch_window"]
