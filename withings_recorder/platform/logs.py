from __future__ import annotations

import logging
import sys
from pathlib import Path

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"


def configure_logging(*, log_to_file: bool, log_file: Path, verbose: bool = False) -> None:
    """Send log records to ``log_file`` (or stdout) at INFO, DEBUG if verbose."""

    if log_to_file:
        path = Path(log_file).expanduser()
        path.parent.mkdir(parents=True, exist_ok=True, mode=0o755)
        path.touch(exist_ok=True)
        path.chmod(0o644)
        handler: logging.Handler = logging.FileHandler(path, mode="a", encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stdout)

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=LOG_FORMAT,
        handlers=[handler],
        force=True,
    )
    # httpx logs every request at INFO.
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger(__name__.split(".")[0]).info("starting")


__all__ = ["LOG_FORMAT", "configure_logging"]
