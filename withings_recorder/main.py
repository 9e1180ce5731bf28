"""Command line entry point: ``withings-recorder``."""

from __future__ import annotations

import logging
import sys
from typing import Sequence

import click

from . import __version__
from .errors import RecorderError
from .platform.logs import configure_logging
from .platform.wiring import (
    provide_authorize_use_case,
    provide_record_status_use_case,
)
from .settings import get_settings

logger = logging.getLogger(__name__)


@click.group()
@click.version_option(__version__)
@click.option(
    "--log/--no-log",
    "log_to_file",
    default=True,
    show_default=True,
    help="Write log output to the configured log file instead of stdout.",
)
@click.option("-v", "--verbose", is_flag=True, help="Increase verbosity.")
@click.pass_context
def cli(ctx: click.Context, log_to_file: bool, verbose: bool) -> None:
    """Record Withings body measurements into InfluxDB."""
    ctx.ensure_object(dict)
    ctx.obj["log_to_file"] = log_to_file
    ctx.obj["verbose"] = verbose


@cli.command()
def authorize() -> None:
    """Authorize this application and store the first token pair."""
    settings = get_settings()
    try:
        with provide_authorize_use_case(settings) as use_case:
            click.echo("Log in here:")
            click.echo(use_case.authorization_url())
            redirect_url = click.prompt("Then paste the URL where the browser is redirected")
            use_case.complete(redirect_url)
    except RecorderError as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo("authorization successful")


@cli.command("record-status")
@click.option("-d", "--dry-run", is_flag=True, help="Do not write to the database.")
@click.pass_context
def record_status(ctx: click.Context, dry_run: bool) -> None:
    """Record the current measurements to the database."""
    try:
        settings = get_settings()
        configure_logging(
            log_to_file=ctx.obj["log_to_file"],
            log_file=settings.log_file,
            verbose=ctx.obj["verbose"],
        )
    except Exception as exc:
        # Logging may not be configured yet; report on stderr and end the run.
        click.echo(f"withings-recorder: {exc}", err=True)
        return

    # A scheduler runs this periodically: failures end up in the log only.
    try:
        with provide_record_status_use_case(settings, dry_run=dry_run) as use_case:
            report = use_case.run(dry_run=dry_run)
    except Exception:
        logger.exception("record-status failed")
        return

    logger.info(
        "finished after %d attempt(s): %d samples, %d unknown, written=%s",
        report.attempts,
        len(report.samples),
        sum(report.unknown_codes.values()),
        report.written,
    )


def main(argv: Sequence[str] | None = None) -> int:
    """Invoke the Click group and propagate its exit code."""
    args = list(argv) if argv is not None else None

    try:
        cli.main(args=args, prog_name="withings-recorder", standalone_mode=False)
    except click.exceptions.Exit as exc:
        return exc.exit_code
    except click.exceptions.Abort:
        click.echo("Aborted!", err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    return 0


if __name__ == "__main__":  # pragma: no cover - convenience execution path
    sys.exit(main(sys.argv[1:]))
