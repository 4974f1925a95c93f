"""
CLI entry point for lc-meta.

Reads the Log Cache address from LOG_CACHE_ADDR, parses options, then
delegates to run_meta(). Prints nothing when Log Cache holds no sources.
"""

from __future__ import annotations

import sys
from datetime import timedelta
from typing import Optional

import click
from pydantic import ValidationError

from .config import DEFAULT_TIMEOUT, MAX_TIMEOUT, LogCacheSettings
from .durations import format_duration, parse_duration
from .errors import LogCacheError
from .log import configure_logging
from .report import MetaOptions, run_meta

# Shown at the bottom of lc-meta --help / lc-meta -h
EPILOG = """
Examples:

  lc-meta                        # Table of every source held by Log Cache
  lc-meta --no-headers           # Same, without the header line
  lc-meta --timeout 10s          # Allow the request up to 10 seconds
  lc-meta -v                     # Log request details to stderr

Set LOG_CACHE_ADDR to the Log Cache gateway URL first.
"""


class DurationType(click.ParamType):
    """Click parameter accepting "2s", "500ms", "1m30s" or a number of seconds."""

    name = "duration"

    def convert(self, value, param, ctx) -> timedelta:
        if isinstance(value, timedelta):
            return value
        try:
            duration = parse_duration(str(value))
        except ValueError:
            self.fail(f"{value!r} is not a valid duration", param, ctx)
        if duration <= timedelta(0):
            self.fail(f"{value!r} must be greater than zero", param, ctx)
        if duration > MAX_TIMEOUT:
            self.fail(f"{value!r} must be at most {format_duration(MAX_TIMEOUT)}", param, ctx)
        return duration


@click.command(
    context_settings={"help_option_names": ["-h", "--help"]},
    epilog=EPILOG,
)
@click.option(
    "--timeout",
    type=DurationType(),
    default=format_duration(DEFAULT_TIMEOUT),
    show_default=True,
    help="Deadline for the metadata request",
)
@click.option(
    "--no-headers",
    is_flag=True,
    help="Omit the header line",
)
@click.option(
    "-v",
    "--verbose",
    is_flag=True,
    help="Log request details to stderr",
)
def main(timeout: timedelta, no_headers: bool, verbose: bool) -> Optional[int]:
    """
    List cluster logs and metrics held by Log Cache.

    Shows, per source, the record count, the expired count, and how much
    time the cached records span, sorted by namespace, resource, and type.
    """
    try:
        settings = LogCacheSettings()
    except ValidationError:
        raise click.UsageError("LOG_CACHE_ADDR must be set to the Log Cache address")

    configure_logging("DEBUG" if verbose else settings.log_level)

    options = MetaOptions(
        addr=settings.addr,
        timeout=timeout,
        no_headers=no_headers,
        skip_ssl_validation=settings.skip_ssl_validation,
    )
    try:
        run_meta(options, sys.stdout)
    except LogCacheError as exc:
        raise click.ClickException(str(exc)) from exc

    return 0


if __name__ == "__main__":
    sys.exit(main())
