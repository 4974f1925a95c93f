"""
The meta report pipeline: fetch, build rows, render.

MetaOptions carries everything a single invocation needs; run_meta() runs the
three steps in order and writes nothing when Log Cache holds no sources.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Optional, TextIO

import structlog

from .client import LogCacheClient
from .config import DEFAULT_TIMEOUT
from .meta import MetaSource, build_rows, fetch_metadata
from .render import render

LOGGER = structlog.get_logger("lc_meta.report")


@dataclass(frozen=True)
class MetaOptions:
    addr: str
    timeout: timedelta = DEFAULT_TIMEOUT
    no_headers: bool = False
    skip_ssl_validation: bool = False


def run_meta(options: MetaOptions, out: TextIO, client: Optional[MetaSource] = None) -> int:
    """
    Print the metadata table for options.addr to out.

    Args:
        options: Endpoint, timeout and header settings for this run.
        out: Stream the table is written to.
        client: Metadata source; defaults to a LogCacheClient for options.addr.

    Returns:
        Number of rows written (0 when there was nothing to report).

    Raises:
        TransportError: If the metadata request fails.
        RenderError: If the table cannot be written.
    """
    if client is None:
        client = LogCacheClient(options.addr, verify=not options.skip_ssl_validation)
    meta = fetch_metadata(client, options.timeout)
    if not meta:
        LOGGER.debug("meta_empty", addr=options.addr)
        return 0
    rows = build_rows(meta)
    render(rows, not options.no_headers, out)
    return len(rows)
