"""Table output for metadata rows."""

from __future__ import annotations

from typing import Sequence, TextIO

from .config import HEADERS, TAB_PADDING
from .durations import format_duration
from .errors import RenderError
from .meta import Row, display_duration
from .tabular import TabWriter


def render(rows: Sequence[Row], include_header: bool, out: TextIO) -> None:
    """
    Write rows as an aligned table, optionally preceded by the header line.

    Raises:
        RenderError: If writing to or flushing the stream fails.
    """
    tw = TabWriter(out, padding=TAB_PADDING)
    if include_header:
        tw.add_row(HEADERS)
    for r in rows:
        tw.add_row(
            [
                r.resource_name,
                r.resource_type,
                r.namespace,
                r.count,
                r.expired,
                format_duration(display_duration(r.duration)),
            ]
        )
    try:
        tw.flush()
    except (OSError, ValueError) as exc:
        raise RenderError() from exc
