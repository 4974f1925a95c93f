"""
Metadata logic: fetch source metadata and turn it into sorted table rows.

fetch_metadata() wraps the single Log Cache request, build_rows() parses
source IDs and computes the cache duration of each source.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Protocol

import structlog

from .client import MetaInfo
from .config import MIN_DISPLAY_DURATION, NO_VALUE
from .errors import NoDataError

LOGGER = structlog.get_logger("lc_meta.meta")

_NANOS_PER_SECOND = 1_000_000_000


class MetaSource(Protocol):
    def meta(self, timeout: float) -> dict[str, MetaInfo]: ...


@dataclass(frozen=True)
class Row:
    """One table line per Log Cache source."""

    resource_name: str
    resource_type: str
    namespace: str
    count: int
    expired: int
    duration: timedelta

    def sort_key(self) -> tuple[str, str, str]:
        return (self.namespace, self.resource_name, self.resource_type)


def fetch_metadata(client: MetaSource, timeout: timedelta) -> dict[str, MetaInfo]:
    """
    Request metadata once, treating an end-of-stream reply as "no sources".

    Args:
        client: Anything with a meta(timeout) method, usually LogCacheClient.
        timeout: Request deadline.

    Returns:
        Mapping of source ID to MetaInfo, possibly empty.

    Raises:
        TransportError: If the request fails for any other reason.
    """
    try:
        meta = client.meta(timeout.total_seconds())
    except NoDataError:
        LOGGER.debug("meta_no_data")
        return {}
    LOGGER.debug("meta_fetched", sources=len(meta))
    return meta


def source_parts(source_id: str) -> tuple[str, str, str]:
    """
    Split "namespace/type/name" into (name, type, namespace).

    IDs that do not have exactly three segments come back whole as the name,
    with "-" for type and namespace.
    """
    parts = source_id.split("/")
    if len(parts) != 3:
        return source_id, NO_VALUE, NO_VALUE
    return parts[2], parts[1], parts[0]


def cache_duration(info: MetaInfo) -> timedelta:
    """Span between oldest and newest timestamp, truncated toward zero to whole seconds."""
    nanos = info.newest_timestamp - info.oldest_timestamp
    seconds = abs(nanos) // _NANOS_PER_SECOND
    return timedelta(seconds=seconds if nanos >= 0 else -seconds)


def display_duration(duration: timedelta) -> timedelta:
    """Clamp a cache duration to the one-second display floor."""
    return max(MIN_DISPLAY_DURATION, duration)


def build_rows(meta: dict[str, MetaInfo]) -> list[Row]:
    """
    Build one Row per source, sorted by namespace, resource name, then type.

    Args:
        meta: Mapping of source ID to MetaInfo from fetch_metadata().

    Returns:
        Rows in display order; always len(meta) of them.
    """
    rows = []
    for source_id, info in meta.items():
        name, rtype, namespace = source_parts(source_id)
        rows.append(
            Row(
                resource_name=name,
                resource_type=rtype,
                namespace=namespace,
                count=info.count,
                expired=info.expired,
                duration=cache_duration(info),
            )
        )
    rows.sort(key=Row.sort_key)
    return rows
