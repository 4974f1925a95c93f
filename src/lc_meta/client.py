"""
Log Cache HTTP client and metadata payload decoding.

All service access goes through LogCacheClient.meta(), which issues a single
GET against the gateway's meta route. Failures are raised as lc_meta.errors
exceptions so callers never deal with httpx types directly.
"""

from __future__ import annotations

import json
import time
from dataclasses import dataclass
from typing import Any, Optional

import httpx
import structlog

from .config import META_PATH
from .errors import NoDataError, TransportError

LOGGER = structlog.get_logger("lc_meta.client")


@dataclass(frozen=True)
class MetaInfo:
    """Per-source summary returned by Log Cache. Timestamps are epoch nanoseconds."""

    count: int = 0
    expired: int = 0
    oldest_timestamp: int = 0
    newest_timestamp: int = 0

    @classmethod
    def from_json(cls, payload: dict[str, Any]) -> "MetaInfo":
        # int64 fields arrive as strings under the protobuf JSON mapping.
        return cls(
            count=int(payload.get("count") or 0),
            expired=int(payload.get("expired") or 0),
            oldest_timestamp=int(payload.get("oldestTimestamp") or 0),
            newest_timestamp=int(payload.get("newestTimestamp") or 0),
        )


def decode_meta(payload: Any) -> dict[str, MetaInfo]:
    """
    Decode a meta response body into MetaInfo values keyed by source ID.

    Args:
        payload: Parsed JSON, expected as {"meta": {source_id: {...}}}.

    Returns:
        Mapping of source ID to MetaInfo; empty when "meta" is missing or null.

    Raises:
        TransportError: If the payload does not have the expected shape.
    """
    if not isinstance(payload, dict):
        raise TransportError(f"unexpected meta response: {payload!r}")
    meta = payload.get("meta") or {}
    if not isinstance(meta, dict):
        raise TransportError(f"unexpected meta response: {payload!r}")
    try:
        return {source_id: MetaInfo.from_json(info or {}) for source_id, info in meta.items()}
    except (TypeError, ValueError, AttributeError) as exc:
        raise TransportError(f"invalid meta info: {exc}") from exc


def _check_deadline(deadline: float, timeout: float, url: str) -> None:
    if time.monotonic() > deadline:
        raise TransportError(f"deadline of {timeout:g}s exceeded requesting {url}")


class LogCacheClient:
    """Minimal client for the Log Cache gateway, bound to one address."""

    def __init__(
        self,
        addr: str,
        *,
        verify: bool = True,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.addr = addr.rstrip("/")
        self.verify = verify
        self.transport = transport

    def meta(self, timeout: float) -> dict[str, MetaInfo]:
        """
        Fetch metadata for every source held by Log Cache.

        Args:
            timeout: Deadline for the whole exchange, in seconds, from before
                the request until the body is read.

        Returns:
            Mapping of source ID to MetaInfo.

        Raises:
            NoDataError: If the server closed the response without content.
            TransportError: On connection errors, timeouts, non-2xx statuses,
                or an undecodable body.
        """
        url = f"{self.addr}{META_PATH}"
        LOGGER.debug("meta_request", url=url, timeout=timeout)
        deadline = time.monotonic() + timeout
        chunks: list[bytes] = []
        try:
            with httpx.Client(timeout=timeout, verify=self.verify, transport=self.transport) as client:
                with client.stream("GET", url) as response:
                    response.raise_for_status()
                    for chunk in response.iter_bytes():
                        chunks.append(chunk)
                        _check_deadline(deadline, timeout, url)
        except httpx.TimeoutException as exc:
            raise TransportError(f"timed out after {timeout:g}s requesting {url}: {exc}") from exc
        except httpx.HTTPError as exc:
            raise TransportError(str(exc)) from exc
        _check_deadline(deadline, timeout, url)

        body = b"".join(chunks)
        LOGGER.debug("meta_response", status=response.status_code, bytes=len(body))
        if not body.strip():
            raise NoDataError("empty meta response")
        try:
            payload = json.loads(body)
        except ValueError as exc:
            raise TransportError(f"invalid meta response: {exc}") from exc
        return decode_meta(payload)
