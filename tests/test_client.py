"""Tests for the Log Cache HTTP client."""

import json
from types import SimpleNamespace

import httpx
import pytest

from lc_meta import client as client_module
from lc_meta.client import LogCacheClient, MetaInfo, decode_meta
from lc_meta.errors import NoDataError, TransportError


def _client(handler):
    return LogCacheClient("https://log-cache.example.com/", transport=httpx.MockTransport(handler))


def test_meta_requests_meta_route():
    """The client GETs /api/v1/meta on the configured address."""
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json={"meta": {}})

    assert _client(handler).meta(2.0) == {}
    assert seen[0].method == "GET"
    assert str(seen[0].url) == "https://log-cache.example.com/api/v1/meta"


def test_meta_decodes_string_and_numeric_fields():
    """int64 fields are accepted both as JSON strings and numbers."""
    body = {
        "meta": {
            "ns1/gauge/cpu": {
                "count": "10",
                "expired": "2",
                "oldestTimestamp": "0",
                "newestTimestamp": "5000000000",
            },
            "ns1/pod/web": {"count": 3, "newestTimestamp": 1000},
        }
    }

    def handler(request):
        return httpx.Response(200, json=body)

    meta = _client(handler).meta(2.0)
    assert meta["ns1/gauge/cpu"] == MetaInfo(count=10, expired=2, oldest_timestamp=0, newest_timestamp=5_000_000_000)
    assert meta["ns1/pod/web"] == MetaInfo(count=3, expired=0, oldest_timestamp=0, newest_timestamp=1000)


def test_meta_empty_body_is_no_data():
    """A response with no content signals end-of-stream."""

    def handler(request):
        return httpx.Response(200, content=b"")

    with pytest.raises(NoDataError):
        _client(handler).meta(2.0)


def test_meta_timeout_is_transport_error():
    """Timeouts surface as TransportError."""

    def handler(request):
        raise httpx.ReadTimeout("read timed out", request=request)

    with pytest.raises(TransportError, match="timed out"):
        _client(handler).meta(0.5)


def test_meta_connection_error_keeps_message():
    """Connection failures keep the underlying message."""

    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(TransportError, match="connection refused"):
        _client(handler).meta(2.0)


def test_meta_http_status_error():
    """Non-2xx responses are transport errors."""

    def handler(request):
        return httpx.Response(503, text="unavailable")

    with pytest.raises(TransportError, match="503"):
        _client(handler).meta(2.0)


def test_meta_invalid_json():
    """An undecodable body is a transport error."""

    def handler(request):
        return httpx.Response(200, content=b"not json")

    with pytest.raises(TransportError):
        _client(handler).meta(2.0)


def test_decode_meta_missing_or_null():
    """A missing or null meta object decodes to an empty mapping."""
    assert decode_meta({}) == {}
    assert decode_meta(json.loads('{"meta": null}')) == {}


def test_decode_meta_rejects_bad_shapes():
    """Unexpected payload shapes are transport errors."""
    with pytest.raises(TransportError):
        decode_meta([])
    with pytest.raises(TransportError):
        decode_meta({"meta": ["x"]})
    with pytest.raises(TransportError):
        decode_meta({"meta": {"a/b/c": {"count": "ten"}}})


def _fake_clock(monkeypatch, step):
    ticks = iter(i * step for i in range(1000))
    monkeypatch.setattr(client_module, "time", SimpleNamespace(monotonic=lambda: next(ticks)))


def test_meta_slow_body_exceeds_deadline(monkeypatch):
    """A body that trickles in past the deadline fails even though each read is quick."""
    _fake_clock(monkeypatch, 0.4)

    def handler(request):
        return httpx.Response(200, content=iter([b'{"meta"', b": ", b"{}", b"}"]))

    with pytest.raises(TransportError, match="deadline of 1s exceeded"):
        _client(handler).meta(1.0)


def test_meta_body_within_deadline(monkeypatch):
    """A chunked body read inside the deadline decodes normally."""
    _fake_clock(monkeypatch, 0.1)

    def handler(request):
        return httpx.Response(200, content=iter([b'{"meta": {"a/b/c": ', b'{"count": "1"}}}']))

    assert _client(handler).meta(1.0) == {"a/b/c": MetaInfo(count=1)}
