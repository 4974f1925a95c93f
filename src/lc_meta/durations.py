"""Parsing and formatting of compact duration strings such as "2s", "1m30s", "500ms"."""

from __future__ import annotations

import re
from datetime import timedelta

_UNITS = {
    "us": timedelta(microseconds=1),
    "µs": timedelta(microseconds=1),
    "μs": timedelta(microseconds=1),
    "ms": timedelta(milliseconds=1),
    "s": timedelta(seconds=1),
    "m": timedelta(minutes=1),
    "h": timedelta(hours=1),
}

_COMPONENT = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(us|µs|μs|ms|s|m|h)")


def parse_duration(text: str) -> timedelta:
    """
    Parse a duration like "2s", "1m30s", "1.5h" or "250ms".

    A bare number is taken as seconds. Resolution is one microsecond, so
    there is no "ns" unit. Raises ValueError on anything else, including
    values too large for a timedelta.
    """
    value = text.strip()
    if not value:
        raise ValueError("empty duration")
    sign = 1
    if value[0] in "+-":
        sign = -1 if value[0] == "-" else 1
        value = value[1:]
    try:
        return sign * timedelta(seconds=float(value))
    except (ValueError, OverflowError):
        pass

    total = timedelta()
    pos = 0
    while pos < len(value):
        match = _COMPONENT.match(value, pos)
        if match is None:
            raise ValueError(f"invalid duration {text!r}")
        try:
            total += float(match.group(1)) * _UNITS[match.group(2)]
        except OverflowError as exc:
            raise ValueError(f"duration {text!r} is out of range") from exc
        pos = match.end()
    return sign * total


def _decimal(value: int, unit: int) -> str:
    whole, rem = divmod(value, unit)
    if not rem:
        return str(whole)
    digits = len(str(unit)) - 1
    return f"{whole}.{rem:0{digits}d}".rstrip("0")


def format_duration(d: timedelta) -> str:
    """Format a timedelta the way Go prints a time.Duration ("5s", "3m0s", "1h2m3s")."""
    us = d // timedelta(microseconds=1)
    if us == 0:
        return "0s"
    sign = "-" if us < 0 else ""
    us = abs(us)
    if us < 1000:
        return f"{sign}{us}µs"
    if us < 1_000_000:
        return f"{sign}{_decimal(us, 1000)}ms"

    secs, frac = divmod(us, 1_000_000)
    hours, rem = divmod(secs, 3600)
    minutes, seconds = divmod(rem, 60)
    sec = _decimal(seconds * 1_000_000 + frac, 1_000_000)
    if hours:
        return f"{sign}{hours}h{minutes}m{sec}s"
    if minutes:
        return f"{sign}{minutes}m{sec}s"
    return f"{sign}{sec}s"
