"""Exceptions raised while fetching and rendering Log Cache metadata."""


class LogCacheError(Exception):
    """Base class for lc-meta failures."""


class NoDataError(LogCacheError):
    """The meta endpoint closed without sending any content."""


class TransportError(LogCacheError):
    """The meta request failed (connection, timeout, HTTP status, bad payload)."""


class RenderError(LogCacheError):
    """Writing the table to the output stream failed."""

    def __init__(self, message: str = "Error writing results") -> None:
        super().__init__(message)
