"""
Constants and runtime settings for lc-meta.

Defines the table layout (column titles, padding), request defaults, and
LogCacheSettings, which reads the Log Cache endpoint from the environment.
"""

from __future__ import annotations

from datetime import timedelta

from pydantic import Field
from pydantic_settings import BaseSettings

# Column titles, in output order.
HEADERS = (
    "RESOURCE",
    "TYPE",
    "NAMESPACE",
    "COUNT",
    "EXPIRED",
    "CACHE DURATION",
)

# Placeholder for key segments that could not be parsed.
NO_VALUE = "-"

# Spaces added after the widest cell of each column.
TAB_PADDING = 3

DEFAULT_TIMEOUT = timedelta(seconds=2)

# Upper bound for --timeout; larger values do not fit socket timeouts.
MAX_TIMEOUT = timedelta(days=365)

# Display floor for cache durations.
MIN_DISPLAY_DURATION = timedelta(seconds=1)

# Log Cache HTTP gateway route for source metadata.
META_PATH = "/api/v1/meta"


class LogCacheSettings(BaseSettings):
    """Endpoint and logging settings, read from LOG_CACHE_* environment variables."""

    addr: str = Field(..., validation_alias="LOG_CACHE_ADDR")
    skip_ssl_validation: bool = Field(False, validation_alias="LOG_CACHE_SKIP_SSL_VALIDATION")
    log_level: str = Field("WARNING", validation_alias="LOG_CACHE_LOG_LEVEL")
