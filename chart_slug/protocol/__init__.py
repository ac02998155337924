from chart_slug.protocol.errors import (
    INVALID_ARGS,
    INVALID_STATE,
    InvalidArgumentError,
    InvalidStateError,
    SlugError,
)
from chart_slug.protocol.models import (
    DEFAULT_COMPARE,
    DEFAULT_GRANULARITY,
    ChartState,
    SourceQuery,
    TimeRange,
)

__all__ = [
    "ChartState",
    "DEFAULT_COMPARE",
    "DEFAULT_GRANULARITY",
    "INVALID_ARGS",
    "INVALID_STATE",
    "InvalidArgumentError",
    "InvalidStateError",
    "SlugError",
    "SourceQuery",
    "TimeRange",
]
