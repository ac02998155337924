"""Chart link fragments: build the `#...` part of a chart URL from chart parameters."""

from chart_slug.protocol.errors import InvalidArgumentError, InvalidStateError, SlugError
from chart_slug.runtime.builder import ChartStateBuilder

__all__ = [
    "ChartStateBuilder",
    "InvalidArgumentError",
    "InvalidStateError",
    "SlugError",
]
