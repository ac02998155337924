"""Fluent builder producing the `#...` fragment of a chart link."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional, Union

from pydantic import ValidationError

from chart_slug.config import resolve_base_url
from chart_slug.protocol.errors import InvalidArgumentError, InvalidStateError
from chart_slug.protocol.models import (
    DEFAULT_COMPARE,
    DEFAULT_GRANULARITY,
    ChartState,
    SourceQuery,
    TimeRange,
)
from chart_slug.runtime.serialization import percent_encode, stable_slug_dumps

logger = logging.getLogger(__name__)

Instant = Union[int, datetime]

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def to_epoch_millis(value: Instant) -> int:
    """Convert epoch millis or a datetime into epoch millis.

    Naive datetimes are read as UTC.
    """
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return (value - _EPOCH) // timedelta(milliseconds=1)
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    raise InvalidArgumentError(f"expected epoch millis or datetime, got {type(value).__name__}")


class ChartStateBuilder:
    """Accumulates chart parameters; every mutator returns the builder itself.

    >>> ChartStateBuilder().set_name("cpu").add_source("A", "ts(cpu)").build()
    "#(n:cpu,s:!((n:A,q:'ts(cpu)')))"
    """

    def __init__(self) -> None:
        self._state = ChartState()
        self._start_millis: Optional[int] = None
        self._end_millis: Optional[int] = None

    def _assign(self, field_name: str, value: object) -> ChartStateBuilder:
        try:
            setattr(self._state, field_name, value)
        except ValidationError as exc:
            raise InvalidArgumentError(f"invalid {field_name}: {exc}") from exc
        return self

    def set_customer_id(self, customer_id: str) -> ChartStateBuilder:
        return self._assign("customer_id", customer_id)

    def set_id(self, chart_id: str) -> ChartStateBuilder:
        """Chart id; only meaningful when redirected from a dashboard."""
        return self._assign("id", chart_id)

    def set_name(self, name: str) -> ChartStateBuilder:
        return self._assign("name", name)

    def set_granularity(self, granularity: str) -> ChartStateBuilder:
        """Granularity of the whole chart, e.g. "m", "h", "d" or "auto" (the default)."""
        return self._assign("granularity", granularity)

    def set_compare(self, compare: str) -> ChartStateBuilder:
        """Comparison option for the whole chart, e.g. "1d", "1w", "1m"."""
        return self._assign("compare", compare)

    def set_units(self, units: str) -> ChartStateBuilder:
        return self._assign("units", units)

    def set_base(self, base: int) -> ChartStateBuilder:
        """Y-axis base, must be >= 1. A base of 1 means a linear axis."""
        return self._assign("base", base)

    def set_start(self, start: Instant) -> ChartStateBuilder:
        self._start_millis = to_epoch_millis(start)
        return self

    def set_end(self, end: Instant) -> ChartStateBuilder:
        self._end_millis = to_epoch_millis(end)
        return self

    def add_source(
        self,
        name: str,
        query: str,
        disabled: bool = False,
        query_builder_serialization: Optional[str] = None,
        query_builder_enabled: bool = False,
    ) -> ChartStateBuilder:
        try:
            source = SourceQuery(
                name=name,
                query=query,
                disabled=disabled,
                query_builder_serialization=query_builder_serialization,
                query_builder_enabled=query_builder_enabled,
            )
        except ValidationError as exc:
            raise InvalidArgumentError(f"invalid source: {exc}") from exc
        self._state.sources.append(source)
        return self

    def add_focused_host(self, host_name: str) -> ChartStateBuilder:
        """Focus series tagged with this host when the chart loads."""
        if not isinstance(host_name, str) or not host_name:
            raise InvalidArgumentError("focused host name must be a non-empty string")
        self._state.focused_hosts.append(host_name)
        return self

    def _time_range(self) -> Optional[TimeRange]:
        if self._start_millis is None and self._end_millis is None:
            return None
        if self._start_millis is None or self._end_millis is None:
            missing = "start" if self._start_millis is None else "end"
            raise InvalidStateError(f"incomplete time range: {missing} was never set")

        duration = self._end_millis - self._start_millis
        if duration < 0:
            raise InvalidStateError(
                f"time range ends before it starts ({self._end_millis} < {self._start_millis})"
            )
        granularity = self._state.granularity
        compare = self._state.compare
        return TimeRange(
            start_time=self._start_millis,
            duration=duration,
            granularity=DEFAULT_GRANULARITY if granularity is None else granularity,
            compare=DEFAULT_COMPARE if compare is None else compare,
        )

    def snapshot(self) -> ChartState:
        """Return the state `build()` would encode, as a detached copy."""
        time_range = self._time_range()
        if time_range is None:
            return self._state.model_copy(deep=True)
        return self._state.model_copy(
            update={"time_range": time_range, "granularity": None, "compare": None},
            deep=True,
        )

    def build(self) -> str:
        """Return the URL fragment for the chart, `#` included and already URL-encoded."""
        encoded = stable_slug_dumps(self.snapshot().slug_payload())
        fragment = "#" + percent_encode(encoded)
        logger.debug("Built chart fragment %s", fragment)
        return fragment

    def build_url(self, base_url: Optional[str] = None) -> str:
        """Return `base_url` followed by the fragment; falls back to the configured base URL."""
        resolved = resolve_base_url(base_url)
        if not resolved:
            raise InvalidStateError("no base URL given and none configured")
        return resolved + self.build()
