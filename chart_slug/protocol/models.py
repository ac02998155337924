
"""Chart state models and their short-key table.

Each field's alias is the key written into the slug. The aliases are part of
the link format: renaming one breaks every link that was already shared.
`ELIDE` maps a field name to a predicate; a field whose value matches its
predicate is left out of the slug.
"""

from typing import Any, Callable, ClassVar, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictInt, StrictStr


DEFAULT_GRANULARITY = "auto"
DEFAULT_COMPARE = "off"


def _equals(default: Any) -> Callable[[Any], bool]:
    return lambda value: value == default


def _empty(value: Any) -> bool:
    return len(value) == 0


class SlugModel(BaseModel):
    ELIDE: ClassVar[Dict[str, Callable[[Any], bool]]] = {}

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    def slug_payload(self) -> Dict[str, Any]:
        """Dump to a plain dict keyed by slug keys, dropping unset and default fields."""
        payload: Dict[str, Any] = {}
        for name, field in type(self).model_fields.items():
            value = getattr(self, name)
            if value is None:
                continue
            elide = self.ELIDE.get(name)
            if elide is not None and elide(value):
                continue
            payload[field.alias or name] = _payload_value(value)
        return payload


def _payload_value(value: Any) -> Any:
    if isinstance(value, SlugModel):
        return value.slug_payload()
    if isinstance(value, list):
        return [_payload_value(item) for item in value]
    return value


class TimeRange(SlugModel):
    """Time window expressed as a start instant plus a duration, both in millis."""

    ELIDE: ClassVar[Dict[str, Callable[[Any], bool]]] = {
        "granularity": _equals(DEFAULT_GRANULARITY),
        "compare": _equals(DEFAULT_COMPARE),
    }

    model_config = ConfigDict(extra="forbid", populate_by_name=True, frozen=True)

    start_time: StrictInt = Field(alias="s")
    duration: StrictInt = Field(alias="d")
    granularity: StrictStr = Field(default=DEFAULT_GRANULARITY, alias="g")
    compare: StrictStr = Field(default=DEFAULT_COMPARE, alias="c")


class SourceQuery(SlugModel):
    """One named query rendered on the chart."""

    ELIDE: ClassVar[Dict[str, Callable[[Any], bool]]] = {
        "disabled": _equals(False),
        "query_builder_enabled": _equals(False),
    }

    model_config = ConfigDict(extra="forbid", populate_by_name=True, frozen=True)

    name: StrictStr = Field(alias="n", min_length=1)
    query: StrictStr = Field(alias="q", min_length=1)
    disabled: StrictBool = Field(default=False, alias="d")
    query_builder_serialization: Optional[StrictStr] = Field(default=None, alias="qb")
    query_builder_enabled: StrictBool = Field(default=False, alias="qbe")


class ChartState(SlugModel):
    """Everything the front end needs to rebuild a chart view.

    `granularity` and `compare` are only written at this level when there is no
    time range; otherwise the builder moves them onto the `TimeRange`.
    """

    ELIDE: ClassVar[Dict[str, Callable[[Any], bool]]] = {
        "granularity": _equals(DEFAULT_GRANULARITY),
        "compare": _equals(DEFAULT_COMPARE),
        "sources": _empty,
        "focused_hosts": _empty,
    }

    model_config = ConfigDict(extra="forbid", populate_by_name=True, validate_assignment=True)

    customer_id: Optional[StrictStr] = Field(default=None, alias="ci")
    id: Optional[StrictStr] = Field(default=None, alias="id")
    name: Optional[StrictStr] = Field(default=None, alias="n")
    time_range: Optional[TimeRange] = Field(default=None, alias="t")
    granularity: Optional[StrictStr] = Field(default=None, alias="g")
    compare: Optional[StrictStr] = Field(default=None, alias="c")
    units: Optional[StrictStr] = Field(default=None, alias="u")
    base: Optional[StrictInt] = Field(default=None, alias="b", ge=1)
    sources: List[SourceQuery] = Field(default_factory=list, alias="s")
    focused_hosts: List[StrictStr] = Field(default_factory=list, alias="fh")
