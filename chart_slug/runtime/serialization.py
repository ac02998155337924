"""Deterministic RISON-style encoding used for chart slugs."""

from __future__ import annotations

from typing import Any, Dict
from urllib.parse import quote


RESERVED_CHARS = frozenset("()',:!*@$")
NON_IDSTART_CHARS = frozenset("-0123456789")
KEYWORDS = frozenset({"true", "false", "null"})

# Characters RISON leaves readable inside a URI; everything else is escaped.
URI_SAFE_CHARS = "~!*()-_.,:@$'/"


def needs_quoting(text: str) -> bool:
    if not text or text in KEYWORDS or text[0] in NON_IDSTART_CHARS:
        return True
    return any(char in RESERVED_CHARS or char.isspace() for char in text)


def quote_string(text: str) -> str:
    if not needs_quoting(text):
        return text
    escaped = text.replace("!", "!!").replace("'", "!'")
    return f"'{escaped}'"


def canonicalize(obj: Any) -> Any:
    """Sort object keys at every depth and drop keys whose value is None.

    List element order is kept as given.
    """
    if isinstance(obj, dict):
        return {key: canonicalize(obj[key]) for key in sorted(obj) if obj[key] is not None}
    if isinstance(obj, (list, tuple)):
        return [canonicalize(item) for item in obj]
    return obj


def encode(obj: Any) -> str:
    """Encode a nested value, emitting object keys in their existing order."""
    if isinstance(obj, dict):
        return _encode_object(obj)
    if isinstance(obj, (list, tuple)):
        return "!(" + ",".join(encode(item) for item in obj) + ")"
    if isinstance(obj, bool):
        return "true" if obj else "false"
    if isinstance(obj, int):
        return str(obj)
    if isinstance(obj, str):
        return quote_string(obj)
    raise TypeError(f"cannot encode value of type {type(obj).__name__}")


def _encode_object(obj: Dict[str, Any]) -> str:
    parts = []
    for key, value in obj.items():
        if value is None:
            continue
        if not isinstance(key, str):
            raise TypeError(f"object keys must be strings, got {type(key).__name__}")
        parts.append(f"{quote_string(key)}:{encode(value)}")
    return "(" + ",".join(parts) + ")"


def percent_encode(text: str) -> str:
    return quote(text, safe=URI_SAFE_CHARS)


def stable_slug_dumps(obj: Any) -> str:
    return encode(canonicalize(obj))
