"""Error codes and exceptions raised while building chart slugs."""

from __future__ import annotations

INVALID_ARGS = "INVALID_ARGS"
INVALID_STATE = "INVALID_STATE"


class SlugError(Exception):
    """Base error for chart slug failures. `code` is a stable string constant."""

    code = "SLUG_ERROR"


class InvalidArgumentError(SlugError, ValueError):
    code = INVALID_ARGS


class InvalidStateError(SlugError, RuntimeError):
    code = INVALID_STATE
