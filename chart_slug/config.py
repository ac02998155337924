"""Configuration lookup for chart link generation."""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

BASE_URL_ENV = "CHART_SLUG_BASE_URL"


def _load_config_base_url(config_path: Path) -> Optional[str]:
    if not config_path.exists():
        return None

    try:
        config = tomllib.loads(config_path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError) as exc:
        logger.warning("Ignoring unreadable config file %s: %s", config_path, exc)
        return None

    section = config.get("slug", {})
    if not isinstance(section, dict):
        logger.warning("Ignoring [slug] in %s: expected a table, got %s", config_path, type(section).__name__)
        return None

    base_url = section.get("base_url")
    if base_url is None:
        return None
    if not isinstance(base_url, str) or not base_url:
        logger.warning("Ignoring slug.base_url in %s: expected a non-empty string", config_path)
        return None
    return base_url


def resolve_base_url(base_url: Optional[str] = None, config_path: Optional[Path] = None) -> Optional[str]:
    """Return the page URL chart fragments are appended to.

    Precedence: explicit argument, `CHART_SLUG_BASE_URL`, `[slug] base_url` in
    `config.toml`.
    """
    return (
        base_url
        or os.environ.get(BASE_URL_ENV)
        or _load_config_base_url(config_path or Path("config.toml"))
        or None
    )
