"""Text utility helpers."""

from __future__ import annotations

from datetime import date
import re

_WHITESPACE_RE = re.compile(r"\s+")


def normalize_whitespace(value: str) -> str:
    """Collapse repeated whitespace and trim ends."""
    return _WHITESPACE_RE.sub(" ", value).strip()


def clean_date(value: object) -> str | None:
    """Strip ranged-date markers such as ``≤2020-03-24``."""
    if not isinstance(value, str):
        return None
    cleaned = value.strip().lstrip("≤").strip()
    return cleaned or None


def parse_catalog_date(value: object) -> date | None:
    """Parse an ISO catalog date, returning None for missing or malformed values."""
    cleaned = clean_date(value)
    if cleaned is None:
        return None
    try:
        return date.fromisoformat(cleaned)
    except ValueError:
        return None


def ellipsize(value: str, width: int) -> str:
    """Shorten long strings while preserving suffix visibility."""
    if width <= 0:
        return ""
    if len(value) <= width:
        return value
    if width <= 1:
        return "…"
    return f"{value[: width - 1]}…"
