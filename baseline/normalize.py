"""Canonical catalog keys for raw mentions."""

from __future__ import annotations

from .constants import API_NAMESPACE_PREFIX, CSS_PROPERTY_PREFIX, HTML_ELEMENT_PREFIX
from .model import RawMention

_STYLE_PARENT_SEGMENTS = CSS_PROPERTY_PREFIX.count(".") + 2


def style_key(prop: str, value: str | None = None) -> str:
    base = f"{CSS_PROPERTY_PREFIX}.{prop}"
    if value:
        return f"{base}.{value}"
    return base


def markup_key(tag: str) -> str:
    return f"{HTML_ELEMENT_PREFIX}.{tag}"


def canonical_key(mention: RawMention) -> str:
    """Map a mention to the key used for catalog lookup."""
    if mention.kind == "style":
        return style_key(mention.raw_key, mention.value)
    if mention.kind == "markup":
        return markup_key(mention.raw_key)
    return mention.raw_key


def script_lookup_seed(candidate: str) -> str:
    """Lower-case a script candidate and drop a leading ``api.`` namespace."""
    return candidate.removeprefix(API_NAMESPACE_PREFIX).lower()


def parent_key(key: str) -> str | None:
    """Return the property key of a compound style key, or None.

    Values may themselves contain dots (``css.properties.line-height.1.5``),
    so the parent is cut after the property segment instead of the last dot.
    """
    if not key.startswith(f"{CSS_PROPERTY_PREFIX}."):
        return None
    segments = key.split(".")
    if len(segments) <= _STYLE_PARENT_SEGMENTS:
        return None
    return ".".join(segments[:_STYLE_PARENT_SEGMENTS])
