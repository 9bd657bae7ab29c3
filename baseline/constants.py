"""Constants used across pybaseline."""

from __future__ import annotations

from typing import Final

from .model import SourceKind, SupportTier

DEFAULT_PATTERNS: Final[tuple[str, ...]] = ("**/*.{html,css,js,jsx,ts,tsx}",)
IGNORED_DIRS: Final[frozenset[str]] = frozenset({"node_modules", "dist", ".git"})

SOURCE_KIND_BY_SUFFIX: Final[dict[str, SourceKind]] = {
    ".css": "style",
    ".html": "markup",
    ".htm": "markup",
    ".js": "script",
    ".jsx": "script",
    ".mjs": "script",
    ".cjs": "script",
    ".ts": "script",
    ".tsx": "script",
}

CSS_PROPERTY_PREFIX: Final[str] = "css.properties"
HTML_ELEMENT_PREFIX: Final[str] = "html.elements"
API_NAMESPACE_PREFIX: Final[str] = "api."

# Script types that hold data or templates rather than code.
NON_SCRIPT_TYPES: Final[frozenset[str]] = frozenset(
    {
        "application/json",
        "application/ld+json",
        "importmap",
        "speculationrules",
        "text/template",
        "text/x-template",
        "text/html",
    }
)

DEFAULT_CATALOG_URL: Final[str] = "https://unpkg.com/web-features/data.json"
CATALOG_CACHE_FILENAME: Final[str] = "web-features.json"
CATALOG_CACHE_MAX_AGE_SECONDS: Final[float] = 7 * 24 * 60 * 60
CACHE_DIR_ENV: Final[str] = "PYBASELINE_CACHE_DIR"
DEBUG_ENV: Final[str] = "PYBASELINE_DEBUG"

DEFAULT_TIMEOUT_SECONDS: Final[float] = 30.0
DEFAULT_WORKERS: Final[int] = 8

TIER_ICON_MAP: Final[dict[SupportTier, str]] = {
    "wide": "✅",
    "limited": "◐",
    "none": "❌",
}

TIER_LABEL_MAP: Final[dict[SupportTier, str]] = {
    "wide": "Widely available",
    "limited": "Newly available",
    "none": "Limited availability",
}

TIER_STYLE_MAP: Final[dict[SupportTier, str]] = {
    "wide": "green",
    "limited": "yellow",
    "none": "red",
}

NO_FEATURES_LINE: Final[str] = "No baseline features found."
