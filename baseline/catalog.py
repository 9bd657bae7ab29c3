"""Catalog adapter over the web-features data set."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import date
import hashlib
import json
import os
import time
from pathlib import Path
from typing import Any

from .constants import (
    CACHE_DIR_ENV,
    CATALOG_CACHE_FILENAME,
    CATALOG_CACHE_MAX_AGE_SECONDS,
    DEFAULT_CATALOG_URL,
    DEFAULT_TIMEOUT_SECONDS,
)
from .exceptions import BaselineError, CatalogError
from .http import fetch_catalog_payload
from .model import CatalogFeature, SupportStatus
from .util.log import LOGGER, debug_log

_SKIPPED_KINDS = frozenset({"moved", "split"})


class Catalog:
    """Read-only view of feature entries and per-key support statuses.

    Features keep the insertion order of the source payload, which is the
    order every "first match" search walks.
    """

    def __init__(
        self,
        features: Iterable[CatalogFeature],
        statuses: Mapping[str, SupportStatus],
        *,
        as_of: date,
    ) -> None:
        self.as_of = as_of
        self._features = tuple(features)
        self._statuses = dict(statuses)
        self._by_id: dict[str, CatalogFeature] = {}
        self._positions: dict[str, int] = {}
        self._by_compat_key: dict[str, list[CatalogFeature]] = {}

        for position, feature in enumerate(self._features):
            if feature.id in self._by_id:
                continue
            self._by_id[feature.id] = feature
            self._positions[feature.id] = position
            for key in dict.fromkeys(feature.compat_keys):
                self._by_compat_key.setdefault(key, []).append(feature)

    def __len__(self) -> int:
        return len(self._features)

    @property
    def features(self) -> tuple[CatalogFeature, ...]:
        return self._features

    def status_of(self, key: str) -> SupportStatus | None:
        """Return the support status indexed for a compat key, or None."""
        return self._statuses.get(key)

    def feature(self, feature_id: str) -> CatalogFeature | None:
        return self._by_id.get(feature_id)

    def features_listing(self, key: str) -> tuple[CatalogFeature, ...]:
        """Return features whose compat key list contains ``key``, in catalog order."""
        return tuple(self._by_compat_key.get(key, ()))

    def position(self, feature_id: str) -> int | None:
        return self._positions.get(feature_id)

    @classmethod
    def from_payload(
        cls,
        payload: Mapping[str, Any],
        *,
        as_of: date | None = None,
        source: str = "payload",
    ) -> Catalog:
        """Build a catalog from a web-features ``data.json`` mapping."""
        raw_features = payload.get("features")
        if not isinstance(raw_features, Mapping):
            raise CatalogError(source, "missing 'features' mapping")

        as_of = as_of or date.today()
        features: list[CatalogFeature] = []
        statuses: dict[str, SupportStatus] = {}

        for feature_id, entry in raw_features.items():
            if not isinstance(feature_id, str) or not isinstance(entry, Mapping):
                continue
            if entry.get("kind") in _SKIPPED_KINDS:
                continue

            raw_name = entry.get("name")
            name = raw_name.strip() if isinstance(raw_name, str) else ""
            raw_description = entry.get("description")
            description = raw_description.strip() if isinstance(raw_description, str) else ""
            raw_keys = entry.get("compat_features")
            compat_keys = (
                tuple(key for key in raw_keys if isinstance(key, str))
                if isinstance(raw_keys, list)
                else ()
            )

            raw_status = entry.get("status")
            status: SupportStatus | None = None
            if isinstance(raw_status, Mapping):
                status = SupportStatus.from_catalog(raw_status, as_of=as_of)
                by_compat_key = raw_status.get("by_compat_key")
                if isinstance(by_compat_key, Mapping):
                    for key, key_status in by_compat_key.items():
                        if isinstance(key, str) and key not in statuses:
                            statuses[key] = SupportStatus.from_catalog(key_status, as_of=as_of)

            features.append(
                CatalogFeature(
                    id=feature_id,
                    name=name or feature_id,
                    compat_keys=compat_keys,
                    status=status,
                    description=description,
                )
            )

        debug_log("catalog %s: %d features, %d compat keys", source, len(features), len(statuses))
        return cls(features, statuses, as_of=as_of)


def cache_dir() -> Path:
    """Directory used for downloaded catalog payloads."""
    configured = os.environ.get(CACHE_DIR_ENV, "").strip()
    if configured:
        return Path(configured).expanduser()
    return Path.home() / ".cache" / "pybaseline"


def catalog_cache_path(url: str) -> Path:
    if url == DEFAULT_CATALOG_URL:
        return cache_dir() / CATALOG_CACHE_FILENAME
    digest = hashlib.sha256(url.encode("utf-8")).hexdigest()[:12]
    return cache_dir() / f"web-features-{digest}.json"


def _read_json_file(path: Path, source: str) -> dict[str, Any]:
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise CatalogError(source, exc.strerror or exc.__class__.__name__) from exc
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise CatalogError(source, "invalid JSON") from exc
    if not isinstance(payload, dict):
        raise CatalogError(source, "expected a JSON object")
    return payload


def _cache_age(path: Path) -> float | None:
    try:
        return time.time() - path.stat().st_mtime
    except OSError:
        return None


def _load_remote_payload(
    url: str, *, refresh: bool, timeout: float, max_age: float
) -> dict[str, Any]:
    cache_path = catalog_cache_path(url)
    cached: dict[str, Any] | None = None
    if not refresh and cache_path.is_file():
        try:
            cached = _read_json_file(cache_path, str(cache_path))
        except CatalogError as exc:
            debug_log("discarding cached catalog: %s", exc)
        else:
            age = _cache_age(cache_path)
            if age is not None and age <= max_age:
                return cached
            debug_log("cached catalog %s is older than %.0f seconds", cache_path, max_age)

    try:
        raw, payload = fetch_catalog_payload(url, timeout=timeout)
    except BaselineError as exc:
        if cached is None:
            raise
        LOGGER.warning("Using stale cached catalog %s: %s", cache_path, exc)
        return cached
    try:
        cache_path.parent.mkdir(parents=True, exist_ok=True)
        cache_path.write_text(raw, encoding="utf-8")
    except OSError as exc:
        debug_log("unable to cache catalog at %s: %s", cache_path, exc)
    return payload


def load_catalog(
    source: str | None = None,
    *,
    refresh: bool = False,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
    as_of: date | None = None,
    max_age: float = CATALOG_CACHE_MAX_AGE_SECONDS,
) -> Catalog:
    """Load the catalog from a local JSON file or an http(s) URL.

    Downloads are cached on disk and reused while younger than ``max_age``
    seconds. A stale cache is refreshed, and kept when the refresh fails.
    """
    location = source or DEFAULT_CATALOG_URL
    if location.startswith(("http://", "https://")):
        payload = _load_remote_payload(
            location, refresh=refresh, timeout=timeout, max_age=max_age
        )
    else:
        payload = _read_json_file(Path(location).expanduser(), location)
    return Catalog.from_payload(payload, as_of=as_of, source=location)
