"""Resolution of canonical keys and script candidates against the catalog."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache

from .catalog import Catalog
from .model import CatalogFeature, FeatureRecord, SourceKind, SupportStatus
from .normalize import parent_key, script_lookup_seed
from .util.log import debug_log

_UNKNOWN_STATUS = SupportStatus(tier="none")

# Script match ranks, lower wins; equal ranks fall back to catalog order.
_RANK_EXACT = 0
_RANK_COMPAT_KEY = 1
_RANK_SUBSTRING = 2


@dataclass(frozen=True)
class _SearchEntry:
    feature: CatalogFeature
    id: str
    name: str
    compat_keys: tuple[str, ...]


class Resolver:
    """Turn canonical keys into feature records using a read-only catalog."""

    def __init__(self, catalog: Catalog) -> None:
        self._catalog = catalog
        self._search_entries = tuple(
            _SearchEntry(
                feature=feature,
                id=feature.id.lower(),
                name=feature.name.lower(),
                compat_keys=tuple(key.lower() for key in feature.compat_keys),
            )
            for feature in catalog.features
        )
        # Thread-safe memo shared by scan workers; matching itself is pure.
        self._script_match = lru_cache(maxsize=None)(self._match_script_seed)

    def resolve(
        self, key: str, kind: SourceKind, line: int | None = None
    ) -> FeatureRecord | None:
        """Resolve one key; None means the mention should be dropped."""
        if kind == "script":
            return self._resolve_script(key, line)
        return self._resolve_keyed(key, kind, line)

    def _status_of(self, key: str) -> SupportStatus | None:
        try:
            return self._catalog.status_of(key)
        except Exception as exc:
            debug_log("status lookup failed for %s: %s", key, exc)
            return None

    def _resolve_keyed(
        self, key: str, kind: SourceKind, line: int | None
    ) -> FeatureRecord | None:
        used_key = key
        status = self._status_of(key)

        if status is None:
            parent = parent_key(key)
            if parent is not None:
                status = self._status_of(parent)
                if status is not None:
                    used_key = parent

        if status is None:
            for feature in self._catalog.features_listing(key):
                if feature.status is None:
                    continue
                status = feature.status
                used_key = feature.compat_keys[0] if feature.compat_keys else used_key
                break

        if status is None:
            return None

        feature = self._display_feature(used_key)
        return FeatureRecord(
            canonical_key=key,
            used_key=used_key,
            kind=kind,
            display_name=feature.name if feature else used_key,
            status=status,
            feature_id=feature.id if feature else None,
            line=line,
        )

    def _display_feature(self, used_key: str) -> CatalogFeature | None:
        """First feature in catalog order listing the key or named after it."""
        candidates = list(self._catalog.features_listing(used_key))
        for feature_id in (used_key, used_key.split(".", 1)[0]):
            feature = self._catalog.feature(feature_id)
            if feature is not None:
                candidates.append(feature)
        if not candidates:
            return None
        return min(candidates, key=self._catalog_order)

    def _catalog_order(self, feature: CatalogFeature) -> int:
        position = self._catalog.position(feature.id)
        return len(self._catalog) if position is None else position

    def _resolve_script(self, candidate: str, line: int | None) -> FeatureRecord | None:
        seed = script_lookup_seed(candidate)
        if not seed:
            return None

        feature = self._script_match(seed)
        if feature is None:
            return None

        return FeatureRecord(
            canonical_key=candidate,
            used_key=candidate,
            kind="script",
            display_name=feature.name,
            status=feature.status or _UNKNOWN_STATUS,
            feature_id=feature.id,
            line=line,
        )

    def _match_script_seed(self, seed: str) -> CatalogFeature | None:
        best: CatalogFeature | None = None
        best_rank = _RANK_SUBSTRING + 1
        suffix = f".{seed}"
        for entry in self._search_entries:
            if seed == entry.id or seed == entry.name:
                rank = _RANK_EXACT
            elif any(key == seed or key.endswith(suffix) for key in entry.compat_keys):
                rank = _RANK_COMPAT_KEY
            elif (
                seed in entry.id
                or seed in entry.name
                or any(seed in key for key in entry.compat_keys)
            ):
                rank = _RANK_SUBSTRING
            else:
                continue
            if rank < best_rank:
                best, best_rank = entry.feature, rank
                if rank == _RANK_EXACT:
                    break
        return best
