"""Data models for sources, mentions, catalog entries and reports."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date
from typing import Literal

from .util.text import parse_catalog_date

SourceKind = Literal["style", "markup", "script"]
SupportTier = Literal["wide", "limited", "none"]


@dataclass(frozen=True)
class SourceUnit:
    path: str
    text: str
    kind: SourceKind


@dataclass(frozen=True)
class RawMention:
    raw_key: str
    kind: SourceKind
    line: int | None = None
    value: str | None = None


@dataclass(frozen=True)
class ScriptCandidate:
    candidate: str
    line: int


@dataclass(frozen=True)
class SupportStatus:
    tier: SupportTier
    wide_since: date | None = None
    limited_since: date | None = None
    engine_support: Mapping[str, str] = field(default_factory=dict)

    @classmethod
    def from_catalog(cls, raw: object, *, as_of: date) -> SupportStatus:
        """Build a status from a web-features status mapping.

        A feature is only ``wide`` when both dates are known and not after
        ``as_of``; ``limited`` keeps only the low date.
        """
        if not isinstance(raw, Mapping):
            return cls(tier="none")

        support = raw.get("support")
        engine_support: dict[str, str] = {}
        if isinstance(support, Mapping):
            engine_support = {
                str(engine): str(version)
                for engine, version in support.items()
                if isinstance(version, str | int | float)
            }

        baseline = raw.get("baseline")
        low_date = parse_catalog_date(raw.get("baseline_low_date"))
        high_date = parse_catalog_date(raw.get("baseline_high_date"))

        if baseline == "high" and low_date and high_date and high_date <= as_of:
            return cls(
                tier="wide",
                wide_since=high_date,
                limited_since=low_date,
                engine_support=engine_support,
            )
        if baseline in {"high", "low"} and low_date and low_date <= as_of:
            return cls(tier="limited", limited_since=low_date, engine_support=engine_support)
        return cls(tier="none", engine_support=engine_support)


@dataclass(frozen=True)
class CatalogFeature:
    id: str
    name: str
    compat_keys: tuple[str, ...] = ()
    status: SupportStatus | None = None
    description: str = ""


@dataclass(frozen=True)
class FeatureRecord:
    canonical_key: str
    used_key: str
    kind: SourceKind
    display_name: str
    status: SupportStatus
    feature_id: str | None = None
    line: int | None = None


@dataclass(frozen=True)
class ReportSummary:
    total: int
    wide: int
    limited: int
    none: int
    score: int


FileReport = list[FeatureRecord]
ScanReport = dict[str, FileReport]
