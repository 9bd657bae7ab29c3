"""Scan pipeline: extraction, resolution and aggregation per source unit."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from .aggregate import dedupe_records
from .catalog import Catalog
from .constants import DEFAULT_WORKERS
from .discovery import discover_sources
from .extract_markup import extract_markup_mentions
from .extract_script import extract_script_mentions
from .extract_style import extract_style_mentions
from .model import FeatureRecord, RawMention, ScanReport, SourceUnit
from .normalize import canonical_key
from .resolve import Resolver
from .util.log import debug_log


def extract_mentions(unit: SourceUnit) -> list[RawMention]:
    """Dispatch a unit to the extractor for its kind."""
    if unit.kind == "style":
        return extract_style_mentions(unit.text)
    if unit.kind == "markup":
        return extract_markup_mentions(unit.text)
    return extract_script_mentions(unit.text)


def scan_unit(unit: SourceUnit, resolver: Resolver) -> list[FeatureRecord]:
    """Resolve every mention of one unit into a deduplicated file report."""
    records: list[FeatureRecord] = []
    seen: set[tuple[str, str]] = set()
    for mention in extract_mentions(unit):
        key = canonical_key(mention)
        if (key, mention.kind) in seen:
            continue
        seen.add((key, mention.kind))
        record = resolver.resolve(key, mention.kind, mention.line)
        if record is not None:
            records.append(record)
    return dedupe_records(records)


def _scan_isolated(unit: SourceUnit, resolver: Resolver) -> list[FeatureRecord]:
    try:
        return scan_unit(unit, resolver)
    except Exception as exc:
        debug_log("skipping %s after scan failure: %s", unit.path, exc)
        return []


def scan_units(
    units: Iterable[SourceUnit],
    catalog: Catalog,
    *,
    workers: int = DEFAULT_WORKERS,
) -> ScanReport:
    """Scan pre-read units; files without resolved features are omitted.

    The report is keyed by path in sorted order regardless of which worker
    finishes first.
    """
    resolver = Resolver(catalog)
    unit_list = list(units)
    if workers <= 1 or len(unit_list) <= 1:
        results = [_scan_isolated(unit, resolver) for unit in unit_list]
    else:
        with ThreadPoolExecutor(max_workers=workers) as executor:
            results = list(executor.map(lambda unit: _scan_isolated(unit, resolver), unit_list))

    report: ScanReport = {}
    for unit, records in sorted(zip(unit_list, results), key=lambda item: item[0].path):
        if records and unit.path not in report:
            report[unit.path] = records
    return report


def scan(
    patterns: Sequence[str] | None = None,
    *,
    catalog: Catalog,
    root: str | Path = ".",
    workers: int = DEFAULT_WORKERS,
) -> ScanReport:
    """Discover files under ``root`` and return their per-file feature reports."""
    units = discover_sources(patterns, root=root)
    debug_log("scanning %d files with %d workers", len(units), workers)
    return scan_units(units, catalog, workers=workers)
