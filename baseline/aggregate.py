"""Deduplication, summary counts and the baseline score."""

from __future__ import annotations

from collections.abc import Iterable
import json
import math

from .model import FeatureRecord, ReportSummary, ScanReport


def _dedupe_key(record: FeatureRecord) -> str:
    return json.dumps([record.used_key, record.kind])


def dedupe_records(records: Iterable[FeatureRecord]) -> list[FeatureRecord]:
    """Keep the first record per (used key, kind), preserving discovery order."""
    seen: set[str] = set()
    output: list[FeatureRecord] = []
    for record in records:
        key = _dedupe_key(record)
        if key in seen:
            continue
        seen.add(key)
        output.append(record)
    return output


def baseline_score(wide: int, limited: int, total: int) -> int:
    """Percentage of baseline coverage, counting newly available features as half.

    Rounds half up, so 62.5 scores 63. An empty report scores 100.
    """
    if total <= 0:
        return 100
    return math.floor(100 * (wide + 0.5 * limited) / total + 0.5)


def summarize(records: Iterable[FeatureRecord]) -> ReportSummary:
    counts = {"wide": 0, "limited": 0, "none": 0}
    for record in records:
        counts[record.status.tier] += 1
    total = sum(counts.values())
    return ReportSummary(
        total=total,
        wide=counts["wide"],
        limited=counts["limited"],
        none=counts["none"],
        score=baseline_score(counts["wide"], counts["limited"], total),
    )


def summarize_report(report: ScanReport) -> ReportSummary:
    return summarize(record for records in report.values() for record in records)
