"""Rich and JSON renderers for scan reports."""

from __future__ import annotations

from dataclasses import asdict
from datetime import date
import json
from typing import Any

from rich.console import Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .aggregate import summarize, summarize_report
from .constants import NO_FEATURES_LINE, TIER_ICON_MAP, TIER_LABEL_MAP, TIER_STYLE_MAP
from .model import FeatureRecord, ReportSummary, ScanReport, SupportStatus
from .util.text import ellipsize

_KEY_WIDTH = 48


def _status_text(status: SupportStatus) -> Text:
    label = f"{TIER_ICON_MAP[status.tier]} {TIER_LABEL_MAP[status.tier]}"
    since = status.wide_since or status.limited_since
    if since is not None:
        label = f"{label} (since {since.isoformat()})"
    return Text(label, style=TIER_STYLE_MAP[status.tier])


def summary_line(summary: ReportSummary) -> str:
    return (
        f"{summary.total} features: "
        f"{TIER_ICON_MAP['wide']} {summary.wide}  "
        f"{TIER_ICON_MAP['limited']} {summary.limited}  "
        f"{TIER_ICON_MAP['none']} {summary.none}  "
        f"Baseline score: {summary.score}%"
    )


def render_file(path: str, records: list[FeatureRecord]) -> Panel:
    """Render one file report as a titled table panel."""
    table = Table(expand=True, show_edge=False)
    table.add_column("Feature", style="bold")
    table.add_column("Key", style="dim")
    table.add_column("Line", justify="right")
    table.add_column("Status")

    for record in records:
        table.add_row(
            Text(record.display_name),
            Text(ellipsize(record.used_key, _KEY_WIDTH)),
            "" if record.line is None else str(record.line),
            _status_text(record.status),
        )

    footer = Text(summary_line(summarize(records)), style="dim")
    return Panel(Group(table, footer), border_style="blue", title=Text(path), title_align="left")


def render_report(report: ScanReport) -> Group:
    """Render every file panel followed by the overall summary."""
    if not report:
        return Group(Text(NO_FEATURES_LINE, style="dim"))

    panels: list[Panel | Text] = [render_file(path, records) for path, records in report.items()]
    panels.append(Text(summary_line(summarize_report(report)), style="bold"))
    return Group(*panels)


def _json_default(value: object) -> Any:
    if isinstance(value, date):
        return value.isoformat()
    raise TypeError(f"Object of type {value.__class__.__name__} is not JSON serializable")


def report_to_dict(report: ScanReport) -> dict[str, Any]:
    return {
        "files": {
            path: [asdict(record) for record in records] for path, records in report.items()
        },
        "summary": asdict(summarize_report(report)),
    }


def report_to_json(report: ScanReport, *, indent: int | None = 2) -> str:
    """Serialize a report (and its summary) as JSON."""
    return json.dumps(report_to_dict(report), indent=indent, default=_json_default)
