from __future__ import annotations

from datetime import date
import json
from pathlib import Path
from typing import Any

import pytest

from baseline.catalog import Catalog
from baseline.resolve import Resolver

AS_OF = date(2026, 6, 1)


def _status(
    baseline: str | bool,
    low: str | None = None,
    high: str | None = None,
    **support: str,
) -> dict[str, Any]:
    status: dict[str, Any] = {"baseline": baseline, "support": support}
    if low:
        status["baseline_low_date"] = low
    if high:
        status["baseline_high_date"] = high
    return status


_GRID = _status("high", "2020-01-15", "2022-07-15", chrome="57", firefox="52", safari="10.1")
_COLOR = _status("high", "≤2015-07-29", "≤2018-01-29", chrome="1", firefox="1", safari="1")
_DIALOG = _status("high", "2022-03-14", "2024-09-14", chrome="37", firefox="98", safari="15.4")
_SEARCH = _status("low", "2023-10-24", None, chrome="118", firefox="118", safari="17")
_WEBGPU = _status(False, chrome="113")
_OBSERVER = _status("high", "2019-03-25", "2021-09-25", chrome="58", firefox="55", safari="12.1")

CATALOG_PAYLOAD: dict[str, Any] = {
    "browsers": {},
    "groups": {},
    "features": {
        "grid": {
            "kind": "feature",
            "name": "Grid",
            "description": "CSS grid is a two-dimensional layout system.",
            "compat_features": ["css.properties.grid", "css.properties.display.grid"],
            "status": {
                **_GRID,
                "by_compat_key": {
                    "css.properties.grid": _GRID,
                    "css.properties.display.grid": _GRID,
                },
            },
        },
        "color": {
            "kind": "feature",
            "name": "Color",
            "compat_features": ["css.properties.color"],
            "status": {**_COLOR, "by_compat_key": {"css.properties.color": _COLOR}},
        },
        "dialog": {
            "kind": "feature",
            "name": "<dialog>",
            "compat_features": ["html.elements.dialog", "api.HTMLDialogElement"],
            "status": {**_DIALOG, "by_compat_key": {"html.elements.dialog": _DIALOG}},
        },
        "search": {
            "kind": "feature",
            "name": "<search>",
            "compat_features": ["html.elements.search"],
            "status": _SEARCH,
        },
        "webgpu": {
            "kind": "feature",
            "name": "WebGPU",
            "compat_features": ["api.GPU", "api.Navigator.gpu"],
            "status": _WEBGPU,
        },
        "intersection-observer": {
            "kind": "feature",
            "name": "Intersection observer",
            "compat_features": ["api.IntersectionObserver", "api.IntersectionObserver.observe"],
            "status": _OBSERVER,
        },
        "sanitizer": {
            "kind": "feature",
            "name": "Sanitizer",
            "compat_features": ["api.Sanitizer"],
        },
        "old-grid": {"kind": "moved", "redirect_target": "grid"},
    },
}


@pytest.fixture
def catalog_payload() -> dict[str, Any]:
    return json.loads(json.dumps(CATALOG_PAYLOAD))


@pytest.fixture
def catalog(catalog_payload: dict[str, Any]) -> Catalog:
    return Catalog.from_payload(catalog_payload, as_of=AS_OF)


@pytest.fixture
def resolver(catalog: Catalog) -> Resolver:
    return Resolver(catalog)


@pytest.fixture
def catalog_file(tmp_path: Path, catalog_payload: dict[str, Any]) -> Path:
    path = tmp_path / "data.json"
    path.write_text(json.dumps(catalog_payload), encoding="utf-8")
    return path
