from __future__ import annotations

from datetime import date

import pytest

from baseline.catalog import Catalog
from baseline.model import CatalogFeature, RawMention, SupportStatus
from baseline.normalize import (
    canonical_key,
    markup_key,
    parent_key,
    script_lookup_seed,
    style_key,
)
from baseline.resolve import Resolver


def test_style_and_markup_keys() -> None:
    assert style_key("color") == "css.properties.color"
    assert style_key("color", "red") == "css.properties.color.red"
    assert markup_key("dialog") == "html.elements.dialog"


def test_canonical_key_dispatch() -> None:
    assert (
        canonical_key(RawMention(raw_key="display", kind="style", value="grid"))
        == "css.properties.display.grid"
    )
    assert canonical_key(RawMention(raw_key="gap", kind="style")) == "css.properties.gap"
    assert canonical_key(RawMention(raw_key="search", kind="markup")) == "html.elements.search"
    assert canonical_key(RawMention(raw_key="Navigator.gpu", kind="script")) == "Navigator.gpu"


def test_script_lookup_seed() -> None:
    assert script_lookup_seed("api.Navigator.gpu") == "navigator.gpu"
    assert script_lookup_seed("WebGPU") == "webgpu"
    assert script_lookup_seed("myapi.thing") == "myapi.thing"


def test_parent_key_handles_dotted_values() -> None:
    assert parent_key("css.properties.color.red") == "css.properties.color"
    assert parent_key("css.properties.line-height.1.5") == "css.properties.line-height"
    assert parent_key("css.properties.color") is None
    assert parent_key("html.elements.dialog") is None


def test_direct_lookup(resolver: Resolver) -> None:
    record = resolver.resolve("css.properties.display.grid", "style", 4)

    assert record is not None
    assert record.used_key == "css.properties.display.grid"
    assert record.feature_id == "grid"
    assert record.display_name == "Grid"
    assert record.status.tier == "wide"
    assert record.status.wide_since == date(2022, 7, 15)
    assert record.line == 4


def test_value_fallback_uses_parent_property(resolver: Resolver) -> None:
    record = resolver.resolve("css.properties.color.red", "style", 2)

    assert record is not None
    assert record.canonical_key == "css.properties.color.red"
    assert record.used_key == "css.properties.color"
    assert record.display_name == "Color"
    assert record.status.tier == "wide"
    assert record.status.limited_since == date(2015, 7, 29)


def test_reverse_lookup_adopts_feature_status_and_name(resolver: Resolver) -> None:
    record = resolver.resolve("html.elements.search", "markup", 1)

    assert record is not None
    assert record.used_key == "html.elements.search"
    assert record.feature_id == "search"
    assert record.display_name == "<search>"
    assert record.status.tier == "limited"
    assert record.status.limited_since == date(2023, 10, 24)
    assert record.status.wide_since is None


def test_reverse_lookup_uses_first_compat_key_of_first_feature_with_status() -> None:
    status = SupportStatus(
        tier="wide", wide_since=date(2024, 9, 14), limited_since=date(2022, 3, 14)
    )
    draft = CatalogFeature(
        id="dialog-draft", name="Dialog draft", compat_keys=("html.elements.dialog",)
    )
    dialog = CatalogFeature(
        id="dialog",
        name="<dialog>",
        compat_keys=("api.HTMLDialogElement", "html.elements.dialog"),
        status=status,
    )
    catalog = Catalog([draft, dialog], {}, as_of=date(2026, 6, 1))

    record = Resolver(catalog).resolve("html.elements.dialog", "markup", 4)

    assert record is not None
    assert record.canonical_key == "html.elements.dialog"
    assert record.used_key == "api.HTMLDialogElement"
    assert record.display_name == "<dialog>"
    assert record.feature_id == "dialog"
    assert record.status == status
    assert record.line == 4


def test_reverse_lookup_without_any_status_is_dropped() -> None:
    draft = CatalogFeature(
        id="dialog-draft", name="Dialog draft", compat_keys=("html.elements.dialog",)
    )
    catalog = Catalog([draft], {}, as_of=date(2026, 6, 1))

    assert Resolver(catalog).resolve("html.elements.dialog", "markup") is None


def test_unresolvable_markup_is_dropped(resolver: Resolver) -> None:
    assert resolver.resolve("html.elements.blink", "markup", 1) is None
    assert resolver.resolve("css.properties.zoom.2", "style", 1) is None


def test_lookup_errors_are_treated_as_not_found(catalog_payload: dict[str, object]) -> None:
    class _RaisingCatalog(Catalog):
        def status_of(self, key: str) -> SupportStatus | None:
            raise KeyError(key)

    base = Catalog.from_payload(catalog_payload, as_of=date(2026, 6, 1))
    raising = _RaisingCatalog(base.features, {}, as_of=base.as_of)
    resolver = Resolver(raising)

    assert resolver.resolve("css.properties.color.red", "style") is None
    record = resolver.resolve("html.elements.dialog", "markup")
    assert record is not None
    assert record.status.tier == "wide"


def test_display_name_falls_back_to_used_key() -> None:
    status = SupportStatus(tier="wide", wide_since=date(2020, 1, 1), limited_since=date(2017, 1, 1))
    catalog = Catalog([], {"css.properties.gap": status}, as_of=date(2026, 1, 1))

    record = Resolver(catalog).resolve("css.properties.gap.1rem", "style")

    assert record is not None
    assert record.display_name == "css.properties.gap"
    assert record.feature_id is None


@pytest.mark.parametrize(
    ("candidate", "feature_id"),
    [
        ("navigator.gpu", "webgpu"),
        ("WebGPU", "webgpu"),
        ("api.IntersectionObserver", "intersection-observer"),
        ("HTMLDialogElement", "dialog"),
    ],
)
def test_script_candidates_resolve(resolver: Resolver, candidate: str, feature_id: str) -> None:
    record = resolver.resolve(candidate, "script", 3)

    assert record is not None
    assert record.feature_id == feature_id
    assert record.used_key == candidate
    assert record.line == 3


def test_script_candidate_without_match_is_dropped(resolver: Resolver) -> None:
    assert resolver.resolve("document.querySelectorAll", "script") is None
    assert resolver.resolve("api.", "script") is None


def test_script_feature_without_status_defaults_to_none(resolver: Resolver) -> None:
    record = resolver.resolve("Sanitizer", "script")

    assert record is not None
    assert record.status == SupportStatus(tier="none")


def test_script_tie_break_prefers_exact_over_earlier_substring() -> None:
    features = [
        CatalogFeature(id="observer-utils", name="Observer utils", compat_keys=("api.Util",)),
        CatalogFeature(id="observer", name="Observer", compat_keys=("api.Observer",)),
    ]
    resolver = Resolver(Catalog(features, {}, as_of=date(2026, 1, 1)))

    record = resolver.resolve("Observer", "script")

    assert record is not None
    assert record.feature_id == "observer"


def test_script_tie_break_uses_catalog_order_within_rank() -> None:
    features = [
        CatalogFeature(id="paint-api", name="Paint worklet", compat_keys=("api.PaintWorklet",)),
        CatalogFeature(id="paint-order", name="Paint order", compat_keys=("css.properties.x",)),
    ]
    resolver = Resolver(Catalog(features, {}, as_of=date(2026, 1, 1)))

    record = resolver.resolve("Paint", "script")

    assert record is not None
    assert record.feature_id == "paint-api"


def test_script_matches_are_memoised_per_seed(catalog: Catalog) -> None:
    calls: list[str] = []

    class _CountingResolver(Resolver):
        def _match_script_seed(self, seed: str) -> CatalogFeature | None:
            calls.append(seed)
            return super()._match_script_seed(seed)

    resolver = _CountingResolver(catalog)

    first = resolver.resolve("navigator.gpu", "script", 1)
    second = resolver.resolve("api.Navigator.gpu", "script", 9)

    assert first is not None and second is not None
    assert first.feature_id == second.feature_id == "webgpu"
    assert second.line == 9
    assert calls == ["navigator.gpu"]
