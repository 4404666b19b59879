from __future__ import annotations

from mapcatalog.domain.discovery import LayerScaleFiltered, match_capability_layers
from tests.helpers.catalog import layer


def test_matches_names_at_any_depth() -> None:
    tree = [
        layer(None, layer("roads"), layer("group", layer("rivers", layer("deep")))),
    ]

    match = match_capability_layers(
        tree, {"rivers", "deep", "missing"}, endpoint="http://s/wms"
    )

    assert match.included == {"rivers", "deep"}
    assert match.events == []


def test_scale_threshold_is_inclusive() -> None:
    tree = [layer("below", max_scale=1999), layer("equal", max_scale=2000), layer("open")]

    match = match_capability_layers(
        tree,
        {"below", "equal", "open"},
        endpoint="http://s/wms",
        minimum_max_scale_denominator=2000,
    )

    assert match.included == {"equal", "open"}
    assert match.events == [
        LayerScaleFiltered(
            endpoint="http://s/wms",
            layer_name="below",
            title="below",
            max_scale_denominator=1999,
            minimum_max_scale_denominator=2000,
        )
    ]


def test_scale_is_ignored_without_threshold() -> None:
    match = match_capability_layers(
        [layer("rain", max_scale=1)], {"rain"}, endpoint="http://s/wms"
    )

    assert match.included == {"rain"}


def test_any_passing_occurrence_includes_the_name() -> None:
    tree = [layer("rain", max_scale=10), layer("parent", layer("rain", max_scale=5000))]

    match = match_capability_layers(
        tree, {"rain"}, endpoint="http://s/wms", minimum_max_scale_denominator=1000
    )

    assert match.included == {"rain"}
    assert len(match.events) == 1


def test_unnamed_layers_never_match_missing_layer_names() -> None:
    match = match_capability_layers([layer(None, layer(""))], {None}, endpoint="http://s/wms")

    assert match.included == set()
