from __future__ import annotations

import asyncio

import pytest

from mapcatalog.domain.discovery import (
    LayerScaleFiltered,
    UpstreamUnavailableError,
    discover_catalog,
    search_all,
)
from mapcatalog.domain.model import CatalogGroup, WebMapServiceItem
from tests.helpers.catalog import (
    CKAN_URL,
    FakeCapabilities,
    FakeSearch,
    layer,
    make_config,
    make_record,
    wms,
)


def test_empty_results_leave_root_unchanged() -> None:
    root = CatalogGroup(name="CKAN")
    search = FakeSearch()

    result = asyncio.run(discover_catalog(make_config(), root, search=search))

    assert root.items == []
    assert result.records == 0
    assert result.events == []
    assert search.calls == [f"{CKAN_URL}/api/3/action/package_search?rows=100000&fq=res_format:wms"]


def test_results_are_merged_in_declaration_order() -> None:
    first = make_record("First", resources=[wms("http://s/wms?LAYERS=a")], groups=["G"])
    second = make_record("Second", resources=[wms("http://s/wms?LAYERS=b")], groups=["G"])
    search = FakeSearch(
        results={"fq=a": [first], "fq=b": [second]},
        delays={"fq=a": 0.02},
    )
    config = make_config(filter_queries=("fq=a", "fq=b"))

    records = asyncio.run(search_all(config, search=search))

    assert search.completed == ["fq=b", "fq=a"]
    assert records == [first, second]


def test_search_failure_raises_and_leaves_root_untouched() -> None:
    root = CatalogGroup(name="CKAN")
    record = make_record("Ok", resources=[wms("http://s/wms?LAYERS=a")], groups=["G"])
    search = FakeSearch(
        results={"fq=ok": [record]},
        failures={"fq=bad"},
        delays={"fq=ok": 0.02},
    )
    config = make_config(filter_queries=("fq=bad", "fq=ok"))

    with pytest.raises(UpstreamUnavailableError) as excinfo:
        asyncio.run(discover_catalog(config, root, search=search))

    assert excinfo.value.title == "Group is not available"
    assert excinfo.value.url.endswith("rows=100000&fq=bad")
    assert sorted(search.completed) == ["fq=bad", "fq=ok"]
    assert root.items == []


def test_first_failing_query_in_declaration_order_is_reported() -> None:
    search = FakeSearch(failures={"fq=a", "fq=b"}, delays={"fq=a": 0.02})
    config = make_config(filter_queries=("fq=a", "fq=b"))

    with pytest.raises(UpstreamUnavailableError) as excinfo:
        asyncio.run(search_all(config, search=search))

    assert excinfo.value.url.endswith("fq=a")


def test_unexpected_errors_propagate_unchanged() -> None:
    async def broken(url: str) -> list[object]:
        raise KeyError(url)

    with pytest.raises(KeyError):
        asyncio.run(search_all(make_config(), search=broken))  # type: ignore[arg-type]


def test_capability_filter_requires_fetcher() -> None:
    config = make_config(filter_by_capabilities=True)

    with pytest.raises(ValueError, match="capabilities fetcher"):
        asyncio.run(discover_catalog(config, CatalogGroup(name="CKAN"), search=FakeSearch()))


@pytest.mark.integration
def test_scale_threshold_removes_layer_end_to_end() -> None:
    rainfall = make_record("Rainfall", resources=[wms("http://s/wms?LAYERS=rain")], groups=["C"])
    wind = make_record("Wind", resources=[wms("http://s/wms?LAYERS=wind")], groups=["C"])
    search = FakeSearch(results={"fq=res_format:wms": [rainfall, wind]})
    capabilities = FakeCapabilities(
        documents={
            "http://s/wms": [
                layer(None, layer("rain", max_scale=1000), layer("wind", max_scale=5000))
            ]
        }
    )
    config = make_config(filter_by_capabilities=True, minimum_max_scale_denominator=2000)
    root = CatalogGroup(name="CKAN")

    result = asyncio.run(
        discover_catalog(config, root, search=search, capabilities=capabilities)
    )

    group = root.find_first_item_by_name("C")
    assert isinstance(group, CatalogGroup)
    assert [item.name for item in group.items] == ["Wind"]
    assert isinstance(group.items[0], WebMapServiceItem)
    assert result.records == 2
    assert [type(event) for event in result.events] == [LayerScaleFiltered]


@pytest.mark.integration
def test_existing_children_survive_discovery() -> None:
    manual = WebMapServiceItem(name="Zebra layer")
    root = CatalogGroup(name="CKAN", items=[manual])
    record = make_record("Rainfall", resources=[wms("http://s/wms?LAYERS=rain")], groups=["Climate"])
    search = FakeSearch(results={"fq=res_format:wms": [record]})

    asyncio.run(discover_catalog(make_config(), root, search=search))

    assert [member.name for member in root.items] == ["Climate", "Zebra layer"]
