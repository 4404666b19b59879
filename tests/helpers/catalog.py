"""Builders and fakes for catalog discovery tests."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from mapcatalog.domain.model import (
    CapabilityLayer,
    CatalogRecord,
    Organization,
    Resource,
    SearchConfiguration,
)
from mapcatalog.domain.ports import FetchError

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping, Sequence

CKAN_URL = "http://ckan.example.org"


def make_config(**overrides: object) -> SearchConfiguration:
    values: dict[str, object] = {"url": CKAN_URL, "filter_queries": ("fq=res_format:wms",)}
    values.update(overrides)
    return SearchConfiguration(**values)  # type: ignore[arg-type]


def wms(url: str | None) -> Resource:
    return Resource(format="WMS", url=url)


def esri(url: str | None) -> Resource:
    return Resource(format="Esri REST", url=url)


def make_record(  # noqa: PLR0913
    title: str,
    *,
    resources: Iterable[Resource] = (),
    groups: Iterable[str] = (),
    notes: str | None = None,
    license_url: str | None = None,
    geo_coverage: str | None = None,
    extras: Mapping[str, str] | None = None,
    organization: Organization | None = None,
) -> CatalogRecord:
    return CatalogRecord(
        title=title,
        name=title.lower().replace(" ", "-"),
        notes=notes,
        license_url=license_url,
        geo_coverage=geo_coverage,
        extras=dict(extras or {}),
        groups=tuple(groups),
        organization=organization,
        resources=tuple(resources),
    )


def layer(
    name: str | None,
    *children: CapabilityLayer,
    max_scale: float | None = None,
    title: str | None = None,
) -> CapabilityLayer:
    return CapabilityLayer(
        name=name,
        title=title or name,
        max_scale_denominator=max_scale,
        layers=children,
    )


@dataclass(slots=True)
class FakeSearch:
    """``PackageSearchFetcher`` answering by filter query fragment."""

    results: dict[str, Sequence[CatalogRecord]] = field(default_factory=dict)
    delays: dict[str, float] = field(default_factory=dict)
    failures: set[str] = field(default_factory=set)
    calls: list[str] = field(default_factory=list)
    completed: list[str] = field(default_factory=list)

    async def __call__(self, url: str) -> Sequence[CatalogRecord]:
        self.calls.append(url)
        query = url.split("rows=100000&", 1)[-1]
        await asyncio.sleep(self.delays.get(query, 0))
        self.completed.append(query)
        if query in self.failures:
            raise FetchError("connection refused", url=url)
        return self.results.get(query, [])


@dataclass(slots=True)
class FakeCapabilities:
    """``CapabilitiesFetcher`` answering by endpoint (the URL before ``?``)."""

    documents: dict[str, Sequence[CapabilityLayer]] = field(default_factory=dict)
    delays: dict[str, float] = field(default_factory=dict)
    crashes: set[str] = field(default_factory=set)
    calls: list[str] = field(default_factory=list)

    async def __call__(self, url: str) -> Sequence[CapabilityLayer]:
        self.calls.append(url)
        endpoint = url.split("?", 1)[0]
        await asyncio.sleep(self.delays.get(endpoint, 0))
        if endpoint in self.crashes:
            raise KeyError(endpoint)
        if endpoint not in self.documents:
            raise FetchError("404 Not Found", url=url)
        return self.documents[endpoint]


@dataclass(frozen=True, slots=True)
class FakeProxy:
    hosts: frozenset[str] = frozenset()

    def should_use_proxy(self, url: str) -> bool:
        return any(host in url for host in self.hosts)

    def get_url(self, url: str, cache_hint: str | None = None) -> str:
        return f"proxy/_{cache_hint}/{url}"
