"""Top-level driver of a CKAN catalog discovery run."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from mapcatalog.domain.ports import FetchError

from .builder import build_catalog
from .coordinator import filter_by_capabilities
from .errors import UpstreamUnavailableError
from .urls import package_search_url

if TYPE_CHECKING:
    from collections.abc import Sequence

    from mapcatalog.domain.model import CatalogGroup, CatalogRecord, SearchConfiguration
    from mapcatalog.domain.ports import CapabilitiesFetcher, PackageSearchFetcher, ProxySelector

    from .events import DiagnosticEvent

log = getLogger(__name__)


@dataclass(slots=True)
class DiscoveryResult:
    """Outcome of a discovery run."""

    root: CatalogGroup
    records: int
    events: list[DiagnosticEvent] = field(default_factory=list)


async def discover_catalog(
    config: SearchConfiguration,
    root: CatalogGroup,
    *,
    search: PackageSearchFetcher,
    capabilities: CapabilitiesFetcher | None = None,
    proxy: ProxySelector | None = None,
) -> DiscoveryResult:
    """Search CKAN, optionally validate WMS layers, and populate ``root``.

    All searches run concurrently and are awaited to completion. If any of them
    failed, ``UpstreamUnavailableError`` is raised for the first failing filter query
    (in declaration order) and ``root`` is left untouched.
    """

    if config.filter_by_capabilities and capabilities is None:
        raise ValueError("filter_by_capabilities requires a capabilities fetcher")

    records = await search_all(config, search=search, proxy=proxy)
    log.info(
        "CKAN returned %d dataset(s) for %d filter quer(ies)",
        len(records),
        len(config.filter_queries),
    )

    events: list[DiagnosticEvent] = []
    decisions = None
    if config.filter_by_capabilities and capabilities is not None:
        checked = await filter_by_capabilities(
            records,
            fetch=capabilities,
            proxy=proxy,
            minimum_max_scale_denominator=config.effective_scale_threshold,
        )
        decisions = checked.decisions
        events.extend(checked.events)

    events.extend(build_catalog(root, records, config=config, decisions=decisions))
    return DiscoveryResult(root=root, records=len(records), events=events)


async def search_all(
    config: SearchConfiguration,
    *,
    search: PackageSearchFetcher,
    proxy: ProxySelector | None = None,
) -> list[CatalogRecord]:
    """Run every filter query and concatenate the datasets in declaration order."""

    urls = [package_search_url(config.url, query, proxy=proxy) for query in config.filter_queries]
    outcomes: Sequence[Sequence[CatalogRecord] | BaseException] = await asyncio.gather(
        *(search(url) for url in urls),
        return_exceptions=True,
    )

    merged: list[CatalogRecord] = []
    for url, outcome in zip(urls, outcomes, strict=True):
        if isinstance(outcome, FetchError):
            log.error("package_search failed for %s: %s", url, outcome)
            raise UpstreamUnavailableError(url=url) from outcome
        if isinstance(outcome, BaseException):
            raise outcome
        merged.extend(outcome)
    return merged
