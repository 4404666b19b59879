"""Application orchestration entry points."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from logging import getLogger
from typing import TYPE_CHECKING

from mapcatalog.adapters.ckan import CkanPackageSearchFetcher
from mapcatalog.adapters.http_resilience import ResilientClient
from mapcatalog.adapters.proxy import CorsProxy
from mapcatalog.adapters.wms import WmsCapabilitiesFetcher
from mapcatalog.domain.discovery import discover_catalog
from mapcatalog.domain.model import CatalogGroup

if TYPE_CHECKING:
    from mapcatalog.config import CkanConfig, ResilienceConfig
    from mapcatalog.domain.discovery import DiscoveryResult

ClientFactory = Callable[["ResilienceConfig"], ResilientClient]


log = getLogger(__name__)


def load_ckan_catalog(
    config: CkanConfig,
    *,
    root: CatalogGroup | None = None,
    client_factory: ClientFactory | None = None,
) -> DiscoveryResult:
    """Discover a CKAN catalog and return the populated tree with its diagnostics."""

    effective_root = root if root is not None else CatalogGroup(name=config.search.url)
    log.info(
        "Starting CKAN discovery: url=%s, queries=%d, filter_by_capabilities=%s",
        config.search.url,
        len(config.search.filter_queries),
        config.search.filter_by_capabilities,
    )
    result = asyncio.run(
        _load_ckan_catalog_async(
            config,
            root=effective_root,
            client_factory=client_factory or ResilientClient,
        )
    )
    log.info(
        f"Finished CKAN discovery: records={result.records}, "
        f"top_level={len(result.root.items)}, events={len(result.events)}"
    )
    return result


async def _load_ckan_catalog_async(
    config: CkanConfig,
    *,
    root: CatalogGroup,
    client_factory: ClientFactory,
) -> DiscoveryResult:
    proxy = CorsProxy(config.proxy) if config.proxy is not None else None
    async with client_factory(config.resilience) as client:
        return await discover_catalog(
            config.search,
            root,
            search=CkanPackageSearchFetcher(client=client),
            capabilities=WmsCapabilitiesFetcher(client=client),
            proxy=proxy,
        )
