"""Validate WMS resources against the live capabilities of their servers."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from mapcatalog.domain.model import ResourceFormat
from mapcatalog.domain.ports import FetchError

from .capabilities import match_capability_layers
from .events import CapabilitiesUnavailable
from .urls import ServerLayerKey, capabilities_url

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from mapcatalog.domain.model import CatalogRecord
    from mapcatalog.domain.ports import CapabilitiesFetcher, ProxySelector

    from .events import DiagnosticEvent

log = getLogger(__name__)

type FilterDecisions = Mapping[ServerLayerKey, bool]


@dataclass(slots=True)
class CapabilityFilterResult:
    """Per-layer inclusion decisions; ``True`` means the server confirmed the layer."""

    decisions: dict[ServerLayerKey, bool] = field(default_factory=dict[ServerLayerKey, bool])
    events: list[DiagnosticEvent] = field(default_factory=list)


def group_wms_layers_by_endpoint(records: Iterable[CatalogRecord]) -> dict[str, set[str | None]]:
    """Map each WMS endpoint to the layer names requested from it.

    Resources whose URL cannot be parsed are left out; the tree builder reports them.
    """

    servers: dict[str, set[str | None]] = {}
    for record in records:
        for resource in record.resources:
            if resource.resource_format is not ResourceFormat.WMS or resource.url is None:
                continue
            try:
                key = ServerLayerKey.from_url(resource.url)
            except ValueError:
                log.debug("Not checking unparseable WMS url %r of %s", resource.url, record.title)
                continue
            servers.setdefault(key.endpoint, set()).add(key.layer_name)
    return servers


async def filter_by_capabilities(
    records: Iterable[CatalogRecord],
    *,
    fetch: CapabilitiesFetcher,
    proxy: ProxySelector | None = None,
    minimum_max_scale_denominator: float | None = None,
) -> CapabilityFilterResult:
    """Decide, per (endpoint, layer), whether the WMS server still offers the layer.

    Every grouped layer starts excluded. A server that cannot be reached, whose
    document cannot be parsed, or whose check fails in any other way leaves its
    layers excluded; that never fails the run.
    """

    servers = group_wms_layers_by_endpoint(records)
    result = CapabilityFilterResult()
    for endpoint, layer_names in servers.items():
        for layer_name in layer_names:
            result.decisions[ServerLayerKey(endpoint, layer_name)] = False

    log.info("Checking GetCapabilities for %d WMS server(s)", len(servers))
    outcomes = await asyncio.gather(
        *(
            _check_endpoint(
                endpoint,
                layer_names,
                fetch=fetch,
                proxy=proxy,
                minimum_max_scale_denominator=minimum_max_scale_denominator,
            )
            for endpoint, layer_names in servers.items()
        ),
        return_exceptions=True,
    )

    for endpoint, outcome in zip(servers, outcomes, strict=True):
        if isinstance(outcome, BaseException):
            if not isinstance(outcome, Exception):
                raise outcome
            log.error(
                "GetCapabilities check crashed for %s, excluding its layers",
                endpoint,
                exc_info=outcome,
            )
            result.events.append(CapabilitiesUnavailable(endpoint=endpoint, reason=repr(outcome)))
            continue
        included, events = outcome
        for layer_name in included:
            result.decisions[ServerLayerKey(endpoint, layer_name)] = True
        result.events.extend(events)
    return result


async def _check_endpoint(
    endpoint: str,
    layer_names: set[str | None],
    *,
    fetch: CapabilitiesFetcher,
    proxy: ProxySelector | None,
    minimum_max_scale_denominator: float | None,
) -> tuple[set[str], list[DiagnosticEvent]]:
    url = capabilities_url(endpoint, proxy=proxy)
    try:
        layers = await fetch(url)
    except FetchError as exc:
        log.warning("GetCapabilities failed for %s, excluding its layers: %s", endpoint, exc)
        return set(), [CapabilitiesUnavailable(endpoint=endpoint, reason=str(exc))]

    match = match_capability_layers(
        layers,
        layer_names,
        endpoint=endpoint,
        minimum_max_scale_denominator=minimum_max_scale_denominator,
    )
    return match.included, list(match.events)
