"""CKAN catalog discovery: search fan-out, WMS capability checks, tree building."""

from __future__ import annotations

from .builder import build_catalog, sort_catalog
from .capabilities import CapabilityMatch, match_capability_layers
from .coordinator import CapabilityFilterResult, filter_by_capabilities
from .errors import DiscoveryError, UpstreamUnavailableError
from .events import (
    BoundingBoxInvalid,
    CapabilitiesUnavailable,
    DiagnosticEvent,
    GroupBlacklisted,
    LayerScaleFiltered,
    RecordBlacklisted,
    ResourceSkipped,
)
from .orchestrator import DiscoveryResult, discover_catalog, search_all
from .urls import ServerLayerKey

__all__ = [
    "BoundingBoxInvalid",
    "CapabilitiesUnavailable",
    "CapabilityFilterResult",
    "CapabilityMatch",
    "DiagnosticEvent",
    "DiscoveryError",
    "DiscoveryResult",
    "GroupBlacklisted",
    "LayerScaleFiltered",
    "RecordBlacklisted",
    "ResourceSkipped",
    "ServerLayerKey",
    "UpstreamUnavailableError",
    "build_catalog",
    "discover_catalog",
    "filter_by_capabilities",
    "match_capability_layers",
    "search_all",
    "sort_catalog",
]
