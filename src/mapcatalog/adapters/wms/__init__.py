"""Public interface for the WMS adapter."""

from __future__ import annotations

from .client import WmsCapabilitiesFetcher
from .schema import CapabilitiesDocument, LayerPayload, element_to_payload
from .translator import WmsCapabilitiesError, parse_capabilities, translate_layer

__all__ = [
    "CapabilitiesDocument",
    "LayerPayload",
    "WmsCapabilitiesError",
    "WmsCapabilitiesFetcher",
    "element_to_payload",
    "parse_capabilities",
    "translate_layer",
]
