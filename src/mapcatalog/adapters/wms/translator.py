"""Translate GetCapabilities XML into the capability layer tree."""

from __future__ import annotations

from typing import TYPE_CHECKING
from xml.etree import ElementTree

from mapcatalog.domain.model import CapabilityLayer

from .schema import CapabilitiesDocument, element_to_payload, local_name

if TYPE_CHECKING:
    from .schema import LayerPayload

CAPABILITIES_ROOTS = frozenset({"WMS_Capabilities", "WMT_MS_Capabilities"})


class WmsCapabilitiesError(ValueError):
    """Raised when a document is XML but not a WMS capabilities document."""


def parse_capabilities(document: str | bytes) -> list[CapabilityLayer]:
    """Parse the top-level layers of a GetCapabilities response.

    Raises ``xml.etree.ElementTree.ParseError`` for malformed XML,
    ``WmsCapabilitiesError`` for service exception reports or foreign documents and
    ``pydantic.ValidationError`` when ``Capability`` is missing.
    """

    root = ElementTree.fromstring(document)
    root_name = local_name(root.tag)
    if root_name not in CAPABILITIES_ROOTS:
        raise WmsCapabilitiesError(f"Expected a WMS capabilities document, got <{root_name}>")

    parsed = CapabilitiesDocument.model_validate(element_to_payload(root))
    return [translate_layer(layer) for layer in parsed.capability.layers]


def translate_layer(layer: LayerPayload) -> CapabilityLayer:
    return CapabilityLayer(
        name=layer.name,
        title=layer.title,
        max_scale_denominator=layer.max_scale_denominator,
        layers=tuple(translate_layer(child) for child in layer.layers),
    )
