"""Pydantic models describing WMS GetCapabilities documents.

The XML is first turned into a plain payload (``element_to_payload``) where an
element repeated under the same parent becomes a list and a lone one stays a
mapping. The models normalize that ambiguity so ``Layer`` is always a list.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, cast

from pydantic import BaseModel, ConfigDict, Field, field_validator

if TYPE_CHECKING:
    from xml.etree.ElementTree import Element


def local_name(tag: str) -> str:
    """Strip the ``{namespace}`` prefix ElementTree puts on qualified tags."""

    return tag.rsplit("}", 1)[-1]


def element_to_payload(element: Element) -> object:
    children = list(element)
    if not children:
        return (element.text or "").strip()

    payload: dict[str, object] = {}
    for child in children:
        if not isinstance(child.tag, str):
            # comments and processing instructions
            continue
        tag = local_name(child.tag)
        value = element_to_payload(child)
        if tag not in payload:
            payload[tag] = value
            continue
        existing = payload[tag]
        if isinstance(existing, list):
            cast(list[object], existing).append(value)
        else:
            payload[tag] = [existing, value]
    return payload


def _as_mapping_list(value: object) -> object:
    if value is None:
        return []
    if isinstance(value, Mapping):
        return [value]
    if isinstance(value, list):
        return [item for item in cast(list[object], value) if isinstance(item, Mapping)]
    # a bare ``<Layer/>`` carries nothing to match
    return []


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


class WmsBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class LayerPayload(WmsBaseModel):
    name: str | None = Field(default=None, alias="Name")
    title: str | None = Field(default=None, alias="Title")
    max_scale_denominator: float | None = Field(default=None, alias="MaxScaleDenominator")
    layers: list[LayerPayload] = Field(default_factory=list, alias="Layer")

    _normalize_text = field_validator("name", "title", mode="before")(_blank_to_none)
    _normalize_layers = field_validator("layers", mode="before")(_as_mapping_list)

    @field_validator("max_scale_denominator", mode="before")
    @classmethod
    def _parse_scale(cls, value: object) -> float | None:
        if value is None:
            return None
        try:
            return float(cast(str, value))
        except (TypeError, ValueError):
            return None


class CapabilityPayload(WmsBaseModel):
    layers: list[LayerPayload] = Field(default_factory=list, alias="Layer")

    _normalize_layers = field_validator("layers", mode="before")(_as_mapping_list)


class CapabilitiesDocument(WmsBaseModel):
    capability: CapabilityPayload = Field(alias="Capability")
