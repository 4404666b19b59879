"""Domain model for catalog discovery."""

from __future__ import annotations

from .capabilities import CapabilityLayer, walk_layers
from .catalog import (
    ArcGisMapServerItem,
    CatalogGroup,
    CatalogItem,
    CatalogMember,
    WebMapServiceItem,
)
from .geometry import Rectangle
from .records import CatalogRecord, Organization, Resource, ResourceFormat
from .search import SearchConfiguration

__all__ = [
    "ArcGisMapServerItem",
    "CapabilityLayer",
    "CatalogGroup",
    "CatalogItem",
    "CatalogMember",
    "CatalogRecord",
    "Organization",
    "Rectangle",
    "Resource",
    "ResourceFormat",
    "SearchConfiguration",
    "WebMapServiceItem",
    "walk_layers",
]
