"""Normalized CKAN search results."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum


class ResourceFormat(StrEnum):
    """Resource formats the catalog knows how to display."""

    WMS = "wms"
    ESRI_REST = "esri rest"

    @classmethod
    def match(cls, value: str | None) -> ResourceFormat | None:
        """Case-insensitive exact match; ``"WMS 1.3.0"`` deliberately matches nothing."""

        if value is None:
            return None
        try:
            return cls(value.lower())
        except ValueError:
            return None


@dataclass(frozen=True, slots=True)
class Organization:
    title: str | None = None
    description: str | None = None


@dataclass(frozen=True, slots=True)
class Resource:
    format: str = ""
    url: str | None = None

    @property
    def resource_format(self) -> ResourceFormat | None:
        return ResourceFormat.match(self.format)


@dataclass(frozen=True, slots=True)
class CatalogRecord:
    """One dataset returned by ``package_search``."""

    title: str
    name: str | None = None
    notes: str | None = None
    license_url: str | None = None
    geo_coverage: str | None = None
    extras: dict[str, str] = field(default_factory=dict[str, str])
    groups: tuple[str, ...] = ()
    organization: Organization | None = None
    resources: tuple[Resource, ...] = ()
