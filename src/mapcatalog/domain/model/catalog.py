"""Catalog tree: groups of displayable map layers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, ClassVar

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator, Mapping

    from .geometry import Rectangle


@dataclass(eq=False, kw_only=True)
class CatalogMember:
    """Anything that can appear in the catalog tree."""

    name: str

    # class-level discriminator; subclasses must override
    TYPE: ClassVar[str]

    @property
    def type(self) -> str:
        return self.TYPE

    def to_json(self) -> dict[str, object]:
        return {"type": self.type, "name": self.name}


@dataclass(eq=False, kw_only=True)
class CatalogGroup(CatalogMember):
    """Ordered container of groups and items; names are matched case-sensitively."""

    TYPE: ClassVar[str] = "group"

    items: list[CatalogMember] = field(default_factory=list[CatalogMember])

    def add(self, member: CatalogMember) -> None:
        self.items.append(member)

    def find_first_item_by_name(self, name: str) -> CatalogMember | None:
        for member in self.items:
            if member.name == name:
                return member
        return None

    def sort_items(self, key: Callable[[CatalogMember], str]) -> None:
        self.items.sort(key=key)

    @property
    def groups(self) -> Iterator[CatalogGroup]:
        return (member for member in self.items if isinstance(member, CatalogGroup))

    def to_json(self) -> dict[str, object]:
        payload = super().to_json()
        payload["items"] = [member.to_json() for member in self.items]
        return payload


@dataclass(eq=False, kw_only=True)
class CatalogItem(CatalogMember):
    """A single displayable layer."""

    TYPE: ClassVar[str] = "item"

    description: str = ""
    url: str | None = None
    layers: str | None = None
    rectangle: Rectangle | None = None
    data_url: str | None = None
    data_url_type: str | None = None
    data_custodian: str | None = None
    parameters: Mapping[str, str] | None = None

    def to_json(self) -> dict[str, object]:
        payload = super().to_json()
        optional: dict[str, object | None] = {
            "description": self.description or None,
            "url": self.url,
            "layers": self.layers,
            "rectangle": self.rectangle.as_list() if self.rectangle is not None else None,
            "dataUrl": self.data_url,
            "dataUrlType": self.data_url_type,
            "dataCustodian": self.data_custodian,
            "parameters": dict(self.parameters) if self.parameters else None,
        }
        payload.update({key: value for key, value in optional.items() if value is not None})
        return payload


@dataclass(eq=False, kw_only=True)
class WebMapServiceItem(CatalogItem):
    TYPE: ClassVar[str] = "wms"


@dataclass(eq=False, kw_only=True)
class ArcGisMapServerItem(CatalogItem):
    TYPE: ClassVar[str] = "esri-mapServer"
