"""Populate a catalog group from CKAN datasets."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from mapcatalog.domain.model import (
    ArcGisMapServerItem,
    CatalogGroup,
    Rectangle,
    ResourceFormat,
    WebMapServiceItem,
)

from .events import (
    BoundingBoxInvalid,
    GroupBlacklisted,
    RecordBlacklisted,
    ResourceSkipped,
)
from .urls import ServerLayerKey

if TYPE_CHECKING:
    from collections.abc import Iterable

    from mapcatalog.domain.model import (
        CatalogItem,
        CatalogMember,
        CatalogRecord,
        Resource,
        SearchConfiguration,
    )

    from .coordinator import FilterDecisions
    from .events import DiagnosticEvent

log = getLogger(__name__)

LICENCE_MARKER = "[Licence]"

_ITEM_TYPES: dict[ResourceFormat, type[CatalogItem]] = {
    ResourceFormat.WMS: WebMapServiceItem,
    ResourceFormat.ESRI_REST: ArcGisMapServerItem,
}


def build_catalog(
    root: CatalogGroup,
    records: Iterable[CatalogRecord],
    *,
    config: SearchConfiguration,
    decisions: FilterDecisions | None = None,
) -> list[DiagnosticEvent]:
    """Append an item per usable resource to the groups its dataset belongs to.

    ``decisions`` comes from the capabilities check; a WMS layer mapped to ``False``
    is left out. Without decisions every resource is eligible. Every item is built
    before ``root`` is touched, so a failure while reading the records leaves the
    tree as it was.
    """

    events: list[DiagnosticEvent] = []
    placements: list[tuple[str, CatalogItem]] = []
    for record in records:
        if config.is_blacklisted(record.title):
            log.info(
                "Provider feedback: filtering out %s (%s) because it is blacklisted",
                record.title,
                record.name,
            )
            events.append(RecordBlacklisted(title=record.title, name=record.name))
            continue
        placements.extend(_place_record(record, config=config, decisions=decisions, events=events))

    for group_name, item in placements:
        _find_or_create_group(root, group_name).add(item)
    sort_catalog(root)
    return events


def sort_catalog(root: CatalogGroup) -> None:
    """Sort the root and each of its groups by case-insensitive name (stable)."""

    root.sort_items(_name_key)
    for group in root.groups:
        group.sort_items(_name_key)


def build_description(record: CatalogRecord) -> str:
    description = record.notes.replace("\n", "<br/>") if record.notes else ""
    if record.license_url and (record.notes is None or LICENCE_MARKER not in record.notes):
        description += f"<br/>{LICENCE_MARKER}({record.license_url})"
    return description


def parse_rectangle(value: str | None) -> Rectangle | None:
    """Parse ``west,south,east,north`` in degrees; anything else yields ``None``."""

    if value is None:
        return None
    parts = value.split(",")
    if len(parts) != 4:
        return None
    try:
        return Rectangle.from_degrees(*(part.strip() for part in parts))
    except ValueError:
        return None


def resolve_data_custodian(record: CatalogRecord, config: SearchConfiguration) -> str | None:
    if config.data_custodian is not None:
        return config.data_custodian
    organization = record.organization
    if organization is None:
        return None
    return organization.description or organization.title or None


def _place_record(
    record: CatalogRecord,
    *,
    config: SearchConfiguration,
    decisions: FilterDecisions | None,
    events: list[DiagnosticEvent],
) -> list[tuple[str, CatalogItem]]:
    description = build_description(record)
    rectangle = parse_rectangle(record.geo_coverage)
    if rectangle is None and record.geo_coverage is not None:
        log.debug("Ignoring bounding box %r of %s", record.geo_coverage, record.title)
        events.append(BoundingBoxInvalid(record=record.title, value=record.geo_coverage))

    placements: list[tuple[str, CatalogItem]] = []
    for resource in record.resources:
        resource_format = resource.resource_format
        if resource_format is None:
            continue
        if resource.url is None:
            events.append(
                ResourceSkipped(record=record.title, format=resource.format, reason="missing url")
            )
            continue
        try:
            key = ServerLayerKey.from_url(resource.url)
        except ValueError:
            log.warning(
                "Skipping unparseable %s url %r of %s", resource.format, resource.url, record.title
            )
            events.append(
                ResourceSkipped(record=record.title, format=resource.format, reason="invalid url")
            )
            continue
        if not _is_included(resource, key, decisions):
            continue

        item = _ITEM_TYPES[resource_format](
            name=record.title,
            description=description,
            url=key.endpoint,
            layers=key.layer_name,
            rectangle=rectangle,
            data_url=record.extras.get("data_url"),
            data_url_type=record.extras.get("data_url_type"),
            data_custodian=resolve_data_custodian(record, config),
            parameters=config.wms_parameters,
        )
        placements.extend(_group_placements(item, record=record, config=config, events=events))
    return placements


def _is_included(
    resource: Resource,
    key: ServerLayerKey,
    decisions: FilterDecisions | None,
) -> bool:
    if decisions is None or resource.resource_format is not ResourceFormat.WMS:
        return True
    return decisions.get(key, True)


def _group_placements(
    item: CatalogItem,
    *,
    record: CatalogRecord,
    config: SearchConfiguration,
    events: list[DiagnosticEvent],
) -> list[tuple[str, CatalogItem]]:
    placements: list[tuple[str, CatalogItem]] = []
    for group_name in record.groups:
        if config.is_blacklisted(group_name):
            events.append(GroupBlacklisted(group=group_name, record=record.title))
            continue
        placements.append((group_name, item))
    return placements


def _find_or_create_group(root: CatalogGroup, name: str) -> CatalogGroup:
    existing = root.find_first_item_by_name(name)
    if isinstance(existing, CatalogGroup):
        return existing
    group = CatalogGroup(name=name)
    root.add(group)
    return group


def _name_key(member: CatalogMember) -> str:
    return member.name.lower()
