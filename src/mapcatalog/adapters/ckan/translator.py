"""Translate CKAN payloads into catalog records."""

from __future__ import annotations

from logging import getLogger

from pydantic import ValidationError

from mapcatalog.domain.model import CatalogRecord, Organization, Resource

from .schema import PackagePayload, PackageSearchResponse

log = getLogger(__name__)


def parse_package_search(payload: object) -> list[CatalogRecord]:
    """Validate a ``package_search`` response, dropping datasets that do not validate.

    A malformed envelope raises ``ValidationError``; a malformed dataset only costs
    that dataset.
    """

    response = PackageSearchResponse.model_validate(payload)
    records: list[CatalogRecord] = []
    for index, raw in enumerate(response.result.results):
        try:
            package = PackagePayload.model_validate(raw)
        except ValidationError as exc:
            log.warning("Skipping malformed CKAN dataset #%d: %s", index, exc.errors()[0]["msg"])
            continue
        records.append(translate_package(package))
    return records


def translate_package(package: PackagePayload) -> CatalogRecord:
    extras: dict[str, str] = {}
    for extra in package.extras:
        if extra.value is None:
            extras.pop(extra.key, None)
        else:
            extras[extra.key] = extra.value

    organization = None
    if package.organization is not None:
        organization = Organization(
            title=package.organization.title,
            description=package.organization.description,
        )

    return CatalogRecord(
        title=package.title,
        name=package.name,
        notes=package.notes,
        license_url=package.license_url,
        geo_coverage=package.geo_coverage or extras.get("geo_coverage"),
        extras=extras,
        groups=tuple(group.display_name for group in package.groups if group.display_name),
        organization=organization,
        resources=tuple(
            Resource(format=resource.format, url=resource.service_url)
            for resource in package.resources
        ),
    )
