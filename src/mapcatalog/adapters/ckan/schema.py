"""Pydantic models describing CKAN ``package_search`` payloads."""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import cast

from pydantic import BaseModel, ConfigDict, field_validator, model_validator


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


def _none_to_empty_list(value: object) -> object:
    return [] if value is None else value


class CkanBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class ExtraPayload(CkanBaseModel):
    key: str
    value: str | None = None

    @field_validator("value", mode="before")
    @classmethod
    def _stringify(cls, value: object) -> object:
        if value is None or isinstance(value, str):
            return value
        return json.dumps(value)


class GroupPayload(CkanBaseModel):
    name: str | None = None
    title: str | None = None
    display_name: str | None = None


class OrganizationPayload(CkanBaseModel):
    name: str | None = None
    title: str | None = None
    description: str | None = None

    _normalize_text = field_validator("title", "description", mode="before")(_blank_to_none)


class ResourcePayload(CkanBaseModel):
    format: str = ""
    url: str | None = None
    wms_url: str | None = None
    name: str | None = None

    _normalize_urls = field_validator("url", "wms_url", mode="before")(_blank_to_none)

    @field_validator("format", mode="before")
    @classmethod
    def _format_or_empty(cls, value: object) -> object:
        return "" if value is None else value

    @property
    def service_url(self) -> str | None:
        return self.wms_url or self.url


class PackagePayload(CkanBaseModel):
    title: str
    name: str | None = None
    notes: str | None = None
    license_url: str | None = None
    geo_coverage: str | None = None
    extras: list[ExtraPayload] = []
    groups: list[GroupPayload] = []
    organization: OrganizationPayload | None = None
    resources: list[ResourcePayload] = []

    _normalize_optional = field_validator("license_url", "geo_coverage", mode="before")(
        _blank_to_none
    )
    _normalize_lists = field_validator("extras", "groups", "resources", mode="before")(
        _none_to_empty_list
    )

    @model_validator(mode="before")
    @classmethod
    def _title_falls_back_to_name(cls, value: object) -> object:
        if isinstance(value, Mapping):
            mapping_value = cast(Mapping[str, object], value)
            title = mapping_value.get("title")
            has_title = isinstance(title, str) and bool(title)
            if not has_title and isinstance(mapping_value.get("name"), str):
                data: dict[str, object] = dict(mapping_value)
                data["title"] = mapping_value["name"]
                return data
        return value


class PackageSearchResult(CkanBaseModel):
    count: int | None = None
    results: list[dict[str, object]] = []

    _normalize_results = field_validator("results", mode="before")(_none_to_empty_list)


class PackageSearchResponse(CkanBaseModel):
    success: bool = True
    result: PackageSearchResult


class ErrorPayload(CkanBaseModel):
    message: str | None = None


class ErrorResponse(CkanBaseModel):
    success: bool = False
    error: ErrorPayload | None = None
