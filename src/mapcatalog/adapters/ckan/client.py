"""HTTP fetcher for the CKAN ``package_search`` action."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

import httpx
from pydantic import ValidationError

from mapcatalog.domain.ports import FetchError

from .schema import ErrorResponse
from .translator import parse_package_search

if TYPE_CHECKING:
    from mapcatalog.adapters.http_resilience import ResilientClient
    from mapcatalog.domain.model import CatalogRecord

log = getLogger(__name__)


class CkanAPIError(FetchError):
    """Raised when CKAN answers but reports ``success: false``."""


def should_cache_package_search(payload: object) -> bool:
    """Only successful searches are worth caching."""

    return isinstance(payload, dict) and payload.get("success") is True


@dataclass(slots=True)
class CkanPackageSearchFetcher:
    client: ResilientClient

    async def __call__(self, url: str) -> list[CatalogRecord]:
        try:
            response = await self.client.get(url)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise FetchError(f"package_search request failed: {exc}", url=url) from exc

        # CKAN reports action errors as 4xx responses with a JSON body
        try:
            payload = response.json()
        except ValueError as exc:
            if response.is_error:
                raise FetchError(
                    f"package_search request failed with HTTP {response.status_code}", url=url
                ) from exc
            raise FetchError("package_search did not return JSON", url=url) from exc

        if isinstance(payload, dict) and payload.get("success") is False:
            error = ErrorResponse.model_validate(payload).error
            message = error.message if error is not None and error.message else "unknown error"
            raise CkanAPIError(f"CKAN reported an error: {message}", url=url)

        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise FetchError(f"package_search request failed: {exc}", url=url) from exc

        try:
            records = parse_package_search(payload)
        except ValidationError as exc:
            raise FetchError("Unexpected package_search response payload", url=url) from exc

        log.debug("package_search %s returned %d dataset(s)", url, len(records))
        return records
