"""HTTP fetcher for WMS GetCapabilities documents."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING
from xml.etree.ElementTree import ParseError

import httpx
from pydantic import ValidationError

from mapcatalog.domain.ports import FetchError

from .translator import WmsCapabilitiesError, parse_capabilities

if TYPE_CHECKING:
    from mapcatalog.adapters.http_resilience import ResilientClient
    from mapcatalog.domain.model import CapabilityLayer

log = getLogger(__name__)


@dataclass(slots=True)
class WmsCapabilitiesFetcher:
    client: ResilientClient

    async def __call__(self, url: str) -> list[CapabilityLayer]:
        try:
            response = await self.client.get(url)
            response.raise_for_status()
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise FetchError(f"GetCapabilities request failed: {exc}", url=url) from exc

        try:
            layers = parse_capabilities(response.content)
        # RecursionError: layer nesting deeper than the interpreter stack
        except (ParseError, WmsCapabilitiesError, ValidationError, RecursionError) as exc:
            raise FetchError(f"Unreadable GetCapabilities document: {exc}", url=url) from exc

        log.debug("GetCapabilities %s advertised %d top-level layer(s)", url, len(layers))
        return layers
