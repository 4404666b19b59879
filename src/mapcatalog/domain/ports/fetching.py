"""Ports for fetching catalog data from remote servers."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from mapcatalog.domain.model import CapabilityLayer, CatalogRecord


class FetchError(RuntimeError):
    """Raised by fetchers when a document cannot be retrieved or understood."""

    def __init__(self, message: str, *, url: str) -> None:
        super().__init__(message)
        self.url = url


@runtime_checkable
class PackageSearchFetcher(Protocol):
    """Callable port returning the datasets of one ``package_search`` URL."""

    async def __call__(self, url: str) -> Sequence[CatalogRecord]: ...


@runtime_checkable
class CapabilitiesFetcher(Protocol):
    """Callable port returning the top-level layers of a GetCapabilities URL."""

    async def __call__(self, url: str) -> Sequence[CapabilityLayer]: ...


@runtime_checkable
class ProxySelector(Protocol):
    """Decides whether a URL must be routed through the CORS proxy."""

    def should_use_proxy(self, url: str) -> bool: ...

    def get_url(self, url: str, cache_hint: str | None = None) -> str: ...


__all__ = ["CapabilitiesFetcher", "FetchError", "PackageSearchFetcher", "ProxySelector"]
