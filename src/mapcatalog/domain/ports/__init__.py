"""Domain port definitions for adapters."""

from __future__ import annotations

from .fetching import CapabilitiesFetcher, FetchError, PackageSearchFetcher, ProxySelector

__all__ = [
    "CapabilitiesFetcher",
    "FetchError",
    "PackageSearchFetcher",
    "ProxySelector",
]
