"""Public interface for the CKAN adapter."""

from __future__ import annotations

from .client import CkanAPIError, CkanPackageSearchFetcher, should_cache_package_search
from .schema import PackagePayload, PackageSearchResponse, ResourcePayload
from .translator import parse_package_search, translate_package

__all__ = [
    "CkanAPIError",
    "CkanPackageSearchFetcher",
    "PackagePayload",
    "PackageSearchResponse",
    "ResourcePayload",
    "parse_package_search",
    "should_cache_package_search",
    "translate_package",
]
