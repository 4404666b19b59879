"""Per-run settings for a CKAN catalog discovery."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING
from urllib.parse import urlsplit

if TYPE_CHECKING:
    from collections.abc import Mapping


@dataclass(frozen=True, slots=True, kw_only=True)
class SearchConfiguration:
    """Immutable inputs of one discovery run.

    ``filter_queries`` are raw ``package_search`` query-string fragments (for example
    ``fq=res_format:wms``); each one becomes an independent search and the results
    are concatenated in declaration order. ``blacklist`` holds dataset titles and
    group display names that must never reach the tree.
    """

    url: str
    filter_queries: tuple[str, ...] = ()
    blacklist: frozenset[str] = field(default_factory=frozenset)
    minimum_max_scale_denominator: float | None = None
    filter_by_capabilities: bool = False
    data_custodian: str | None = None
    wms_parameters: Mapping[str, str] | None = None

    def __post_init__(self) -> None:
        if not self.url or not self.url.strip():
            raise ValueError("SearchConfiguration requires a non-empty CKAN url")
        try:
            parts = urlsplit(self.url.strip())
        except ValueError as exc:
            raise ValueError(f"Invalid CKAN url: {self.url!r}") from exc
        if not parts.scheme or not parts.netloc:
            raise ValueError(f"CKAN url must be absolute: {self.url!r}")
        # freeze caller-owned containers
        object.__setattr__(self, "filter_queries", tuple(self.filter_queries))
        object.__setattr__(self, "blacklist", frozenset(self.blacklist))
        if self.wms_parameters is not None:
            object.__setattr__(self, "wms_parameters", MappingProxyType(dict(self.wms_parameters)))

    @property
    def effective_scale_threshold(self) -> float | None:
        """Scale threshold that actually applies; ignored without capability filtering."""

        if not self.filter_by_capabilities:
            return None
        return self.minimum_max_scale_denominator

    def is_blacklisted(self, name: str | None) -> bool:
        return name is not None and name in self.blacklist
