"""CKAN discovery configuration values."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal

from mapcatalog.domain.model import SearchConfiguration

from .env import env_json_list, env_list, optional_env_var, require_env_var
from .errors import ConfigurationError
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, ShouldCacheHook
from .proxy import ProxyConfig, get_proxy_config

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

DEFAULT_FILTER_QUERIES: tuple[str, ...] = ("fq=res_format:wms",)
CKAN_TIMEOUT_SECONDS = 60.0


type CacheBackend = Literal["sqlite", "memory", "off"]

CACHE_BACKENDS: tuple[CacheBackend, ...] = ("sqlite", "memory", "off")


@dataclass(frozen=True, slots=True)
class CkanConfig:
    """Everything needed to discover a CKAN catalog."""

    search: SearchConfiguration
    resilience: ResilienceConfig
    proxy: ProxyConfig | None = None


def default_resilience_config(
    *,
    cache_backend: CacheBackend = "sqlite",
    cache_predicate: ShouldCacheHook | None = None,
) -> ResilienceConfig:
    """Resilience settings for CKAN and WMS requests.

    The ``sqlite`` cache lives under the data directory (``MAPCATALOG_DATA_DIR``)
    and survives between runs; ``off`` disables caching.
    """

    cache = (
        None
        if cache_backend == "off"
        else CacheConfig(backend=cache_backend, should_cache=cache_predicate)
    )
    return ResilienceConfig(
        name="ckan",
        timeout_seconds=CKAN_TIMEOUT_SECONDS,
        ratelimit=RateLimit(max_calls=8, per_seconds=1.0),
        cache=cache,
    )


def _cache_backend_from_env() -> CacheBackend:
    value = (optional_env_var("MAPCATALOG_HTTP_CACHE") or "sqlite").lower()
    for backend in CACHE_BACKENDS:
        if backend == value:
            return backend
    raise ConfigurationError(f"MAPCATALOG_HTTP_CACHE must be one of {', '.join(CACHE_BACKENDS)}")


def get_ckan_config(  # noqa: PLR0913
    *,
    url: str | None = None,
    filter_queries: Iterable[str] | None = None,
    blacklist: Iterable[str] | None = None,
    filter_by_capabilities: bool = False,
    minimum_max_scale_denominator: float | None = None,
    data_custodian: str | None = None,
    wms_parameters: Mapping[str, str] | None = None,
    resilience: ResilienceConfig | None = None,
    proxy: ProxyConfig | None = None,
    cache_backend: CacheBackend | None = None,
    cache_predicate: ShouldCacheHook | None = None,
) -> CkanConfig:
    """Build a ``CkanConfig`` from keyword overrides, falling back to the environment."""

    effective_url = url or require_env_var("CKAN_URL")
    queries = (
        tuple(filter_queries)
        if filter_queries is not None
        else env_json_list("CKAN_FILTER_QUERIES") or DEFAULT_FILTER_QUERIES
    )
    names = tuple(blacklist) if blacklist is not None else env_list("CKAN_BLACKLIST")
    if minimum_max_scale_denominator is not None and minimum_max_scale_denominator <= 0:
        raise ConfigurationError("minimum_max_scale_denominator must be positive")

    try:
        search = SearchConfiguration(
            url=effective_url,
            filter_queries=queries,
            blacklist=frozenset(names),
            minimum_max_scale_denominator=minimum_max_scale_denominator,
            filter_by_capabilities=filter_by_capabilities,
            data_custodian=data_custodian or optional_env_var("CKAN_DATA_CUSTODIAN"),
            wms_parameters=wms_parameters,
        )
    except ValueError as exc:
        raise ConfigurationError(str(exc)) from exc

    if resilience is None:
        resilience = default_resilience_config(
            cache_backend=cache_backend or _cache_backend_from_env(),
            cache_predicate=cache_predicate,
        )

    return CkanConfig(
        search=search,
        resilience=resilience,
        proxy=proxy or get_proxy_config(),
    )
