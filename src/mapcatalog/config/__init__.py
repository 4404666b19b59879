"""Application configuration helpers."""

from __future__ import annotations

from .ckan import CACHE_BACKENDS, DEFAULT_FILTER_QUERIES, CkanConfig, get_ckan_config
from .env import require_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .proxy import ProxyConfig, get_proxy_config
from .storage import StorageConfig, get_storage_config

__all__ = [
    "CACHE_BACKENDS",
    "DEFAULT_FILTER_QUERIES",
    "CacheConfig",
    "CkanConfig",
    "ConfigurationError",
    "MissingConfigurationError",
    "ProxyConfig",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "StorageConfig",
    "configure_logging",
    "get_ckan_config",
    "get_proxy_config",
    "get_storage_config",
    "require_env_var",
    "require_env_vars",
]
