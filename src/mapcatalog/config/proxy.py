"""CORS proxy configuration values."""

from __future__ import annotations

from dataclasses import dataclass, field

from .env import env_list, optional_env_var

DEFAULT_PROXY_CACHE_HINT = "1d"


@dataclass(frozen=True, slots=True)
class ProxyConfig:
    """Where the CORS proxy lives and which hosts must be routed through it."""

    base_url: str
    proxy_domains: frozenset[str] = field(default_factory=frozenset)
    always_proxy: bool = False


def get_proxy_config() -> ProxyConfig | None:
    base_url = optional_env_var("MAPCATALOG_PROXY_URL")
    if base_url is None:
        return None
    always = (optional_env_var("MAPCATALOG_ALWAYS_PROXY") or "").lower() in {"1", "true", "yes"}
    return ProxyConfig(
        base_url=base_url,
        proxy_domains=frozenset(domain.lower() for domain in env_list("MAPCATALOG_PROXY_DOMAINS")),
        always_proxy=always,
    )
