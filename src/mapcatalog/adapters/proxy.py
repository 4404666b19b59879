"""CORS proxy URL rewriting."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import httpx

if TYPE_CHECKING:
    from mapcatalog.config.proxy import ProxyConfig


@dataclass(frozen=True, slots=True)
class CorsProxy:
    """Route requests for hosts without CORS support through a proxy.

    Proxied URLs take the form ``{base_url}/_{cache_hint}/{url}``; the hint tells the
    proxy how long it may cache the response.
    """

    config: ProxyConfig

    def should_use_proxy(self, url: str) -> bool:
        try:
            parsed = httpx.URL(url)
        except httpx.InvalidURL:
            return False
        if not parsed.is_absolute_url:
            return False
        if self.config.always_proxy:
            return True
        host = parsed.host.lower()
        return any(
            host == domain or host.endswith(f".{domain}") for domain in self.config.proxy_domains
        )

    def get_url(self, url: str, cache_hint: str | None = None) -> str:
        base = self.config.base_url
        if not base.endswith("/"):
            base = f"{base}/"
        if cache_hint:
            return f"{base}_{cache_hint}/{url}"
        return f"{base}{url}"

