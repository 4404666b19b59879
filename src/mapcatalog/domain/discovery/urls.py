"""URL handling shared by the coordinator and the tree builder."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING
from urllib.parse import parse_qsl, urlsplit, urlunsplit

if TYPE_CHECKING:
    from mapcatalog.domain.ports import ProxySelector

PROXY_CACHE_HINT = "1d"
PACKAGE_SEARCH_PATH = "/api/3/action/package_search?rows=100000&"
GET_CAPABILITIES_QUERY = "?service=WMS&request=GetCapabilities"

_LAYER_PARAMETERS = ("LAYERS", "layers")


@dataclass(frozen=True, slots=True)
class ServerLayerKey:
    """A layer as known to the server that publishes it."""

    endpoint: str
    layer_name: str | None

    @classmethod
    def from_url(cls, url: str) -> ServerLayerKey:
        """Raises ``ValueError`` when ``url`` cannot be split (e.g. a broken IPv6 host)."""

        return cls(endpoint=strip_query(url), layer_name=layer_name_from_url(url))


def strip_query(url: str) -> str:
    """Drop the query string, keeping everything else verbatim."""

    parts = urlsplit(url)
    return urlunsplit(parts._replace(query=""))


def layer_name_from_url(url: str) -> str | None:
    """Return the ``LAYERS`` (or ``layers``) query parameter, first occurrence wins."""

    params: dict[str, str] = {}
    for key, value in parse_qsl(urlsplit(url).query, keep_blank_values=True):
        params.setdefault(key, value)
    for key in _LAYER_PARAMETERS:
        value = params.get(key)
        if value:
            return value
    return None


def proxied(url: str, proxy: ProxySelector | None) -> str:
    if proxy is not None and proxy.should_use_proxy(url):
        return proxy.get_url(url, PROXY_CACHE_HINT)
    return url


def package_search_url(
    endpoint: str,
    filter_query: str,
    *,
    proxy: ProxySelector | None = None,
) -> str:
    base = proxied(strip_query(endpoint).rstrip("/"), proxy)
    return f"{base}{PACKAGE_SEARCH_PATH}{filter_query}"


def capabilities_url(endpoint: str, *, proxy: ProxySelector | None = None) -> str:
    return proxied(f"{endpoint}{GET_CAPABILITIES_QUERY}", proxy)
