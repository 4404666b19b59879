"""Errors surfaced to callers of a catalog discovery."""

from __future__ import annotations

UPSTREAM_UNAVAILABLE_TITLE = "Group is not available"
UPSTREAM_UNAVAILABLE_MESSAGE = (
    "An error occurred while invoking package_search on the CKAN server. "
    "If you entered the link manually, please verify that the link is correct. "
    "This error may also indicate that the server does not support CORS. If this is your "
    "server, verify that CORS is enabled and enable it if it is not. If you do not control "
    "the server, please contact its administrator and ask them to enable CORS, or ask for "
    "the server to be added to the list of hosts routed through the proxy. "
    "If you did not enter this link manually, the group may be temporarily unavailable or "
    "there may be a problem with your internet connection."
)


class DiscoveryError(RuntimeError):
    """Base class for user-facing discovery failures."""

    def __init__(self, title: str, message: str) -> None:
        super().__init__(f"{title}: {message}")
        self.title = title
        self.message = message


class UpstreamUnavailableError(DiscoveryError):
    """Raised when any ``package_search`` query of a run fails."""

    def __init__(self, *, url: str) -> None:
        super().__init__(UPSTREAM_UNAVAILABLE_TITLE, UPSTREAM_UNAVAILABLE_MESSAGE)
        self.url = url
