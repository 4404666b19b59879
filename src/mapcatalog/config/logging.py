"""Shared logging helpers for mapcatalog."""

from __future__ import annotations

import logging


def configure_logging(*, level: int = logging.INFO, force: bool = False) -> None:
    """Initialise the root logger once with sensible defaults.

    Provider feedback (blacklisted records, layers dropped by their scale range,
    unreachable WMS servers) is logged at INFO and WARNING, so the default level
    keeps it visible on the CLI. Pass ``force=True`` to reconfigure in tests.
    """

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )
