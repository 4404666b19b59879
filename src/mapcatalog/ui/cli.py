# ruff: noqa: T201

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import asdict
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from mapcatalog.adapters.ckan import should_cache_package_search
from mapcatalog.app import load_ckan_catalog
from mapcatalog.config import (
    CACHE_BACKENDS,
    ConfigurationError,
    configure_logging,
    get_ckan_config,
)
from mapcatalog.domain.discovery import DiscoveryError

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Discover map layers published through CKAN")
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log debug output",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    ckan = subparsers.add_parser("ckan", help="Build a catalog tree from a CKAN server")
    ckan.add_argument(
        "--url",
        type=str,
        help="CKAN server URL (defaults to $CKAN_URL)",
    )
    ckan.add_argument(
        "--filter-query",
        dest="filter_queries",
        action="append",
        help="package_search query fragment, e.g. 'fq=res_format:wms' (repeatable)",
    )
    ckan.add_argument(
        "--blacklist",
        action="append",
        help="Dataset title or group name to leave out (repeatable)",
    )
    ckan.add_argument(
        "--filter-by-capabilities",
        action="store_true",
        help="Drop WMS layers that their server's GetCapabilities does not list",
    )
    ckan.add_argument(
        "--minimum-max-scale-denominator",
        type=float,
        help="Drop WMS layers whose MaxScaleDenominator is below this value",
    )
    ckan.add_argument(
        "--data-custodian",
        type=str,
        help="Data custodian to set on every item instead of the CKAN organization",
    )
    ckan.add_argument(
        "--wms-parameter",
        dest="wms_parameters",
        action="append",
        metavar="KEY=VALUE",
        help="Extra parameter added to every item's requests (repeatable)",
    )
    ckan.add_argument(
        "--http-cache",
        choices=CACHE_BACKENDS,
        help="HTTP cache backend (defaults to $MAPCATALOG_HTTP_CACHE, else sqlite)",
    )
    ckan.add_argument(
        "--show-events",
        action="store_true",
        help="Include diagnostic events in the output",
    )

    return parser.parse_args(list(argv))


def _parse_key_values(values: Sequence[str] | None) -> dict[str, str] | None:
    if not values:
        return None
    parsed: dict[str, str] = {}
    for value in values:
        key, separator, item = value.partition("=")
        if not separator or not key.strip():
            raise ValueError(f"Expected KEY=VALUE, got: {value}")
        parsed[key.strip()] = item
    return parsed


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        parsed_args = _parse_args(args_list)
        configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)
        if parsed_args.command != "ckan":
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301
        config = get_ckan_config(
            url=parsed_args.url,
            filter_queries=parsed_args.filter_queries,
            blacklist=parsed_args.blacklist,
            filter_by_capabilities=parsed_args.filter_by_capabilities,
            minimum_max_scale_denominator=parsed_args.minimum_max_scale_denominator,
            data_custodian=parsed_args.data_custodian,
            wms_parameters=_parse_key_values(parsed_args.wms_parameters),
            cache_backend=parsed_args.http_cache,
            cache_predicate=should_cache_package_search,
        )
    except (ValueError, ConfigurationError):
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        result = load_ckan_catalog(config)
    except DiscoveryError as exc:
        log.error("%s: %s", exc.title, exc.message)  # noqa: TRY400
        sys.exit(1)
    except Exception:
        log.exception("Fatal error during discovery")
        sys.exit(1)

    output: dict[str, object] = {"catalog": result.root.to_json(), "records": result.records}
    if parsed_args.show_events:
        output["events"] = [
            {"event": type(event).__name__, **asdict(event)} for event in result.events
        ]
    print(json.dumps(output, indent=2))


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    """Console-script entry point: load `.env`, trap Ctrl+C, run the CLI."""
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
