"""Command-line entrypoints for geopoint."""
from __future__ import annotations

import argparse
import asyncio
import json
import logging
from pathlib import Path
from typing import List, Optional

import httpx
import structlog
from dotenv import load_dotenv

from geopoint.core.point import GeoPoint
from geopoint.core.wire import dumps, loads
from geopoint.location.provider import LocationUnavailableError, build_provider
from geopoint.observability.log import configure_logging
from geopoint.observability.tracing import bind_context, clear_context
from geopoint.settings import DEFAULT_SETTINGS_PATH, Settings, load_settings

LOGGER = structlog.wrap_logger(logging.getLogger(__name__))

_UNITS = {
    "km": GeoPoint.kilometers_to,
    "mi": GeoPoint.miles_to,
    "rad": GeoPoint.angular_distance,
}


def build_arg_parser() -> argparse.ArgumentParser:
    """Create the CLI argument parser."""
    parser = argparse.ArgumentParser(prog="geopoint", description="Validated geographic points")
    parser.add_argument("--settings", default=str(DEFAULT_SETTINGS_PATH), help="Path to settings TOML")
    sub = parser.add_subparsers(dest="command", required=True)

    distance = sub.add_parser("distance", help="Great-circle distance between two points")
    distance.add_argument("lat1", type=float)
    distance.add_argument("lon1", type=float)
    distance.add_argument("lat2", type=float)
    distance.add_argument("lon2", type=float)
    distance.add_argument("--unit", choices=sorted(_UNITS), default="km", help="Output unit")

    encode = sub.add_parser("encode", help="Print the wire record for a point")
    encode.add_argument("latitude", type=float)
    encode.add_argument("longitude", type=float)

    decode = sub.add_parser("decode", help="Validate a wire record and print its coordinates")
    decode.add_argument("record", help="JSON wire record")

    sub.add_parser("current", help="Resolve the current location with the configured provider")

    return parser


def cmd_distance(args: argparse.Namespace) -> None:
    origin = GeoPoint.from_degrees(args.lat1, args.lon1)
    target = GeoPoint.from_degrees(args.lat2, args.lon2)
    value = _UNITS[args.unit](origin, target)
    print(f"{value:.6f} {args.unit}")


def cmd_encode(args: argparse.Namespace) -> None:
    point = GeoPoint.from_degrees(args.latitude, args.longitude)
    print(dumps(point).decode())


def cmd_decode(args: argparse.Namespace) -> None:
    point = loads(args.record)
    print(json.dumps({"latitude": point.latitude, "longitude": point.longitude}))


async def cmd_current(settings: Settings) -> None:
    provider = build_provider(settings.location)
    point = await GeoPoint.current(provider)
    LOGGER.info("location_resolved", latitude=point.latitude, longitude=point.longitude)
    print(dumps(point).decode())


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv()
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    settings = load_settings(Path(args.settings))
    configure_logging(settings.logging_config)
    bind_context(command=args.command)
    try:
        if args.command == "distance":
            cmd_distance(args)
        elif args.command == "encode":
            cmd_encode(args)
        elif args.command == "decode":
            cmd_decode(args)
        elif args.command == "current":
            asyncio.run(cmd_current(settings))
    except ValueError as exc:
        LOGGER.warning("invalid_input", error=str(exc))
        parser.exit(2, f"geopoint: error: {exc}\n")
    except (httpx.HTTPError, LocationUnavailableError) as exc:
        LOGGER.error("location_lookup_failed", error=str(exc))
        return 1
    finally:
        clear_context()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
