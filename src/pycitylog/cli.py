"""Command-line access to a cities backend.

Each invocation opens a client and a store, runs one operation through
the store's access handle and prints the resulting state as JSON::

    pycitylog list
    pycitylog show 3
    pycitylog add --lat 48.85 --lng 2.35 --geocode --notes "rainy"
    pycitylog delete 3
    pycitylog geocode 41.9 12.5
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from collections.abc import Sequence
from datetime import datetime
from typing import Any

import aiohttp

from pycitylog.client import CitiesClient
from pycitylog.config import CityLogConfig
from pycitylog.exceptions import CityLogError
from pycitylog.geocode import ReverseGeocoder, country_code_to_emoji, draft_from_geocode
from pycitylog.models.city import CityDraft, Position
from pycitylog.state.access import CitiesHandle
from pycitylog.state.events import StoreState
from pycitylog.state.store import CitiesStore

_logger = logging.getLogger(__name__)


def _parse_date(value: str) -> datetime:
    try:
        return datetime.fromisoformat(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"not an ISO date: {value!r}") from exc


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pycitylog", description="Travel log cities client")
    parser.add_argument("--base-url", help="cities API base address (default: CITYLOG_BASE_URL or localhost)")
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("list", help="list all cities")

    show = sub.add_parser("show", help="fetch one city")
    show.add_argument("city_id")

    add = sub.add_parser("add", help="create a city")
    add.add_argument("--lat", type=float, required=True)
    add.add_argument("--lng", type=float, required=True)
    add.add_argument("--city", dest="city_name", help="city name (required unless --geocode)")
    add.add_argument("--country", default="")
    add.add_argument("--country-code", help="ISO alpha-2 code used for the flag emoji")
    add.add_argument("--date", type=_parse_date, default=None, help="ISO date of the visit (default: now)")
    add.add_argument("--notes", default="")
    add.add_argument("--geocode", action="store_true", help="pre-fill name and country from the coordinates")

    delete = sub.add_parser("delete", help="delete a city")
    delete.add_argument("city_id")

    geocode = sub.add_parser("geocode", help="reverse geocode a coordinate")
    geocode.add_argument("lat", type=float)
    geocode.add_argument("lng", type=float)

    return parser


def _dump(payload: Any) -> None:
    print(json.dumps(payload, indent=2, ensure_ascii=False))


def _state_payload(state: StoreState) -> dict[str, Any]:
    return state.model_dump(mode="json", by_alias=True)


async def _build_draft(args: argparse.Namespace, config: CityLogConfig) -> CityDraft:
    position = Position(lat=args.lat, lng=args.lng)
    visited_on = args.date or datetime.now()
    if args.geocode:
        async with aiohttp.ClientSession() as session:
            geocoder = ReverseGeocoder(session, base_url=config.geocode_url, timeout=config.request_timeout)
            result = await geocoder.lookup(args.lat, args.lng)
        return draft_from_geocode(
            result,
            position,
            visited_on=visited_on,
            notes=args.notes,
            city_name=args.city_name,
        )
    if not args.city_name:
        raise CityLogError("--city is required unless --geocode is given")
    emoji = country_code_to_emoji(args.country_code) if args.country_code else ""
    return CityDraft(
        city_name=args.city_name,
        country=args.country,
        date=visited_on,
        notes=args.notes,
        position=position,
        emoji=emoji,
    )


async def _run_store_command(args: argparse.Namespace, config: CityLogConfig) -> int:
    async with CitiesClient(config) as client:
        draft = await _build_draft(args, config) if args.command == "add" else None
        store = CitiesStore.from_config(client, config)
        async with store:
            cities: CitiesHandle = store.handle()
            if args.command == "show":
                await cities.select(args.city_id)
            elif args.command == "add":
                assert draft is not None  # noqa: S101
                await cities.add(draft)
            elif args.command == "delete":
                await cities.remove(args.city_id)
            elif not config.auto_refresh:
                await cities.refresh_all()
            state = cities.snapshot()

    if args.command == "show":
        _dump(_state_payload(state)["current_city"])
    else:
        _dump(_state_payload(state))
    if state.error:
        print(f"error: {state.error}", file=sys.stderr)
        return 1
    return 0


async def _run_geocode(args: argparse.Namespace, config: CityLogConfig) -> int:
    async with aiohttp.ClientSession() as session:
        geocoder = ReverseGeocoder(session, base_url=config.geocode_url, timeout=config.request_timeout)
        result = await geocoder.lookup(args.lat, args.lng)
    payload = result.model_dump(mode="json", by_alias=True)
    payload["emoji"] = country_code_to_emoji(result.country_code)
    _dump(payload)
    return 0


async def _main_async(args: argparse.Namespace) -> int:
    overrides: dict[str, Any] = {}
    if args.base_url:
        overrides["base_url"] = args.base_url
    config = CityLogConfig.from_env(**overrides)
    if args.command == "geocode":
        return await _run_geocode(args, config)
    return await _run_store_command(args, config)


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        return asyncio.run(_main_async(args))
    except (CityLogError, ValueError) as exc:
        _logger.debug("Command failed", exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
