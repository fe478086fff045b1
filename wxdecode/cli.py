from __future__ import annotations

import argparse
import dataclasses
import datetime as dt
import json
import logging
import sys
from pathlib import Path
from typing import Any

from wxdecode.adapters.base import FetchError, MetarTafAdapter, StationResolver
from wxdecode.adapters.live_metar_taf import LiveMetarTafAdapter
from wxdecode.adapters.sample_metar_taf import SampleMetarTafAdapter
from wxdecode.adapters.stations import MappingStationResolver, with_site
from wxdecode.parsers.metar import decode_metar
from wxdecode.parsers.taf import decode_taf
from wxdecode.timegroups import isoformat_z

logger = logging.getLogger(__name__)


def parse_now(value: str) -> dt.datetime:
    try:
        parsed = dt.datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid timestamp: {value!r}") from exc
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=dt.timezone.utc)
    return parsed.astimezone(dt.timezone.utc)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="wxdecode", description="Decode METAR and TAF reports")
    parser.add_argument("stations", nargs="*", help="ICAO station identifiers")
    parser.add_argument("--source", default="sample", choices=["sample", "live"], help="Report source")
    parser.add_argument("--samples-dir", type=Path, default=None, help="Directory of sample reports")
    parser.add_argument("--sites", type=Path, default=None, help="JSON table of station site details")
    parser.add_argument("--kind", default="both", choices=["metar", "taf", "both"])
    parser.add_argument("--raw", default=None, help="Decode this report text instead of fetching")
    parser.add_argument("--now", type=parse_now, default=None, help="Reference UTC time (ISO-8601)")
    parser.add_argument("--verbose", "-v", action="store_true")
    args = parser.parse_args(argv)
    if args.raw is None and not args.stations:
        parser.error("give at least one station or --raw")
    return args


def _json_default(value: Any) -> str:
    if isinstance(value, dt.datetime):
        return isoformat_z(value)
    raise TypeError(f"cannot serialise {type(value).__name__}")


def to_json(payload: Any) -> str:
    return json.dumps(payload, default=_json_default, indent=2, ensure_ascii=False)


def build_adapter(args: argparse.Namespace) -> MetarTafAdapter:
    if args.source == "live":
        return LiveMetarTafAdapter()
    return SampleMetarTafAdapter(args.samples_dir)


def build_resolver(args: argparse.Namespace) -> StationResolver | None:
    if args.sites is None:
        return None
    return MappingStationResolver.from_json(args.sites)


def decode_raw(
    text: str, kind: str, now: dt.datetime | None, resolver: StationResolver | None = None
) -> dict:
    if kind == "taf" or (kind == "both" and text.split()[:1] == ["TAF"]):
        return dataclasses.asdict(with_site(decode_taf(text, now), resolver))
    return dataclasses.asdict(with_site(decode_metar(text, now), resolver))


def decode_station(
    adapter: MetarTafAdapter,
    ident: str,
    kind: str,
    now: dt.datetime | None,
    resolver: StationResolver | None = None,
) -> dict:
    result: dict[str, Any] = {"station": ident.upper()}
    if kind in ("metar", "both"):
        observation = adapter.fetch_metar(ident)
        metar = with_site(decode_metar(observation.raw, now), resolver)
        result["metar"] = dataclasses.asdict(metar)
        result["source"] = observation.source
    if kind in ("taf", "both"):
        observation = adapter.fetch_taf(ident)
        taf = with_site(decode_taf(observation.raw, now), resolver)
        result["taf"] = dataclasses.asdict(taf)
        result["source"] = observation.source
    return result


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    resolver = build_resolver(args)

    if args.raw is not None:
        print(to_json(decode_raw(args.raw, args.kind, args.now, resolver)))
        return 0

    adapter = build_adapter(args)
    results = []
    for ident in args.stations:
        try:
            results.append(decode_station(adapter, ident, args.kind, args.now, resolver))
        except FetchError as exc:
            print(f"wxdecode: {exc}", file=sys.stderr)
            return 1
    print(to_json(results))
    return 0


if __name__ == "__main__":
    sys.exit(main())
