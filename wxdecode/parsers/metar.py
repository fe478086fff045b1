from __future__ import annotations

import datetime as dt
import logging

from wxdecode.grammar import METAR_BOUNDARIES
from wxdecode.models import Metar
from wxdecode.parsers.classifier import Context, FieldAccumulator, classify_all
from wxdecode.parsers.remarks import decode_remarks
from wxdecode.timegroups import observation_time, utc_now

logger = logging.getLogger(__name__)

REPORT_TYPES = ("METAR", "SPECI")


def _main_body_end(parts: list[str]) -> int:
    for index, part in enumerate(parts):
        if part in METAR_BOUNDARIES:
            return index
    return len(parts)


def decode_metar(raw: str, now: dt.datetime | None = None) -> Metar:
    """Decode one METAR line.

    Never raises: a report too short to carry a station and time group comes
    back with only ``raw`` set, and tokens the classifier does not recognize
    are listed in ``unhandled``.
    """
    now = now or utc_now()
    parts = raw.split()
    if parts and parts[0] in REPORT_TYPES:
        parts = parts[1:]
    if len(parts) < 2:
        logger.debug("METAR too short to decode: %r", raw)
        return Metar(raw=raw)

    end = _main_body_end(parts)
    acc = FieldAccumulator()
    classify_all(parts[2:end], Context.METAR, acc)

    remarks = ()
    if "RMK" in parts[end:]:
        remarks = decode_remarks(parts[parts.index("RMK", end) + 1 :])

    return Metar(
        raw=raw,
        station=parts[0],
        time=observation_time(parts[1], now),
        wind=acc.wind,
        wind_shear=tuple(acc.wind_shear),
        visibility=acc.visibility,
        vertical_visibility=acc.vertical_visibility,
        weather=tuple(acc.weather),
        clouds=tuple(acc.clouds),
        runway_conditions=tuple(acc.runway_conditions),
        temperature=acc.temperature,
        dew_point=acc.dew_point,
        pressure=acc.pressure,
        pressure_unit=acc.pressure_unit,
        special_codes=tuple(acc.special_codes),
        remarks=remarks,
        unhandled=tuple(acc.unhandled),
    )
