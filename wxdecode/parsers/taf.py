from __future__ import annotations

import datetime as dt
import logging
from dataclasses import dataclass, field

from wxdecode.grammar import FM_RE, FM_TIME_RE, PROB_RE, TIME_RE, VALID_RE
from wxdecode.models import Forecast, Taf
from wxdecode.parsers.classifier import Context, FieldAccumulator, classify_all
from wxdecode.timegroups import fm_time, observation_time, utc_now, validity_window

logger = logging.getLogger(__name__)

AMENDMENTS = ("AMD", "COR")
INTERVAL_CHANGES = ("BECMG", "TEMPO", "INTER")
CHAIN_TYPES = ("BASE", "FM")


@dataclass
class _Period:
    type: str
    header: list[str] = field(default_factory=list)
    body: list[str] = field(default_factory=list)
    probability: int | None = None
    valid_from: dt.datetime | None = None
    valid_to: dt.datetime | None = None
    inherits: bool = False


def is_change_keyword(token: str) -> bool:
    return token in INTERVAL_CHANGES or bool(FM_RE.match(token) or PROB_RE.match(token))


def _peek(parts: list[str], index: int) -> str | None:
    return parts[index] if index < len(parts) else None


def _open_period(parts: list[str], index: int, anchor: dt.datetime) -> tuple[_Period, int]:
    """Start a change group at ``parts[index]``; return it and the next index."""
    keyword = parts[index]
    index += 1

    match = FM_RE.match(keyword)
    if match:
        period = _Period("FM", header=[keyword])
        value = match.group("time")
        following = _peek(parts, index)
        if value is None and following is not None and FM_TIME_RE.match(following):
            value = following
            period.header.append(following)
            index += 1
        if value is not None:
            period.valid_from = fm_time(value, anchor)
        return period, index

    match = PROB_RE.match(keyword)
    if match:
        period = _Period(keyword, header=[keyword], probability=int(match.group("prob")))
        following = _peek(parts, index)
        # PROB30 TEMPO 1212/1214 reads as one probabilistic group.
        if following in ("TEMPO", "INTER"):
            period.header.append(following)
            index += 1
    else:
        period = _Period(keyword, header=[keyword])

    following = _peek(parts, index)
    if following is not None and VALID_RE.match(following):
        period.valid_from, period.valid_to = validity_window(following, anchor)
        period.header.append(following)
        index += 1
    elif period.probability is not None:
        period.inherits = True
    return period, index


def _segment(parts: list[str], start: int, anchor: dt.datetime) -> list[_Period]:
    periods = [_Period("BASE")]
    index = start
    while index < len(parts):
        part = parts[index]
        if is_change_keyword(part):
            period, index = _open_period(parts, index, anchor)
            periods.append(period)
            continue
        periods[-1].body.append(part)
        index += 1
    return periods


def _fill_timeline(
    periods: list[_Period], valid_from: dt.datetime | None, valid_to: dt.datetime | None
) -> None:
    periods[0].valid_from = valid_from

    chain = [period for period in periods if period.type in CHAIN_TYPES]
    for current, following in zip(chain, chain[1:]):
        current.valid_to = following.valid_from
    chain[-1].valid_to = valid_to

    for position, period in enumerate(periods):
        if period.inherits:
            previous = periods[position - 1]
            period.valid_from, period.valid_to = previous.valid_from, previous.valid_to

    for period in periods:
        if period.valid_to is None:
            period.valid_to = valid_to


def _to_forecast(period: _Period) -> Forecast:
    acc = FieldAccumulator()
    classify_all(period.body, Context.TAF, acc)
    return Forecast(
        type=period.type,
        valid_from=period.valid_from,
        valid_to=period.valid_to,
        probability=period.probability,
        raw=" ".join(period.header + period.body),
        wind=acc.wind,
        wind_shear=tuple(acc.wind_shear),
        visibility=acc.visibility,
        vertical_visibility=acc.vertical_visibility,
        weather=tuple(acc.weather),
        clouds=tuple(acc.clouds),
    )


def decode_taf(raw: str, now: dt.datetime | None = None) -> Taf:
    """Decode a TAF into its header and an ordered timeline of forecast periods.

    The first period is always ``BASE``. ``FM`` periods carry only a start
    time, so each BASE/FM period ends where the next FM begins and the last
    one ends with the TAF validity. A ``PROBnn`` group without its own
    interval covers the window of the period before it.
    """
    now = now or utc_now()
    parts = raw.split()
    if parts and parts[0] == "TAF":
        parts = parts[1:]
    while parts and parts[0] in AMENDMENTS:
        parts = parts[1:]
    if len(parts) < 3:
        logger.debug("TAF too short to decode: %r", raw)
        return Taf(raw=raw)

    station = parts[0]
    index = 1
    issued_at = None
    if TIME_RE.match(parts[index]):
        issued_at = observation_time(parts[index], now)
        index += 1
    anchor = issued_at or now

    valid_from = valid_to = None
    if index < len(parts) and VALID_RE.match(parts[index]):
        valid_from, valid_to = validity_window(parts[index], anchor)
        index += 1

    periods = _segment(parts, index, anchor)
    _fill_timeline(periods, valid_from, valid_to)
    logger.debug("TAF %s decoded into %d periods", station, len(periods))

    return Taf(
        raw=raw,
        station=station,
        issued_at=issued_at,
        valid_from=valid_from,
        valid_to=valid_to,
        forecasts=tuple(_to_forecast(period) for period in periods),
    )
