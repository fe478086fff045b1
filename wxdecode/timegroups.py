"""Resolve day/hour/minute report groups into UTC timestamps.

Reports only carry the day of month, so the year and month come from a
reference time. Observation and issue times are never in the future: a day
later than the reference day belongs to the previous month. TAF validity and
change-group times are never before the issue time: a day earlier than the
anchor day belongs to the next month.
"""

from __future__ import annotations

import datetime as dt

from wxdecode.grammar import FM_TIME_RE, TIME_RE, VALID_RE


def utc_now() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


def _shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def _build(year: int, month: int, day: int, hour: int, minute: int) -> dt.datetime | None:
    extra_day = hour == 24 and minute == 0
    if extra_day:
        hour = 0
    try:
        value = dt.datetime(year, month, day, hour, minute, tzinfo=dt.timezone.utc)
    except ValueError:
        return None
    if extra_day:
        value += dt.timedelta(days=1)
    return value


def observation_time(token: str, now: dt.datetime) -> dt.datetime | None:
    match = TIME_RE.match(token)
    if not match:
        return None
    day = int(match.group("day"))
    year, month = now.year, now.month
    if day > now.day:
        year, month = _shift_month(year, month, -1)
    return _build(year, month, day, int(match.group("hour")), int(match.group("min")))


def forecast_time(day: int, hour: int, minute: int, anchor: dt.datetime) -> dt.datetime | None:
    year, month = anchor.year, anchor.month
    if day < anchor.day:
        year, month = _shift_month(year, month, 1)
    return _build(year, month, day, hour, minute)


def fm_time(value: str, anchor: dt.datetime) -> dt.datetime | None:
    match = FM_TIME_RE.match(value)
    if not match:
        return None
    return forecast_time(
        int(match.group("day")), int(match.group("hour")), int(match.group("min")), anchor
    )


def validity_window(
    token: str, anchor: dt.datetime
) -> tuple[dt.datetime | None, dt.datetime | None]:
    match = VALID_RE.match(token)
    if not match:
        return None, None
    start = forecast_time(int(match.group("from_day")), int(match.group("from_hour")), 0, anchor)
    end = forecast_time(int(match.group("to_day")), int(match.group("to_hour")), 0, anchor)
    return start, end


def isoformat_z(value: dt.datetime) -> str:
    return value.isoformat().replace("+00:00", "Z")
