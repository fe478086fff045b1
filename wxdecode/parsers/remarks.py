from __future__ import annotations

from typing import Sequence

from wxdecode.grammar import (
    CIG_RE,
    ICE_ACCRETION_HOURS,
    ICE_ACCRETION_RE,
    MAX_TEMP_6H_RE,
    MIN_TEMP_6H_RE,
    PEAK_WIND_RE,
    PRECIP_24H_RE,
    PRECIP_6H_RE,
    PRECIP_EVENT_RE,
    PRECIP_EVENTS,
    PRECIP_HOURLY_RE,
    PRESSURE_3H_RE,
    PRESSURE_TENDENCY,
    PRESSURE_TENDENCY_RE,
    RECENT_WEATHER,
    RECENT_WEATHER_RE,
    REMARK_CODES,
    RVR_REMARK_RE,
    SLP_RE,
    SNINCR_RE,
    SNOW_DEPTH_RE,
    TEMP_24H_RE,
    TEMP_TENTHS_RE,
    WSHFT_RE,
)
from wxdecode.models import Remark
from wxdecode.parsers.classifier import Rule, run_rules

UNKNOWN_REMARK = "unknown remark code"


def sea_level_pressure_hpa(value: int) -> float:
    prefix = 900.0 if value >= 500 else 1000.0
    return prefix + value / 10


def _tenths(sign: str, digits: str) -> float:
    value = int(digits) / 10.0
    return -value if sign == "1" else value


def _fahrenheit(celsius: float) -> float:
    return celsius * 9 / 5 + 32


def _pattern(regex):
    def recognize(tokens: Sequence[str], index: int) -> int:
        return 1 if regex.match(tokens[index]) else 0

    return recognize


def _keyword_pair(keyword: str, regex):
    def recognize(tokens: Sequence[str], index: int) -> int:
        if tokens[index] != keyword or index + 1 >= len(tokens):
            return 0
        return 2 if regex.match(tokens[index + 1]) else 0

    return recognize


def _peak_wind(tokens: Sequence[str], index: int) -> int:
    if tokens[index] != "PK" or index + 2 >= len(tokens):
        return 0
    return 3 if PEAK_WIND_RE.match(" ".join(tokens[index : index + 3])) else 0


def _describe_peak_wind(group: Sequence[str]) -> str:
    match = PEAK_WIND_RE.match(" ".join(group))
    if match.group("hour"):
        when = f"{match.group('hour')}:{match.group('min')}"
    else:
        when = f"{int(match.group('min'))} minutes past the hour"
    return f"peak wind {match.group('dir')}° at {match.group('speed')} knots at {when}"


def _slp(tokens: Sequence[str], index: int) -> int:
    return 1 if tokens[index].startswith("SLP") and tokens[index] != "SLP" else 0


def _describe_slp(group: Sequence[str]) -> str:
    match = SLP_RE.match(group[0])
    if match:
        return f"sea level pressure {sea_level_pressure_hpa(int(match.group('value'))):.1f} hPa"
    if group[0] == "SLPNO":
        return "sea level pressure not available"
    return "sea level pressure (invalid format)"


def _describe_temp_tenths(group: Sequence[str]) -> str:
    match = TEMP_TENTHS_RE.match(group[0])
    temp = _tenths(match.group("tsign"), match.group("temp"))
    dew = _tenths(match.group("dsign"), match.group("dew"))
    return f"temperature {temp:.1f}°C, dew point {dew:.1f}°C"


def _describe_precip_event(group: Sequence[str]) -> str:
    match = PRECIP_EVENT_RE.match(group[0])
    phenomenon = PRECIP_EVENTS.get(match.group("phen"), match.group("phen"))
    action = "began" if match.group("event") == "B" else "ended"
    return f"{phenomenon} {action} at {int(match.group('min'))} minutes past the hour"


def _describe_max_6h(group: Sequence[str]) -> str:
    match = MAX_TEMP_6H_RE.match(group[0])
    return f"6-hour maximum temperature {_tenths(match.group('sign'), match.group('value')):.1f}°C"


def _describe_min_6h(group: Sequence[str]) -> str:
    match = MIN_TEMP_6H_RE.match(group[0])
    return f"6-hour minimum temperature {_tenths(match.group('sign'), match.group('value')):.1f}°C"


def _describe_24h_temps(group: Sequence[str]) -> str:
    match = TEMP_24H_RE.match(group[0])
    high = _tenths(match.group("max_sign"), match.group("max"))
    low = _tenths(match.group("min_sign"), match.group("min"))
    return (
        f"24-hour temperature range: max {high:.1f}°C ({_fahrenheit(high):.1f}°F), "
        f"min {low:.1f}°C ({_fahrenheit(low):.1f}°F)"
    )


def _describe_pressure_3h(group: Sequence[str]) -> str:
    value = int(PRESSURE_3H_RE.match(group[0]).group("value")) / 10.0
    return f"3-hour pressure change: {value:.1f} hPa"


def _describe_tendency(group: Sequence[str]) -> str:
    match = PRESSURE_TENDENCY_RE.match(group[0])
    code = int(match.group("code"))
    tendency = PRESSURE_TENDENCY[code] if code < len(PRESSURE_TENDENCY) else "unknown"
    change = int(match.group("value")) / 10.0
    return f"pressure tendency: {tendency}, {change:.1f} hPa change"


def _describe_hourly_precip(group: Sequence[str]) -> str:
    inches = int(PRECIP_HOURLY_RE.match(group[0]).group("value")) / 100.0
    return f"precipitation of {inches:.2f} inches in the last hour"


def _describe_24h_precip(group: Sequence[str]) -> str:
    inches = int(PRECIP_24H_RE.match(group[0]).group("value")) / 100.0
    return f"24-hour precipitation: {inches:.2f} inches"


def _describe_6h_precip(group: Sequence[str]) -> str:
    inches = int(PRECIP_6H_RE.match(group[0]).group("value")) / 100.0
    return f"3- or 6-hour precipitation: {inches:.2f} inches"


def _describe_snow_depth(group: Sequence[str]) -> str:
    return f"snow depth: {int(SNOW_DEPTH_RE.match(group[0]).group('value'))} inches"


def _describe_ice_accretion(group: Sequence[str]) -> str:
    match = ICE_ACCRETION_RE.match(group[0])
    inches = int(match.group("value")) / 100.0
    return f"{ICE_ACCRETION_HOURS[match.group('hour')]} ice accretion: {inches:.2f} inches"


def _describe_recent_weather(group: Sequence[str]) -> str:
    weather = RECENT_WEATHER_RE.match(group[0]).group("wx")
    if weather in RECENT_WEATHER:
        return f"recent {RECENT_WEATHER[weather]}"
    return "recent weather phenomenon"


def _describe_snincr(group: Sequence[str]) -> str:
    match = SNINCR_RE.match(group[1])
    return f"snow increasing rapidly: {match.group('amount')} inch within {match.group('depth')} hour"


def _describe_ceiling(group: Sequence[str]) -> str:
    match = CIG_RE.match(group[1])
    low = int(match.group("height")) * 100
    if match.group("max"):
        return f"variable ceiling height: {low} to {int(match.group('max')) * 100} feet"
    return f"variable ceiling height: {low} feet"


def _describe_wind_shift(group: Sequence[str]) -> str:
    match = WSHFT_RE.match(group[1])
    if match.group("hour"):
        return f"wind shift at {match.group('hour')}:{match.group('min')}"
    return f"wind shift at {int(match.group('min'))} minutes past the hour"


def _known_code(tokens: Sequence[str], index: int) -> int:
    return 1 if tokens[index] in REMARK_CODES else 0


def _unknown(tokens: Sequence[str], index: int) -> int:
    return 1


def _describe(describer):
    def extract(remarks: list[Remark], group: Sequence[str]) -> None:
        remarks.append(Remark(raw=" ".join(group), description=describer(group)))

    return extract


REMARK_RULES: tuple[Rule, ...] = (
    Rule("peak_wind", _peak_wind, _describe(_describe_peak_wind)),
    Rule("sea_level_pressure", _slp, _describe(_describe_slp)),
    Rule("temperature_tenths", _pattern(TEMP_TENTHS_RE), _describe(_describe_temp_tenths)),
    Rule("precipitation_event", _pattern(PRECIP_EVENT_RE), _describe(_describe_precip_event)),
    Rule("max_temperature_6h", _pattern(MAX_TEMP_6H_RE), _describe(_describe_max_6h)),
    Rule("min_temperature_6h", _pattern(MIN_TEMP_6H_RE), _describe(_describe_min_6h)),
    Rule("temperature_24h", _pattern(TEMP_24H_RE), _describe(_describe_24h_temps)),
    Rule("pressure_change_3h", _pattern(PRESSURE_3H_RE), _describe(_describe_pressure_3h)),
    Rule("pressure_tendency", _pattern(PRESSURE_TENDENCY_RE), _describe(_describe_tendency)),
    Rule("precipitation_hourly", _pattern(PRECIP_HOURLY_RE), _describe(_describe_hourly_precip)),
    Rule("precipitation_24h", _pattern(PRECIP_24H_RE), _describe(_describe_24h_precip)),
    Rule("precipitation_6h", _pattern(PRECIP_6H_RE), _describe(_describe_6h_precip)),
    Rule("snow_depth", _pattern(SNOW_DEPTH_RE), _describe(_describe_snow_depth)),
    Rule("ice_accretion", _pattern(ICE_ACCRETION_RE), _describe(_describe_ice_accretion)),
    Rule("recent_weather", _pattern(RECENT_WEATHER_RE), _describe(_describe_recent_weather)),
    Rule("runway_visual_range", _pattern(RVR_REMARK_RE), _describe(lambda group: "runway visual range information")),
    Rule("snow_increase", _keyword_pair("SNINCR", SNINCR_RE), _describe(_describe_snincr)),
    Rule("ceiling", _keyword_pair("CIG", CIG_RE), _describe(_describe_ceiling)),
    Rule("wind_shift", _keyword_pair("WSHFT", WSHFT_RE), _describe(_describe_wind_shift)),
    Rule("remark_code", _known_code, _describe(lambda group: REMARK_CODES[group[0]])),
    Rule("unknown", _unknown, _describe(lambda group: UNKNOWN_REMARK)),
)


def decode_remarks(tokens: Sequence[str]) -> tuple[Remark, ...]:
    remarks: list[Remark] = []
    index = 0
    while index < len(tokens):
        result = run_rules(REMARK_RULES, tokens, index, remarks)
        index += result.consumed
    return tuple(remarks)
