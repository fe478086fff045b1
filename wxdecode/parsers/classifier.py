"""Token classifier shared by the METAR main body and TAF forecast periods.

Rules are tried in order and the first one that recognizes the token wins. A
rule may consume up to three tokens (wind plus variation, split fractional
visibility, multi-token wind shear); the number it reports is how far the
cursor advances.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field, replace
from typing import Any, Callable, NamedTuple, Sequence

from wxdecode.grammar import (
    ALTIMETER_RE,
    CALM_WIND_RE,
    CLOUD_RE,
    CLOUD_TYPES,
    E_WIND_RE,
    EXT_CLOUD_RE,
    NDV_RE,
    QNH_RE,
    RUNWAY_CLEARED_RE,
    RUNWAY_COND_RE,
    SPECIAL_CODES,
    TEMP_ONLY_RE,
    TEMP_RE,
    VAR_WIND_RE,
    VIS_DIR_RE,
    VIS_FRACTION_RE,
    VIS_METERS_RE,
    VIS_SM_RE,
    VIS_WHOLE_RE,
    VV_RE,
    WIND_RE,
    WS_ALT_RE,
    WS_PHASE_RE,
    WS_R_RE,
    WS_RWY_RE,
    is_weather_code,
)
from wxdecode.models import (
    AltitudeWindShear,
    Cloud,
    RunwayCondition,
    RunwayWindShear,
    Wind,
    WindShear,
)

logger = logging.getLogger(__name__)


class Context(enum.Enum):
    METAR = "metar"
    TAF = "taf"


@dataclass
class FieldAccumulator:
    wind: Wind | None = None
    wind_shear: list[WindShear] = field(default_factory=list)
    visibility: str | None = None
    vertical_visibility: int | None = None
    weather: list[str] = field(default_factory=list)
    clouds: list[Cloud] = field(default_factory=list)
    runway_conditions: list[RunwayCondition] = field(default_factory=list)
    temperature: int | None = None
    dew_point: int | None = None
    pressure: float | None = None
    pressure_unit: str | None = None
    special_codes: list[str] = field(default_factory=list)
    unhandled: list[str] = field(default_factory=list)


Recognizer = Callable[[Sequence[str], int], int]
Extractor = Callable[[Any, Sequence[str]], None]

BOTH = frozenset({Context.METAR, Context.TAF})
METAR_ONLY = frozenset({Context.METAR})


@dataclass(frozen=True)
class Rule:
    name: str
    recognize: Recognizer
    extract: Extractor
    contexts: frozenset[Context] = BOTH


class Classification(NamedTuple):
    kind: str
    consumed: int


def to_int(value: str | None) -> int | None:
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None


def signed_temp(value: str) -> int | None:
    if value.startswith("M"):
        parsed = to_int(value[1:])
        return -parsed if parsed is not None else None
    return to_int(value)


def _single(pattern) -> Recognizer:
    def recognize(tokens: Sequence[str], index: int) -> int:
        return 1 if pattern.match(tokens[index]) else 0

    return recognize


def _next(tokens: Sequence[str], index: int, offset: int = 1) -> str | None:
    position = index + offset
    return tokens[position] if position < len(tokens) else None


# special codes


def _recognize_special(tokens: Sequence[str], index: int) -> int:
    return 1 if tokens[index] in SPECIAL_CODES else 0


def _extract_special(acc: FieldAccumulator, group: Sequence[str]) -> None:
    code = group[0]
    acc.special_codes.append(code)
    if code == "CAVOK":
        acc.visibility = code


# wind


def parse_wind(token: str) -> Wind | None:
    match = WIND_RE.match(token) or E_WIND_RE.match(token)
    if match:
        direction = match.group("dir")
        return Wind(
            direction=None if direction == "///" else direction,
            speed=to_int(match.group("speed")),
            gust=to_int(match.group("gust")),
            unit=match.group("unit"),
        )
    match = CALM_WIND_RE.match(token)
    if match:
        return Wind(direction="000", speed=0, gust=to_int(match.group("gust")), unit=match.group("unit"))
    return None


def _is_wind(token: str) -> bool:
    return bool(WIND_RE.match(token) or E_WIND_RE.match(token) or CALM_WIND_RE.match(token))


def _recognize_wind(tokens: Sequence[str], index: int) -> int:
    token = tokens[index]
    if _is_wind(token):
        following = _next(tokens, index)
        if following is not None and VAR_WIND_RE.match(following):
            return 2
        return 1
    if VAR_WIND_RE.match(token):
        return 1
    return 0


def _extract_wind(acc: FieldAccumulator, group: Sequence[str]) -> None:
    wind = parse_wind(group[0])
    variation = VAR_WIND_RE.match(group[-1])
    if wind is None:
        # A variation group on its own amends whatever wind is already known.
        wind = acc.wind or Wind(direction=None)
    if variation:
        wind = replace(
            wind,
            variable_from=int(variation.group("from")),
            variable_to=int(variation.group("to")),
        )
    acc.wind = wind


# wind shear


def _recognize_wind_shear(tokens: Sequence[str], index: int) -> int:
    token = tokens[index]
    if WS_ALT_RE.match(token):
        return 1
    if token != "WS":
        return 0
    second = _next(tokens, index)
    third = _next(tokens, index, 2)
    if second is not None and third is not None and WS_PHASE_RE.match(second) and WS_RWY_RE.match(third):
        return 3
    if second is not None and WS_R_RE.match(second):
        return 2
    return 0


def _extract_wind_shear(acc: FieldAccumulator, group: Sequence[str]) -> None:
    raw = " ".join(group)
    match = WS_ALT_RE.match(group[0])
    if match:
        direction = match.group("dir")
        wind = Wind(
            direction=direction,
            speed=to_int(match.group("speed")),
            gust=to_int(match.group("gust")),
            unit=match.group("unit"),
        )
        acc.wind_shear.append(
            AltitudeWindShear(altitude_hundreds_ft=int(match.group("alt")), wind=wind, raw=raw)
        )
        return
    if len(group) == 3:
        runway = WS_RWY_RE.match(group[2]).group("rwy")
        acc.wind_shear.append(RunwayWindShear(phase=group[1], runway=runway, raw=raw))
        return
    runway = WS_R_RE.match(group[1]).group("rwy")
    acc.wind_shear.append(RunwayWindShear(phase="ALL", runway=runway, raw=raw))


# visibility


def _recognize_visibility(tokens: Sequence[str], index: int) -> int:
    token = tokens[index]
    if VIS_WHOLE_RE.match(token):
        following = _next(tokens, index)
        if following is not None and VIS_FRACTION_RE.match(following):
            return 2
        return 0
    if VIS_SM_RE.match(token) or VIS_METERS_RE.match(token):
        return 1
    if VIS_DIR_RE.match(token) or NDV_RE.match(token):
        return 1
    return 0


def _extract_visibility(acc: FieldAccumulator, group: Sequence[str]) -> None:
    acc.visibility = " ".join(group)


def _extract_vertical_visibility(acc: FieldAccumulator, group: Sequence[str]) -> None:
    acc.vertical_visibility = to_int(VV_RE.match(group[0]).group("height"))


# runway visual range / runway condition


def _strip_prefix(value: str) -> tuple[str | None, int | None]:
    if value[:1] in ("P", "M"):
        return value[0], to_int(value[1:])
    return None, to_int(value)


def parse_runway_condition(token: str) -> RunwayCondition | None:
    match = RUNWAY_CLEARED_RE.match(token)
    if match:
        return RunwayCondition(
            runway=match.group("rwy"),
            raw=token,
            cleared=True,
            cleared_minutes=to_int(match.group("minutes")),
        )
    match = RUNWAY_COND_RE.match(token)
    if not match:
        return None
    prefix, visibility = _strip_prefix(match.group("vis"))
    vis_min = vis_max = None
    if match.group("max"):
        vis_min = visibility
        _, vis_max = _strip_prefix(match.group("max"))
    return RunwayCondition(
        runway=match.group("rwy"),
        raw=token,
        visibility=visibility,
        vis_min=vis_min,
        vis_max=vis_max,
        unit="FT" if match.group("unit") else "M",
        prefix=prefix,
        trend=match.group("trend"),
    )


def _recognize_runway(tokens: Sequence[str], index: int) -> int:
    token = tokens[index]
    return 1 if RUNWAY_CLEARED_RE.match(token) or RUNWAY_COND_RE.match(token) else 0


def _extract_runway(acc: FieldAccumulator, group: Sequence[str]) -> None:
    condition = parse_runway_condition(group[0])
    if condition is not None:
        acc.runway_conditions.append(condition)


# weather and clouds


def _recognize_weather(tokens: Sequence[str], index: int) -> int:
    return 1 if is_weather_code(tokens[index]) else 0


def _extract_weather(acc: FieldAccumulator, group: Sequence[str]) -> None:
    acc.weather.append(group[0])


def parse_cloud(token: str) -> Cloud | None:
    match = CLOUD_RE.match(token) or EXT_CLOUD_RE.match(token)
    if not match:
        return None
    base = to_int(match.group("base"))
    cloud_type = match.group("type")
    return Cloud(
        coverage=match.group("cover"),
        height_ft=base * 100 if base is not None else None,
        cloud_type=cloud_type if cloud_type in CLOUD_TYPES else None,
    )


def _recognize_cloud(tokens: Sequence[str], index: int) -> int:
    token = tokens[index]
    return 1 if CLOUD_RE.match(token) or EXT_CLOUD_RE.match(token) else 0


def _extract_cloud(acc: FieldAccumulator, group: Sequence[str]) -> None:
    cloud = parse_cloud(group[0])
    if cloud is not None:
        acc.clouds.append(cloud)


# temperature and pressure


def _recognize_temperature(tokens: Sequence[str], index: int) -> int:
    token = tokens[index]
    return 1 if TEMP_RE.match(token) or TEMP_ONLY_RE.match(token) else 0


def _extract_temperature(acc: FieldAccumulator, group: Sequence[str]) -> None:
    match = TEMP_RE.match(group[0])
    if match:
        acc.temperature = signed_temp(match.group("temp"))
        acc.dew_point = signed_temp(match.group("dew"))
        return
    acc.temperature = signed_temp(TEMP_ONLY_RE.match(group[0]).group("temp"))
    acc.dew_point = None


def _recognize_pressure(tokens: Sequence[str], index: int) -> int:
    token = tokens[index]
    return 1 if QNH_RE.match(token) or ALTIMETER_RE.match(token) else 0


def _extract_pressure(acc: FieldAccumulator, group: Sequence[str]) -> None:
    if acc.pressure_unit is not None:
        return
    match = QNH_RE.match(group[0])
    if match:
        acc.pressure = float(int(match.group("value")))
        acc.pressure_unit = "hPa"
        return
    match = ALTIMETER_RE.match(group[0])
    acc.pressure = int(match.group("value")) / 100.0
    acc.pressure_unit = "inHg"


RULES: tuple[Rule, ...] = (
    Rule("special", _recognize_special, _extract_special),
    Rule("wind", _recognize_wind, _extract_wind),
    Rule("wind_shear", _recognize_wind_shear, _extract_wind_shear),
    Rule("visibility", _recognize_visibility, _extract_visibility),
    Rule("vertical_visibility", _single(VV_RE), _extract_vertical_visibility),
    Rule("runway", _recognize_runway, _extract_runway),
    Rule("weather", _recognize_weather, _extract_weather),
    Rule("cloud", _recognize_cloud, _extract_cloud),
    Rule("temperature", _recognize_temperature, _extract_temperature, METAR_ONLY),
    Rule("pressure", _recognize_pressure, _extract_pressure, METAR_ONLY),
)


def run_rules(
    rules: Sequence[Rule],
    tokens: Sequence[str],
    index: int,
    acc: Any,
    context: Context | None = None,
) -> Classification | None:
    for rule in rules:
        if context is not None and context not in rule.contexts:
            continue
        consumed = rule.recognize(tokens, index)
        if consumed:
            rule.extract(acc, tokens[index : index + consumed])
            return Classification(rule.name, consumed)
    return None


def classify(
    tokens: Sequence[str], index: int, context: Context, acc: FieldAccumulator
) -> Classification:
    result = run_rules(RULES, tokens, index, acc, context)
    if result is not None:
        return result
    if context is Context.METAR:
        logger.debug("unhandled METAR token %r", tokens[index])
        acc.unhandled.append(tokens[index])
        return Classification("unhandled", 1)
    return Classification("skipped", 1)


def classify_all(
    tokens: Sequence[str], context: Context, acc: FieldAccumulator
) -> list[Classification]:
    """Classify every token of a body, honouring multi-token groups."""
    results = []
    index = 0
    while index < len(tokens):
        result = classify(tokens, index, context, acc)
        results.append(result)
        index += result.consumed
    return results
