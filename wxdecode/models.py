from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class SiteInfo:
    name: str = ""
    state: str = ""
    country: str = ""


@dataclass(frozen=True)
class Wind:
    """Surface wind.

    ``direction`` is ``"VRB"``, a three-digit bearing (``"000"`` is calm) or None
    when the sensor reported ``///``. ``speed`` None means missing, not zero.
    """

    direction: str | None = None
    speed: int | None = None
    gust: int | None = None
    unit: str = "KT"
    variable_from: int | None = None
    variable_to: int | None = None


@dataclass(frozen=True)
class RunwayWindShear:
    phase: str
    runway: str | None
    raw: str


@dataclass(frozen=True)
class AltitudeWindShear:
    altitude_hundreds_ft: int
    wind: Wind
    raw: str


WindShear = Union[RunwayWindShear, AltitudeWindShear]


@dataclass(frozen=True)
class Cloud:
    coverage: str
    height_ft: int | None = None
    cloud_type: str | None = None


@dataclass(frozen=True)
class RunwayCondition:
    runway: str
    raw: str
    cleared: bool = False
    cleared_minutes: int | None = None
    visibility: int | None = None
    vis_min: int | None = None
    vis_max: int | None = None
    unit: str = "M"
    prefix: str | None = None
    trend: str | None = None


@dataclass(frozen=True)
class Remark:
    raw: str
    description: str


@dataclass(frozen=True)
class Metar:
    raw: str
    station: str = ""
    time: dt.datetime | None = None
    site: SiteInfo = SiteInfo()
    wind: Wind | None = None
    wind_shear: tuple[WindShear, ...] = ()
    visibility: str | None = None
    vertical_visibility: int | None = None
    weather: tuple[str, ...] = ()
    clouds: tuple[Cloud, ...] = ()
    runway_conditions: tuple[RunwayCondition, ...] = ()
    temperature: int | None = None
    dew_point: int | None = None
    pressure: float | None = None
    pressure_unit: str | None = None
    special_codes: tuple[str, ...] = ()
    remarks: tuple[Remark, ...] = ()
    unhandled: tuple[str, ...] = ()


@dataclass(frozen=True)
class Forecast:
    type: str
    valid_from: dt.datetime | None = None
    valid_to: dt.datetime | None = None
    probability: int | None = None
    raw: str = ""
    wind: Wind | None = None
    wind_shear: tuple[WindShear, ...] = ()
    visibility: str | None = None
    vertical_visibility: int | None = None
    weather: tuple[str, ...] = ()
    clouds: tuple[Cloud, ...] = ()


@dataclass(frozen=True)
class Taf:
    raw: str
    station: str = ""
    issued_at: dt.datetime | None = None
    valid_from: dt.datetime | None = None
    valid_to: dt.datetime | None = None
    site: SiteInfo = SiteInfo()
    forecasts: tuple[Forecast, ...] = ()
