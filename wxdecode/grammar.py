from __future__ import annotations

import re
from types import MappingProxyType

TIME_RE = re.compile(r"^(?P<day>\d{2})(?P<hour>\d{2})(?P<min>\d{2})Z$")
VALID_RE = re.compile(r"^(?P<from_day>\d{2})(?P<from_hour>\d{2})/(?P<to_day>\d{2})(?P<to_hour>\d{2})$")
FM_RE = re.compile(r"^FM(?P<time>\d{6})?$")
FM_TIME_RE = re.compile(r"^(?P<day>\d{2})(?P<hour>\d{2})(?P<min>\d{2})$")
PROB_RE = re.compile(r"^PROB(?P<prob>\d{2})$")

WIND_RE = re.compile(
    r"^(?P<dir>VRB|\d{3}|///)(?P<speed>\d{2,3}|//)(G(?P<gust>\d{2,3}))?(?P<unit>KT|MPS)$"
)
CALM_WIND_RE = re.compile(r"^0+(G(?P<gust>\d{2}))?(?P<unit>KT|MPS)$")
E_WIND_RE = re.compile(r"^E(?P<dir>\d{3})(?P<speed>\d{2,3})(G(?P<gust>\d{2,3}))?(?P<unit>KT)$")
VAR_WIND_RE = re.compile(r"^(?P<from>\d{3})V(?P<to>\d{3})$")

WS_ALT_RE = re.compile(
    r"^WS(?P<alt>\d{3})/(?P<dir>\d{3})(?P<speed>\d{2,3})(G(?P<gust>\d{2,3}))?(?P<unit>KT|MPS)$"
)
WS_PHASE_RE = re.compile(r"^(?P<phase>TKOF|LDG|ALL)$")
WS_RWY_RE = re.compile(r"^RWY(?P<rwy>\d{2}[LCR]?)?$")
WS_R_RE = re.compile(r"^R(?P<rwy>\d{2}[LCR]?)?$")

VIS_SM_RE = re.compile(r"^[MP]?\d+(/\d+)?SM$")
VIS_WHOLE_RE = re.compile(r"^\d$")
VIS_FRACTION_RE = re.compile(r"^\d/\d{1,2}SM$")
VIS_METERS_RE = re.compile(r"^\d{4}$")
VIS_DIR_RE = re.compile(r"^\d{4}(N|NE|E|SE|S|SW|W|NW)$")
NDV_RE = re.compile(r"^\d{4,5}NDV$")

VV_RE = re.compile(r"^VV(?P<height>\d{3}|///)$")

RUNWAY_CLEARED_RE = re.compile(r"^R(?P<rwy>\d{2}[LCR]?)/CLRD(?P<minutes>\d{2})$")
RUNWAY_COND_RE = re.compile(
    r"^R(?P<rwy>\d{2}[LCR]?)/(?P<vis>[MP]?\d+)(V(?P<max>[MP]?\d+))?(?P<unit>FT)?(/?(?P<trend>[UDN]))?$"
)

CLOUD_RE = re.compile(r"^(?P<cover>SKC|CLR|FEW|SCT|BKN|OVC)(?P<base>\d{3}|///)?(?P<type>CB|TCU|///)?$")
EXT_CLOUD_RE = re.compile(r"^(?P<cover>FEW|SCT|BKN|OVC)(?P<type>CB|TCU)(?P<base>\d{3})$")

TEMP_RE = re.compile(r"^(?P<temp>M?\d{2})/(?P<dew>M?\d{2})$")
TEMP_ONLY_RE = re.compile(r"^(?P<temp>M?\d{2})/(//)?$")

QNH_RE = re.compile(r"^Q(?P<value>\d{4})$")
ALTIMETER_RE = re.compile(r"^A(?P<value>\d{4})$")

SPECIAL_CODES = MappingProxyType(
    {
        "NOSIG": "no significant changes expected",
        "AUTO": "automated observation",
        "COR": "corrected report",
        "CCA": "corrected report",
        "NSC": "no significant clouds",
        "NCD": "no clouds detected",
        "CAVOK": "ceiling and visibility OK",
        "RTD": "routine delayed (late) observation",
    }
)

WEATHER_CODES = MappingProxyType(
    {
        "WS": "wind shear",
        "VC": "in the vicinity",
        "+": "heavy",
        "-": "light",
        "MI": "shallow",
        "PR": "partial",
        "BC": "patches",
        "DR": "low drifting",
        "BL": "blowing",
        "SH": "showers",
        "TS": "thunderstorm",
        "FZ": "freezing",
        "DZ": "drizzle",
        "RA": "rain",
        "SN": "snow",
        "SG": "snow grains",
        "IC": "ice crystals",
        "PL": "ice pellets",
        "GR": "hail",
        "GS": "small hail",
        "UP": "unknown precipitation",
        "BR": "mist",
        "FG": "fog",
        "FU": "smoke",
        "VA": "volcanic ash",
        "DU": "widespread dust",
        "SA": "sand",
        "HZ": "haze",
        "PY": "spray",
        "PO": "dust whirls",
        "SQ": "squalls",
        "FC": "funnel cloud",
        "+FC": "tornado/waterspout",
        "SS": "sandstorm",
        "DS": "duststorm",
    }
)

CLOUD_COVERAGE = MappingProxyType(
    {
        "SKC": "sky clear",
        "CLR": "clear",
        "FEW": "few clouds",
        "SCT": "scattered clouds",
        "BKN": "broken clouds",
        "OVC": "overcast",
    }
)
CLOUD_PREFIXES = tuple(CLOUD_COVERAGE)

CLOUD_TYPES = MappingProxyType({"CB": "cumulonimbus", "TCU": "towering cumulus"})

# Tokens that end the main body of a METAR.
METAR_BOUNDARIES = frozenset({"RMK", "TEMPO", "BECMG", "INTER"})

REMARK_CODES = MappingProxyType(
    {
        "AO1": "automated station without precipitation sensor",
        "AO2": "automated station with precipitation sensor",
        "AO1A": "automated station without precipitation sensor",
        "AO2A": "automated station with precipitation sensor",
        "SLP": "sea level pressure",
        "RMK": "remarks indicator",
        "PRESRR": "pressure rising rapidly",
        "PRESFR": "pressure falling rapidly",
        "NOSIG": "no significant changes expected",
        "TEMPO": "temporary",
        "BECMG": "becoming",
        "VIRGA": "precipitation not reaching ground",
        "FROPA": "frontal passage",
        "$": "weather observing equipment requires maintenance",
        "TSNO": "thunderstorm information not available",
        "PNO": "precipitation amount not available",
        "RVRNO": "runway visual range not available",
        "PWINO": "present weather identifier not available",
        "FZRANO": "freezing rain information not available",
        "VISNO": "secondary visibility not available",
        "CHINO": "secondary ceiling height not available",
    }
)

PRESSURE_TENDENCY = (
    "increasing, then decreasing",
    "increasing, then steady",
    "increasing steadily",
    "increasing, then increasing more rapidly",
    "steady",
    "decreasing, then increasing",
    "decreasing, then steady",
    "decreasing steadily",
    "decreasing, then decreasing more rapidly",
)

RECENT_WEATHER = MappingProxyType(
    {
        "RA": "rain",
        "SN": "snow",
        "GR": "hail",
        "GS": "small hail",
        "TS": "thunderstorm",
        "FG": "fog",
        "SQ": "squall",
        "FC": "funnel cloud",
    }
)

PRECIP_EVENTS = MappingProxyType(
    {
        "RA": "rain",
        "SN": "snow",
        "DZ": "drizzle",
        "GR": "hail",
        "GS": "small hail",
        "PE": "ice pellets",
        "IC": "ice crystals",
        "PL": "ice pellets",
        "SG": "snow grains",
        "TS": "thunderstorm",
        "FG": "fog",
        "FU": "smoke",
        "VA": "volcanic ash",
        "DU": "dust",
        "SA": "sand",
        "HZ": "haze",
        "PY": "spray",
        "BR": "mist",
        "SHSN": "snow shower",
        "SHRA": "rain shower",
        "SHPE": "ice pellet shower",
        "SHPL": "ice pellet shower",
        "SHGR": "hail shower",
        "SHGS": "small hail shower",
    }
)

ICE_ACCRETION_HOURS = MappingProxyType({"1": "1-hour", "2": "3-hour", "3": "6-hour"})

PEAK_WIND_RE = re.compile(r"^PK WND (?P<dir>\d{3})(?P<speed>\d{2,3})/(?P<hour>\d{2})?(?P<min>\d{2})$")
SLP_RE = re.compile(r"^SLP(?P<value>\d{3})$")
TEMP_TENTHS_RE = re.compile(r"^T(?P<tsign>[01])(?P<temp>\d{3})(?P<dsign>[01])(?P<dew>\d{3})$")
PRECIP_EVENT_RE = re.compile(
    r"^(?P<phen>SHSN|SHRA|SHPE|SHPL|SHGR|SHGS|RA|SN|DZ|GR|GS|PE|IC|PL|SG|TS|FG|FU|VA|DU|SA|HZ|PY|BR)"
    r"(?P<event>B|E)(?P<min>\d{2})$"
)
MAX_TEMP_6H_RE = re.compile(r"^1(?P<sign>[01])(?P<value>\d{3})$")
MIN_TEMP_6H_RE = re.compile(r"^2(?P<sign>[01])(?P<value>\d{3})$")
TEMP_24H_RE = re.compile(r"^4(?P<max_sign>[01])(?P<max>\d{3})(?P<min_sign>[01])(?P<min>\d{3})$")
PRESSURE_3H_RE = re.compile(r"^3(?P<value>\d{4})$")
PRESSURE_TENDENCY_RE = re.compile(r"^5(?P<code>\d)(?P<value>\d{3})$")
PRECIP_HOURLY_RE = re.compile(r"^P(?P<value>\d{4})$")
PRECIP_24H_RE = re.compile(r"^7(?P<value>\d{4})$")
PRECIP_6H_RE = re.compile(r"^6(?P<value>\d{4})$")
SNOW_DEPTH_RE = re.compile(r"^4/(?P<value>\d{3})$")
ICE_ACCRETION_RE = re.compile(r"^I(?P<hour>[123])(?P<value>\d{3})$")
RECENT_WEATHER_RE = re.compile(r"^RE(?P<wx>[A-Z+-]{2,})$")
RVR_REMARK_RE = re.compile(r"^R.*/")
SNINCR_RE = re.compile(r"^(?P<amount>\d+)/(?P<depth>\d+)$")
CIG_RE = re.compile(r"^(?P<height>\d{3})(V(?P<max>\d{3}))?$")
WSHFT_RE = re.compile(r"^(?P<hour>\d{2})?(?P<min>\d{2})$")


def is_weather_code(token: str) -> bool:
    if token.startswith(CLOUD_PREFIXES):
        return False
    return any(code in token for code in WEATHER_CODES)
