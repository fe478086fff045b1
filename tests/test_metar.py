import datetime as dt

import pytest

from wxdecode.models import AltitudeWindShear, Cloud, Metar, RunwayWindShear, Wind
from wxdecode.parsers.metar import decode_metar

UTC = dt.timezone.utc
NOW = dt.datetime(2024, 5, 10, 12, 0, tzinfo=UTC)

SCENARIO_A = "KSFO 071756Z 28015G25KT 10SM FEW008 BKN200 16/10 A2999 RMK AO2 SLP156 T01560100"


def test_scenario_a():
    metar = decode_metar(SCENARIO_A, now=NOW)
    assert metar.station == "KSFO"
    assert metar.time == dt.datetime(2024, 5, 7, 17, 56, tzinfo=UTC)
    assert metar.wind == Wind(direction="280", speed=15, gust=25, unit="KT")
    assert metar.visibility == "10SM"
    assert metar.clouds == (Cloud("FEW", 800), Cloud("BKN", 20000))
    assert (metar.temperature, metar.dew_point) == (16, 10)
    assert metar.pressure == pytest.approx(29.99)
    assert metar.pressure_unit == "inHg"
    assert metar.unhandled == ()

    descriptions = [remark.description for remark in metar.remarks]
    assert "sea level pressure 1015.6 hPa" in descriptions
    assert "temperature 15.6°C, dew point 10.0°C" in descriptions


def test_decode_is_deterministic():
    assert decode_metar(SCENARIO_A, now=NOW) == decode_metar(SCENARIO_A, now=NOW)


@pytest.mark.parametrize(
    "raw, pressure, unit",
    [
        ("EGLL 071750Z 24012KT 9999 Q1018 A3006", 1018.0, "hPa"),
        ("KXYZ 071750Z 24012KT 10SM A3006 Q1018", 30.06, "inHg"),
    ],
)
def test_first_pressure_group_is_kept(raw, pressure, unit):
    metar = decode_metar(raw, now=NOW)
    assert metar.pressure == pytest.approx(pressure)
    assert metar.pressure_unit == unit
    assert metar.unhandled == ()


@pytest.mark.parametrize("raw", ["", "KSFO", "METAR KSFO"])
def test_short_report_only_keeps_raw(raw):
    assert decode_metar(raw, now=NOW) == Metar(raw=raw)


def test_report_type_prefix_is_dropped():
    metar = decode_metar("SPECI " + SCENARIO_A, now=NOW)
    assert metar.station == "KSFO"
    assert metar.unhandled == ()


def test_cavok_and_negative_temperatures():
    metar = decode_metar("EFHK 071750Z 24012KT CAVOK M05/M10 Q1018 NOSIG", now=NOW)
    assert metar.visibility == "CAVOK"
    assert metar.special_codes == ("CAVOK", "NOSIG")
    assert (metar.temperature, metar.dew_point) == (-5, -10)


def test_split_visibility_and_weather():
    metar = decode_metar("KJFK 071751Z 31008KT 1 1/2SM -RA BR OVC005 08/07 A2992", now=NOW)
    assert metar.visibility == "1 1/2SM"
    assert metar.weather == ("-RA", "BR")
    assert metar.clouds == (Cloud("OVC", 500),)


def test_runway_visual_range_and_vertical_visibility():
    metar = decode_metar("EDDF 071750Z 24012KT 0800 R25L/P1500U FG VV002 03/03 Q1020", now=NOW)
    assert metar.visibility == "0800"
    assert metar.vertical_visibility == 2
    assert metar.weather == ("FG",)
    (condition,) = metar.runway_conditions
    assert (condition.runway, condition.prefix, condition.visibility, condition.trend) == ("25L", "P", 1500, "U")


def test_wind_shear_and_variation():
    metar = decode_metar(
        "KXYZ 071750Z 24012KT 200V280 10SM WS TKOF RWY27 WS020/05065KT SCT030 20/10 A3000",
        now=NOW,
    )
    assert (metar.wind.variable_from, metar.wind.variable_to) == (200, 280)
    assert metar.wind_shear[0] == RunwayWindShear(phase="TKOF", runway="27", raw="WS TKOF RWY27")
    assert isinstance(metar.wind_shear[1], AltitudeWindShear)
    assert metar.wind_shear[1].altitude_hundreds_ft == 20
    assert metar.unhandled == ()


def test_trend_section_is_not_part_of_main_body():
    metar = decode_metar("KSFO 071756Z 28015KT 10SM TEMPO 3SM BR RMK AO2", now=NOW)
    assert metar.visibility == "10SM"
    assert metar.weather == ()
    assert [remark.raw for remark in metar.remarks] == ["AO2"]


def test_unrecognized_tokens_are_listed():
    metar = decode_metar("KSFO 071756Z 28015KT FOO 10SM", now=NOW)
    assert metar.unhandled == ("FOO",)
    assert metar.visibility == "10SM"


def test_observation_from_previous_month():
    metar = decode_metar("KSFO 312350Z 28015KT 10SM", now=dt.datetime(2024, 1, 1, 0, 10, tzinfo=UTC))
    assert metar.time == dt.datetime(2023, 12, 31, 23, 50, tzinfo=UTC)


def test_invalid_time_group_degrades_to_none():
    metar = decode_metar("KSFO 072560Z 28015KT 10SM", now=NOW)
    assert metar.time is None
    assert metar.wind.speed == 15
