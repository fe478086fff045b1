import datetime as dt

from wxdecode.timegroups import fm_time, forecast_time, isoformat_z, observation_time, validity_window

UTC = dt.timezone.utc


def test_observation_time_same_month():
    now = dt.datetime(2026, 2, 12, 10, 0, tzinfo=UTC)
    assert observation_time("120950Z", now) == dt.datetime(2026, 2, 12, 9, 50, tzinfo=UTC)


def test_observation_time_previous_month():
    now = dt.datetime(2026, 3, 1, 0, 5, tzinfo=UTC)
    assert observation_time("282355Z", now) == dt.datetime(2026, 2, 28, 23, 55, tzinfo=UTC)


def test_observation_time_rejects_bad_tokens():
    now = dt.datetime(2026, 2, 12, 10, 0, tzinfo=UTC)
    assert observation_time("1209", now) is None
    assert observation_time("000950Z", now) is None


def test_forecast_time_supports_24z_rollover():
    anchor = dt.datetime(2026, 2, 12, 10, 0, tzinfo=UTC)
    assert forecast_time(12, 24, 0, anchor) == dt.datetime(2026, 2, 13, 0, 0, tzinfo=UTC)


def test_forecast_time_rejects_impossible_dates():
    anchor = dt.datetime(2026, 2, 12, 10, 0, tzinfo=UTC)
    assert forecast_time(30, 10, 0, anchor) is None
    assert forecast_time(12, 25, 0, anchor) is None


def test_forecast_time_next_month_across_year_end():
    anchor = dt.datetime(2025, 12, 31, 18, 0, tzinfo=UTC)
    assert fm_time("010600", anchor) == dt.datetime(2026, 1, 1, 6, 0, tzinfo=UTC)


def test_validity_window_with_one_bad_end():
    anchor = dt.datetime(2026, 2, 12, 10, 0, tzinfo=UTC)
    start, end = validity_window("1212/3012", anchor)
    assert start == dt.datetime(2026, 2, 12, 12, 0, tzinfo=UTC)
    assert end is None
    assert validity_window("bogus", anchor) == (None, None)


def test_isoformat_z():
    assert isoformat_z(dt.datetime(2026, 2, 12, 10, 0, tzinfo=UTC)) == "2026-02-12T10:00:00Z"
