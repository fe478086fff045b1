import pytest
import requests

from wxdecode.adapters.base import FetchError, StationNotFoundError
from wxdecode.adapters.live_metar_taf import LiveMetarTafAdapter
from wxdecode.adapters.sample_metar_taf import SAMPLES_DIR, SampleMetarTafAdapter, default_samples_dir
from wxdecode.adapters.stations import MappingStationResolver, with_site
from wxdecode.models import SiteInfo
from wxdecode.parsers.metar import decode_metar


class FakeResponse:
    def __init__(self, text, status_code=200):
        self.text = text
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")


def _write_samples(root):
    (root / "metar").mkdir()
    (root / "taf").mkdir()
    (root / "metar" / "KSFO.txt").write_text("KSFO 071756Z 28015KT 10SM FEW008 16/10 A2999\n", encoding="utf-8")
    (root / "taf" / "KSFO.txt").write_text("TAF KSFO 071720Z 0718/0824 28015KT P6SM\n", encoding="utf-8")


def test_sample_adapter_reads_station_files(tmp_path):
    _write_samples(tmp_path)
    adapter = SampleMetarTafAdapter(tmp_path)
    observation = adapter.fetch_metar("ksfo")
    assert observation.ident == "KSFO"
    assert observation.raw.startswith("KSFO 071756Z")
    assert observation.source == "SAMPLE"
    assert adapter.fetch_taf("KSFO").raw.startswith("TAF KSFO")


def test_sample_adapter_missing_station(tmp_path):
    _write_samples(tmp_path)
    with pytest.raises(StationNotFoundError):
        SampleMetarTafAdapter(tmp_path).fetch_metar("EGLL")


def test_samples_dir_environment_override(monkeypatch, tmp_path):
    monkeypatch.delenv("WXDECODE_SAMPLES_DIR", raising=False)
    assert default_samples_dir() == SAMPLES_DIR
    monkeypatch.setenv("WXDECODE_SAMPLES_DIR", str(tmp_path))
    assert default_samples_dir() == tmp_path


def test_bundled_samples_decode_cleanly():
    adapter = SampleMetarTafAdapter(SAMPLES_DIR)
    for ident in ("KSFO", "EGLL"):
        metar = decode_metar(adapter.fetch_metar(ident).raw)
        assert metar.station == ident
        assert metar.unhandled == ()


def test_live_adapter_returns_first_metar_line(monkeypatch):
    calls = []

    def fake_get(url, headers=None, timeout=None):
        calls.append((url, timeout))
        return FakeResponse("KSFO 071756Z 28015KT 10SM\nKSFO 071656Z 27012KT 10SM\n")

    monkeypatch.setattr(requests, "get", fake_get)
    observation = LiveMetarTafAdapter().fetch_metar("ksfo")
    assert observation.raw == "KSFO 071756Z 28015KT 10SM"
    assert observation.source == "LIVE"
    assert calls == [("https://aviationweather.gov/api/data/metar?ids=KSFO&format=raw", 10)]


def test_live_adapter_keeps_multiline_taf(monkeypatch):
    monkeypatch.setattr(
        requests, "get", lambda url, headers=None, timeout=None: FakeResponse("TAF KSFO 071720Z\n  FM080200 29010KT")
    )
    assert LiveMetarTafAdapter().fetch_taf("KSFO").raw == "TAF KSFO 071720Z\n  FM080200 29010KT"


def test_live_adapter_http_error(monkeypatch):
    monkeypatch.setattr(requests, "get", lambda url, headers=None, timeout=None: FakeResponse("", 502))
    with pytest.raises(FetchError):
        LiveMetarTafAdapter().fetch_metar("KSFO")


def test_live_adapter_connection_error(monkeypatch):
    def fail(url, headers=None, timeout=None):
        raise requests.ConnectionError("unreachable")

    monkeypatch.setattr(requests, "get", fail)
    with pytest.raises(FetchError):
        LiveMetarTafAdapter().fetch_taf("KSFO")


def test_live_adapter_empty_body(monkeypatch):
    monkeypatch.setattr(requests, "get", lambda url, headers=None, timeout=None: FakeResponse("  \n"))
    with pytest.raises(StationNotFoundError):
        LiveMetarTafAdapter().fetch_metar("ZZZZ")


def test_with_site_fills_site_info():
    resolver = MappingStationResolver({"ksfo": SiteInfo("San Francisco Intl", "CA", "US")})
    metar = decode_metar("KSFO 071756Z 28015KT 10SM")
    assert with_site(metar, resolver).site == SiteInfo("San Francisco Intl", "CA", "US")

    unknown = decode_metar("EGLL 071750Z 24012KT 9999")
    assert with_site(unknown, resolver) is unknown


def test_bundled_site_table_loads():
    resolver = MappingStationResolver.from_json(SAMPLES_DIR.parent / "sites.json")
    assert resolver.resolve("egll").country == "United Kingdom"
    assert resolver.resolve("ZZZZ") is None


def test_with_site_without_resolver():
    metar = decode_metar("KSFO 071756Z 28015KT 10SM")
    assert with_site(metar, None) is metar
