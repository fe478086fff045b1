from __future__ import annotations

import logging

from wxdecode.adapters.base import FetchError, RawObservation, StationNotFoundError

logger = logging.getLogger(__name__)


class LiveMetarTafAdapter:
    metar_url = "https://aviationweather.gov/api/data/metar?ids={ident}&format=raw"
    taf_url = "https://aviationweather.gov/api/data/taf?ids={ident}&format=raw"
    user_agent = "wxdecode/0.1"
    timeout = 10

    def _fetch(self, url: str) -> str:
        import requests

        logger.info("fetching %s", url)
        try:
            resp = requests.get(url, headers={"User-Agent": self.user_agent}, timeout=self.timeout)
            resp.raise_for_status()
        except requests.RequestException as exc:
            logger.warning("fetch failed for %s: %s", url, exc)
            raise FetchError(f"could not fetch {url}: {exc}") from exc
        return resp.text.strip()

    def _report(self, url: str, ident: str, kind: str) -> RawObservation:
        text = self._fetch(url.format(ident=ident.upper()))
        if not text:
            raise StationNotFoundError(f"no {kind} available for {ident}")
        return RawObservation(ident=ident.upper(), raw=text, source="LIVE")

    def fetch_metar(self, ident: str) -> RawObservation:
        observation = self._report(self.metar_url, ident, "METAR")
        # Only the latest report when several come back.
        observation.raw = observation.raw.splitlines()[0].strip()
        return observation

    def fetch_taf(self, ident: str) -> RawObservation:
        return self._report(self.taf_url, ident, "TAF")
