from __future__ import annotations

import json
from dataclasses import replace
from pathlib import Path
from typing import Mapping, TypeVar

from wxdecode.adapters.base import StationResolver
from wxdecode.models import Metar, SiteInfo, Taf

Report = TypeVar("Report", Metar, Taf)


class MappingStationResolver:
    """Look stations up in an in-memory ``{ICAO: SiteInfo}`` table."""

    def __init__(self, sites: Mapping[str, SiteInfo]) -> None:
        self.sites = {ident.upper(): site for ident, site in sites.items()}

    def resolve(self, ident: str) -> SiteInfo | None:
        return self.sites.get(ident.upper())

    @classmethod
    def from_json(cls, path: Path) -> MappingStationResolver:
        """Load ``{"KSFO": {"name": ..., "state": ..., "country": ...}}``."""
        data = json.loads(path.read_text(encoding="utf-8"))
        return cls({ident: SiteInfo(**fields) for ident, fields in data.items()})


def with_site(report: Report, resolver: StationResolver | None) -> Report:
    if resolver is None or not report.station:
        return report
    site = resolver.resolve(report.station)
    if site is None:
        return report
    return replace(report, site=site)
