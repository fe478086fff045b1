from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from wxdecode.models import SiteInfo


class FetchError(RuntimeError):
    """Raw report text could not be retrieved."""


class StationNotFoundError(FetchError):
    pass


@dataclass
class RawObservation:
    ident: str
    raw: str
    source: str


class MetarTafAdapter(Protocol):
    def fetch_metar(self, ident: str) -> RawObservation: ...

    def fetch_taf(self, ident: str) -> RawObservation: ...


class StationResolver(Protocol):
    def resolve(self, ident: str) -> SiteInfo | None: ...
