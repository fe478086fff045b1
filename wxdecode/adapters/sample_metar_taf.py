from __future__ import annotations

import logging
import os
from pathlib import Path

from wxdecode.adapters.base import RawObservation, StationNotFoundError

logger = logging.getLogger(__name__)

ROOT = Path(__file__).resolve().parents[2]
SAMPLES_DIR = ROOT / "data" / "samples"


def default_samples_dir() -> Path:
    override = os.environ.get("WXDECODE_SAMPLES_DIR")
    return Path(override) if override else SAMPLES_DIR


class SampleMetarTafAdapter:
    """Serve reports from ``<samples>/metar/<ICAO>.txt`` and ``<samples>/taf/<ICAO>.txt``."""

    def __init__(self, samples_dir: Path | None = None) -> None:
        samples_dir = samples_dir or default_samples_dir()
        self.metar_dir = samples_dir / "metar"
        self.taf_dir = samples_dir / "taf"

    def _read(self, directory: Path, ident: str) -> str:
        path = directory / f"{ident.upper()}.txt"
        if not path.exists():
            logger.warning("no sample report at %s", path)
            raise StationNotFoundError(f"no sample report for {ident} in {directory}")
        return path.read_text(encoding="utf-8").strip()

    def fetch_metar(self, ident: str) -> RawObservation:
        raw = self._read(self.metar_dir, ident)
        return RawObservation(ident=ident.upper(), raw=raw, source="SAMPLE")

    def fetch_taf(self, ident: str) -> RawObservation:
        raw = self._read(self.taf_dir, ident)
        return RawObservation(ident=ident.upper(), raw=raw, source="SAMPLE")
