from __future__ import annotations

import csv
import logging
from functools import lru_cache
from pathlib import Path

LOGGER = logging.getLogger(__name__)

# Names reported on HPD filings that belong to one controlling entity.
KNOWN_SYNONYMS: dict[str, tuple[str, ...]] = {
    "PINNACLE": (
        "DAVID ROSE",
        "EDDIE LJESNJANIN",
        "EDWARD SUAZO",
        "MARC BARHORIN",
        "ABDIN RADONCIC",
        "ABIDIN RADONCIC",
        "DAVID RADONCIC",
        "DAVID RADONIC",
        "ELINOR ARZT",
        "RASIM TOSKIC",
    ),
}


@lru_cache(maxsize=8)
def _load_synonym_file(path: str, mtime_ns: int) -> dict[str, str]:
    # mtime_ns is part of the cache key so an edited file is read again.
    mapping: dict[str, str] = {}
    with Path(path).open("r", encoding="utf-8") as handle:
        reader = csv.DictReader(handle)
        for row in reader:
            alias = (row.get("alias") or "").strip()
            canonical = (row.get("canonical") or "").strip()
            if alias and canonical:
                mapping[alias] = canonical
    return mapping


def load_synonym_file(path: str) -> dict[str, str]:
    """Extra ``alias -> canonical`` pairs from a CSV; a missing file gives none."""
    file_path = Path(path)
    if not file_path.exists():
        return {}
    return _load_synonym_file(str(file_path), file_path.stat().st_mtime_ns)


class Synonyms:
    """Maps alternate spellings and aliases to one canonical display name.

    Lookups are exact and case-sensitive against the fully assembled name.
    """

    def __init__(self, extra: dict[str, str] | None = None) -> None:
        self._map: dict[str, str] = {}
        for canonical, aliases in KNOWN_SYNONYMS.items():
            for alias in aliases:
                self._map[alias] = canonical
        if extra:
            self._map.update(extra)

    @classmethod
    def from_path(cls, path: str | None) -> Synonyms:
        extra = load_synonym_file(path) if path else {}
        if extra:
            LOGGER.info("Loaded %d extra name synonyms from %s", len(extra), path)
        return cls(extra=extra)

    def __len__(self) -> int:
        return len(self._map)

    def get(self, name: str) -> str | None:
        return self._map.get(name)

    def resolve(self, name: str) -> str:
        return self._map.get(name, name)
