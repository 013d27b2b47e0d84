"""ZIP code and city-name lookup against the static ZIP table."""

import csv
import logging
import re
from functools import lru_cache
from pathlib import Path

from forecaster.models.location import CitySuggestion, PlaceRecord

logger = logging.getLogger(__name__)

DEFAULT_ZIP_DATA = Path(__file__).parent.parent / "data" / "zip_data.csv"

ZIP_COLUMN = "PHYSICAL ZIP"
CITY_COLUMN = "PHYSICAL CITY"
STATE_COLUMN = "PHYSICAL STATE"

_NUMERIC_RE = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


class LocationResolver:
    def __init__(self, records: list[PlaceRecord]):
        self._records = list(records)
        self._by_zip: dict[str, PlaceRecord] = {}
        for record in self._records:
            # First row wins for a repeated ZIP
            self._by_zip.setdefault(record.zip, record)

    @classmethod
    def from_csv(cls, path: str | Path) -> "LocationResolver":
        path = Path(path)
        records: list[PlaceRecord] = []
        with open(path, newline="", encoding="utf-8") as f:
            for row in csv.DictReader(f):
                records.append(
                    PlaceRecord(
                        city=row[CITY_COLUMN],
                        state=row[STATE_COLUMN],
                        zip=row[ZIP_COLUMN],
                        lat=float(row["latitude"]),
                        lon=float(row["longitude"]),
                    )
                )
        logger.info("Loaded %d ZIP records from %s", len(records), path)
        return cls(records)

    def __len__(self) -> int:
        return len(self._records)

    def resolve_by_zip(self, zip_code: str) -> PlaceRecord | None:
        """Exact match on the stored ZIP string; no trimming or zero-padding."""
        return self._by_zip.get(zip_code)

    def suggest_by_city_prefix(
        self, prefix: str, limit: int = 15
    ) -> list[CitySuggestion]:
        """Unique (city, state) pairs whose city starts with prefix.

        Sorted by city then state, case-insensitively, and truncated to limit.
        """
        needle = prefix.lower()
        seen: set[tuple[str, str]] = set()
        matches: list[CitySuggestion] = []
        for record in self._records:
            if not record.city.lower().startswith(needle):
                continue
            key = (record.city, record.state)
            if key in seen:
                continue
            seen.add(key)
            matches.append(
                CitySuggestion(city=record.city, state=record.state, zip=record.zip)
            )
        matches.sort(key=lambda s: (s.city.lower(), s.state.lower()))
        return matches[:limit]

    def suggest(
        self, query: str, limit: int = 15, min_length: int = 4
    ) -> list[CitySuggestion]:
        """Autocomplete entry point: only non-numeric queries of min_length or more."""
        if len(query) < min_length or _is_numeric(query):
            return []
        return self.suggest_by_city_prefix(query, limit)

    def resolve(self, query: str) -> PlaceRecord | None:
        """Resolve a ZIP code, or an exact city name ("Cambridge" / "Cambridge, MA")."""
        record = self.resolve_by_zip(query)
        if record is not None:
            return record

        text = query.strip()
        if not text or _is_numeric(text):
            return None
        city, _, state = text.partition(",")
        city = city.strip().lower()
        state = state.strip().lower()

        candidates = [
            r
            for r in self._records
            if r.city.lower() == city and (not state or r.state.lower() == state)
        ]
        if not candidates:
            return None
        candidates.sort(key=lambda r: (r.city.lower(), r.state.lower()))
        return candidates[0]


def _is_numeric(text: str) -> bool:
    return _NUMERIC_RE.fullmatch(text.strip()) is not None


@lru_cache(maxsize=None)
def load_resolver(path: str | None = None) -> LocationResolver:
    """Load the ZIP table once per path for the life of the process."""
    return LocationResolver.from_csv(path or DEFAULT_ZIP_DATA)
