"""Place and grid models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class PlaceRecord:
    city: str  # as stored in the ZIP table, e.g. "CAMBRIDGE"
    state: str  # 2-letter abbreviation
    zip: str
    lat: float
    lon: float

    @property
    def display_name(self) -> str:
        return f"{title_case(self.city)}, {self.state}"


@dataclass(frozen=True)
class CitySuggestion:
    city: str
    state: str
    zip: str

    @property
    def label(self) -> str:
        return f"{title_case(self.city)}, {self.state}"


@dataclass(frozen=True)
class GridReference:
    grid_id: str
    grid_x: int
    grid_y: int
    observation_stations_url: str


def title_case(text: str) -> str:
    """Capitalize each space-delimited word, lowercasing the rest."""
    return " ".join(word[:1].upper() + word[1:] for word in text.lower().split(" "))
