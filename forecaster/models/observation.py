"""Current-conditions model built from station observations."""

from dataclasses import dataclass

UNAVAILABLE_TEXT = "Unable to retrieve current conditions"
NO_OBSERVATIONS_TEXT = "No current observations available"
NO_DESCRIPTION_TEXT = "No description available"


@dataclass(frozen=True)
class CurrentConditions:
    temperature: float | None = None  # °F
    text_description: str = NO_OBSERVATIONS_TEXT
    wind_speed: str | None = None  # mph, 1 decimal
    wind_direction: str | None = None  # compass label
    humidity: str | None = None  # percent, 0 decimals
    heat_index: float | None = None  # °F
    dew_point: float | None = None  # °F
    barometric_pressure: str | None = None  # inHg, 2 decimals
    observation_time: str | None = None

    @classmethod
    def unavailable(cls) -> "CurrentConditions":
        return cls(text_description=UNAVAILABLE_TEXT)

    @classmethod
    def no_observations(cls) -> "CurrentConditions":
        return cls(text_description=NO_OBSERVATIONS_TEXT)
