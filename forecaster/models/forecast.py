"""NWS forecast data models."""

import math
from dataclasses import dataclass, field

from forecaster.models.location import GridReference, PlaceRecord
from forecaster.models.observation import CurrentConditions


@dataclass(frozen=True)
class ForecastPeriod:
    start_time: str
    is_daytime: bool
    temperature: float | None
    short_forecast: str
    icon: str
    wind_speed: str
    wind_direction: str
    probability_of_precipitation: float | None  # percent
    relative_humidity: float | None  # percent
    dewpoint: float | None  # Celsius
    name: str = ""
    end_time: str = ""
    temperature_unit: str = "F"


@dataclass(frozen=True)
class DailySummary:
    date: str  # YYYY-MM-DD
    high: float | None
    low: float | None
    description: str
    icon: str


@dataclass(frozen=True)
class ForecastResult:
    location: str  # "Cambridge, MA"
    daily: list[DailySummary]
    hourly: list[ForecastPeriod]
    current: CurrentConditions
    place: PlaceRecord | None = None
    grid: GridReference | None = None
    fetched_at: str = field(default="", compare=False)


def parse_period(raw: dict) -> ForecastPeriod:
    """Build a ForecastPeriod from one entry of properties.periods."""
    return ForecastPeriod(
        start_time=raw["startTime"],
        is_daytime=bool(raw.get("isDaytime", False)),
        temperature=_number(raw.get("temperature")),
        short_forecast=raw.get("shortForecast") or "",
        icon=raw.get("icon") or "",
        wind_speed=raw.get("windSpeed") or "",
        wind_direction=raw.get("windDirection") or "",
        probability_of_precipitation=quantity_value(
            raw.get("probabilityOfPrecipitation")
        ),
        relative_humidity=quantity_value(raw.get("relativeHumidity")),
        dewpoint=quantity_value(raw.get("dewpoint")),
        name=raw.get("name") or "",
        end_time=raw.get("endTime") or "",
        temperature_unit=raw.get("temperatureUnit") or "F",
    )


def quantity_value(q: object) -> float | None:
    # NWS wraps measurements as {"unitCode": ..., "value": <number|null>}
    if not isinstance(q, dict):
        return None
    return _number(q.get("value"))


def _number(value: object) -> float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if not math.isfinite(value):
        return None
    return value
