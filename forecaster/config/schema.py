"""Pydantic v2 configuration schema with strict validation."""

from pydantic import BaseModel, Field

NOAA_BASE_URL = "https://api.weather.gov"
DEFAULT_USER_AGENT = "forecaster/0.1.0"


class ApiConfig(BaseModel):
    model_config = {"extra": "forbid"}

    base_url: str = NOAA_BASE_URL
    user_agent: str = DEFAULT_USER_AGENT
    timeout_seconds: float = Field(default=10.0, gt=0.0)


class LocationConfig(BaseModel):
    model_config = {"extra": "forbid"}

    zip_data_path: str | None = None  # None -> bundled forecaster/data/zip_data.csv
    suggestion_limit: int = Field(default=15, ge=1)
    min_suggest_length: int = Field(default=4, ge=1)


class ForecastConfig(BaseModel):
    model_config = {"extra": "forbid"}

    max_days: int = Field(default=7, ge=1, le=14)


class DisplayConfig(BaseModel):
    model_config = {"extra": "forbid"}

    timezone: str | None = None  # IANA name; None -> system local time


class ForecasterConfig(BaseModel):
    model_config = {"extra": "forbid"}

    api: ApiConfig = ApiConfig()
    location: LocationConfig = LocationConfig()
    forecast: ForecastConfig = ForecastConfig()
    display: DisplayConfig = DisplayConfig()
