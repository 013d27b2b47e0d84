"""Forecast pipeline: location -> grid -> daily -> stations -> current -> hourly."""

import logging
from collections.abc import Callable
from typing import TypeVar
from zoneinfo import ZoneInfo

from forecaster.aggregate.daily import aggregate
from forecaster.config.schema import ForecasterConfig
from forecaster.errors import ForecastError, InvalidLocation, UpstreamError
from forecaster.ingest.noaa_client import NoaaClient, extract_periods, parse_grid
from forecaster.location.resolver import LocationResolver, load_resolver
from forecaster.models.common import utc_now_iso
from forecaster.models.forecast import ForecastResult, parse_period
from forecaster.models.location import GridReference
from forecaster.models.observation import CurrentConditions
from forecaster.observation.station_resolver import StationObservationResolver

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ForecastPipeline:
    """Stateless per call: every fetch_forecast builds a fresh result."""

    def __init__(
        self,
        config: ForecasterConfig | None = None,
        resolver: LocationResolver | None = None,
        noaa_client: NoaaClient | None = None,
    ):
        self.config = config or ForecasterConfig()
        if resolver is None:
            resolver = load_resolver(self.config.location.zip_data_path)
        self.resolver = resolver
        self.noaa = noaa_client or NoaaClient(
            base_url=self.config.api.base_url,
            user_agent=self.config.api.user_agent,
            timeout=self.config.api.timeout_seconds,
        )
        tz_name = self.config.display.timezone
        self.stations = StationObservationResolver(
            self.noaa, display_tz=ZoneInfo(tz_name) if tz_name else None
        )

    def fetch_forecast(self, query: str) -> ForecastResult:
        """Run the full lookup for a ZIP code or city name.

        Raises InvalidLocation or UpstreamError (MalformedResponse included)
        when a required step fails. Current conditions never abort the run.
        """
        logger.info("Looking up location for %r", query)
        place = self.resolver.resolve(query)
        if place is None:
            text = query.strip()
            if text and not text.isdigit():
                raise InvalidLocation("Unknown location")
            raise InvalidLocation("Invalid ZIP code")
        location = place.display_name
        logger.info("Resolved %s (lat=%s, lon=%s)", location, place.lat, place.lon)

        point = _required(
            "Error fetching weather data", self.noaa.get_point, place.lat, place.lon
        )
        grid = _required("Error fetching weather data", parse_grid, point)
        logger.info("Grid %s %d,%d", grid.grid_id, grid.grid_x, grid.grid_y)

        forecast = _required("Error fetching daily forecast", self.noaa.get_forecast, grid)
        periods = [
            parse_period(p)
            for p in _required("Error fetching daily forecast", extract_periods, forecast)
        ]
        daily = aggregate(periods, self.config.forecast.max_days)
        logger.info("Aggregated %d periods into %d days", len(periods), len(daily))

        current = self._current_conditions(grid)

        hourly_raw = _required(
            "Error fetching hourly forecast", self.noaa.get_hourly_forecast, grid
        )
        hourly = [
            parse_period(p)
            for p in _required("Error fetching hourly forecast", extract_periods, hourly_raw)
        ]
        logger.info("Received %d hourly periods", len(hourly))

        return ForecastResult(
            location=location,
            daily=daily,
            hourly=hourly,
            current=current,
            place=place,
            grid=grid,
            fetched_at=utc_now_iso(),
        )

    def _current_conditions(self, grid: GridReference) -> CurrentConditions:
        if not grid.observation_stations_url:
            logger.warning("Grid %s has no observation stations URL", grid.grid_id)
            return CurrentConditions.no_observations()
        try:
            stations = self.noaa.get_stations(grid.observation_stations_url)
        except ForecastError as e:
            logger.warning("Observation stations unavailable: %s", e)
            return CurrentConditions.no_observations()

        features = stations.get("features") or []
        if not features:
            logger.info("No observation stations listed for grid %s", grid.grid_id)
            return CurrentConditions.no_observations()
        return self.stations.resolve_current(features)


def _required(label: str, fn: Callable[..., T], *args) -> T:
    """Run a hard-required step, prefixing any failure with a user-facing label."""
    try:
        return fn(*args)
    except UpstreamError as e:
        logger.error("%s: %s", label, e)
        raise type(e)(f"{label}: {e}") from e
