"""NOAA/NWS API client: point lookup, gridpoint forecasts, stations, observations.

One attempt per call. Timeouts, transport errors and non-2xx responses all
surface as UpstreamError.
"""

import logging

import httpx

from forecaster.config.schema import DEFAULT_USER_AGENT, NOAA_BASE_URL
from forecaster.errors import MalformedResponse, UpstreamError
from forecaster.models.location import GridReference

logger = logging.getLogger(__name__)


class NoaaClient:
    def __init__(
        self,
        base_url: str = NOAA_BASE_URL,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: float = 10.0,
    ):
        self.base_url = base_url.rstrip("/")
        self.user_agent = user_agent
        self.timeout = timeout

    def get_point(self, lat: float, lon: float) -> dict:
        """Point metadata: grid identifiers and the observation-stations URL."""
        url = f"{self.base_url}/points/{round(lat, 4)},{round(lon, 4)}"
        return self.get_json(url)

    def get_forecast(self, grid: GridReference) -> dict:
        """Day/night forecast periods (about 14 over 7 days)."""
        url = f"{self.base_url}/gridpoints/{grid.grid_id}/{grid.grid_x},{grid.grid_y}/forecast"
        return self.get_json(url)

    def get_hourly_forecast(self, grid: GridReference) -> dict:
        url = (
            f"{self.base_url}/gridpoints/{grid.grid_id}/"
            f"{grid.grid_x},{grid.grid_y}/forecast/hourly"
        )
        return self.get_json(url)

    def get_stations(self, stations_url: str) -> dict:
        return self.get_json(stations_url)

    def get_observations(self, station_id: str) -> dict:
        url = f"{self.base_url}/stations/{station_id}/observations"
        return self.get_json(url)

    def get_json(self, url: str) -> dict:
        headers = {"User-Agent": self.user_agent, "Accept": "application/geo+json"}
        try:
            resp = httpx.get(
                url, headers=headers, timeout=self.timeout, follow_redirects=True
            )
        except httpx.TimeoutException as e:
            logger.warning("NOAA request timed out: %s", url)
            raise UpstreamError(f"Request timed out: {url}") from e
        except httpx.RequestError as e:
            logger.warning("NOAA request error for %s: %s", url, e)
            raise UpstreamError(f"Request failed: {e}") from e
        except (httpx.InvalidURL, TypeError) as e:
            logger.warning("NOAA request rejected for %r: %s", url, e)
            raise UpstreamError(f"Invalid request URL: {url!r}") from e

        if not resp.is_success:
            logger.warning("NOAA %s returned %d", url, resp.status_code)
            raise UpstreamError(f"HTTP {resp.status_code} from {url}")

        try:
            data = resp.json()
        except ValueError as e:
            raise MalformedResponse(f"Invalid JSON from {url}") from e
        if not isinstance(data, dict):
            raise MalformedResponse(f"Unexpected payload from {url}")
        return data


def parse_grid(point: dict) -> GridReference:
    """Extract the grid reference from a /points response."""
    props = point.get("properties") or {}
    grid_id = props.get("gridId")
    grid_x = props.get("gridX")
    grid_y = props.get("gridY")
    stations_url = props.get("observationStations")
    if not grid_id or grid_x is None or grid_y is None:
        raise MalformedResponse("Point lookup did not include grid identifiers")
    try:
        return GridReference(
            grid_id=str(grid_id),
            grid_x=int(grid_x),
            grid_y=int(grid_y),
            observation_stations_url=stations_url if isinstance(stations_url, str) else "",
        )
    except (TypeError, ValueError) as e:
        raise MalformedResponse("Point lookup returned invalid grid identifiers") from e


def extract_periods(forecast: dict) -> list[dict]:
    """Return properties.periods, raising MalformedResponse if absent or malformed."""
    periods = (forecast.get("properties") or {}).get("periods")
    if not isinstance(periods, list):
        raise MalformedResponse("Forecast response did not include periods")
    for i, period in enumerate(periods):
        if not isinstance(period, dict):
            raise MalformedResponse(f"Forecast period {i} is not an object")
        if not isinstance(period.get("startTime"), str) or not period["startTime"]:
            raise MalformedResponse(f"Forecast period {i} has no startTime")
    return periods
