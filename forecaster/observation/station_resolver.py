"""Current conditions from the nearest observation station.

Station codes come out of the station feature through an ordered chain of
extractors; the first one that yields a code wins. Each observation field is
converted on its own, so a missing or malformed value only blanks that field.
"""

import logging
import re
from collections.abc import Callable
from datetime import UTC, datetime, tzinfo
from decimal import ROUND_HALF_UP, Decimal

from forecaster.config.schema import NOAA_BASE_URL
from forecaster.convert.units import (
    celsius_to_fahrenheit,
    degrees_to_compass,
    kmh_to_mph,
    pascals_to_inhg,
)
from forecaster.ingest.noaa_client import NoaaClient
from forecaster.models.common import parse_timestamp
from forecaster.models.forecast import quantity_value
from forecaster.models.observation import NO_DESCRIPTION_TEXT, CurrentConditions

logger = logging.getLogger(__name__)

STATIONS_PREFIX = f"{NOAA_BASE_URL}/stations/"

_STATION_URL_RE = re.compile(r"/stations/([^/]+)(?:/|$)")

StationExtractor = Callable[[dict], str | None]


def station_from_url(feature: dict) -> str | None:
    station_id = feature.get("id")
    if not isinstance(station_id, str):
        return None
    m = _STATION_URL_RE.search(station_id)
    return m.group(1) if m else None


def station_from_identifier(feature: dict) -> str | None:
    props = feature.get("properties") or {}
    identifier = props.get("stationIdentifier")
    return identifier if isinstance(identifier, str) and identifier else None


def station_from_stripped_prefix(feature: dict) -> str | None:
    station_id = feature.get("id")
    if not isinstance(station_id, str):
        return None
    segment = station_id.replace(STATIONS_PREFIX, "").split("/")[0]
    return segment or None


def station_from_raw_id(feature: dict) -> str | None:
    # Last resort; may still be a full URL
    station_id = feature.get("id")
    return str(station_id) if station_id else None


STATION_EXTRACTORS: list[StationExtractor] = [
    station_from_url,
    station_from_identifier,
    station_from_stripped_prefix,
    station_from_raw_id,
]


def extract_station_id(
    feature: dict, extractors: list[StationExtractor] | None = None
) -> str | None:
    for extractor in extractors or STATION_EXTRACTORS:
        code = extractor(feature)
        if code:
            logger.debug("Station id %s via %s", code, extractor.__name__)
            return code
    return None


class StationObservationResolver:
    def __init__(
        self,
        noaa_client: NoaaClient,
        display_tz: tzinfo | None = None,
        extractors: list[StationExtractor] | None = None,
    ):
        self.noaa = noaa_client
        self.display_tz = display_tz
        self.extractors = extractors or STATION_EXTRACTORS

    def resolve_current(self, station_features: list[dict]) -> CurrentConditions:
        """Latest observation from the first station. Never raises."""
        try:
            if not station_features:
                return CurrentConditions.no_observations()

            station_id = extract_station_id(station_features[0], self.extractors)
            if station_id is None:
                logger.warning("No usable station id in %r", station_features[0])
                return CurrentConditions.unavailable()

            logger.info("Fetching observations from station %s", station_id)
            data = self.noaa.get_observations(station_id)
            features = data.get("features")
            if not isinstance(features, list):
                logger.warning("Observation response for %s has no feature list", station_id)
                return CurrentConditions.unavailable()
            if not features:
                return CurrentConditions.no_observations()

            latest = latest_observation(features)
            return build_conditions(latest, self.display_tz)
        except Exception:
            logger.exception("Failed to resolve current conditions")
            return CurrentConditions.unavailable()


def latest_observation(features: list[dict]) -> dict:
    """Properties of the feature with the most recent timestamp."""
    floor = datetime.min.replace(tzinfo=UTC)

    def _ts(feature: dict) -> datetime:
        props = feature.get("properties") or {}
        return parse_timestamp(props.get("timestamp")) or floor

    return max(features, key=_ts).get("properties") or {}


def build_conditions(props: dict, display_tz: tzinfo | None = None) -> CurrentConditions:
    temperature = _measure(props, "temperature")
    heat_index = _measure(props, "heatIndex")
    dew_point = _measure(props, "dewpoint")
    wind_speed = _measure(props, "windSpeed")
    wind_dir = _measure(props, "windDirection")
    humidity = _measure(props, "relativeHumidity")
    pressure = _measure(props, "barometricPressure")

    return CurrentConditions(
        temperature=_maybe(celsius_to_fahrenheit, temperature),
        text_description=props.get("textDescription") or NO_DESCRIPTION_TEXT,
        wind_speed=_fmt(_maybe(kmh_to_mph, wind_speed), 1),
        wind_direction=_maybe(degrees_to_compass, wind_dir),
        humidity=_fmt(humidity, 0),
        heat_index=_maybe(celsius_to_fahrenheit, heat_index),
        dew_point=_maybe(celsius_to_fahrenheit, dew_point),
        barometric_pressure=_fmt(_maybe(pascals_to_inhg, pressure), 2),
        observation_time=format_observation_time(props.get("timestamp"), display_tz),
    )


def format_observation_time(timestamp: str | None, display_tz: tzinfo | None = None) -> str:
    """Localized "hh:mm AM/PM", or "Unknown" when there is no usable timestamp."""
    dt = parse_timestamp(timestamp)
    if dt is None:
        return "Unknown"
    return dt.astimezone(display_tz).strftime("%I:%M %p")


def _measure(props: dict, key: str) -> float | None:
    value = quantity_value(props.get(key))
    return None if value is None else float(value)


def _maybe(convert: Callable, value: float | None):
    return None if value is None else convert(value)


def _fmt(value: float | None, decimals: int) -> str | None:
    # Half-up, so 62.5 renders "63"
    if value is None:
        return None
    step = Decimal(1).scaleb(-decimals)
    return str(Decimal(str(value)).quantize(step, rounding=ROUND_HALF_UP))
