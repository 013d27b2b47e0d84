"""Tests for station-id extraction and current-conditions normalization."""

from unittest.mock import MagicMock
from zoneinfo import ZoneInfo

import pytest

from forecaster.errors import UpstreamError
from forecaster.ingest.noaa_client import NoaaClient
from forecaster.models.observation import (
    NO_DESCRIPTION_TEXT,
    NO_OBSERVATIONS_TEXT,
    UNAVAILABLE_TEXT,
    CurrentConditions,
)
from forecaster.observation.station_resolver import (
    STATION_EXTRACTORS,
    StationObservationResolver,
    build_conditions,
    extract_station_id,
    format_observation_time,
    latest_observation,
    station_from_identifier,
    station_from_raw_id,
    station_from_stripped_prefix,
    station_from_url,
)

EASTERN = ZoneInfo("America/New_York")


class TestExtractorChain:
    def test_order(self):
        assert STATION_EXTRACTORS == [
            station_from_url,
            station_from_identifier,
            station_from_stripped_prefix,
            station_from_raw_id,
        ]

    def test_url(self):
        assert extract_station_id({"id": "https://api.weather.gov/stations/KBOS"}) == "KBOS"

    def test_url_with_trailing_path(self):
        feature = {"id": "https://api.weather.gov/stations/KBOS/observations/latest"}
        assert station_from_url(feature) == "KBOS"

    def test_url_on_other_host(self):
        assert station_from_url({"id": "https://mirror.example.com/stations/KCQX"}) == "KCQX"

    def test_identifier_when_id_not_url(self):
        feature = {"id": "urn:station:1", "properties": {"stationIdentifier": "KBED"}}
        assert extract_station_id(feature) == "KBED"

    def test_url_beats_identifier(self):
        feature = {
            "id": "https://api.weather.gov/stations/KBOS",
            "properties": {"stationIdentifier": "OTHER"},
        }
        assert extract_station_id(feature) == "KBOS"

    def test_stripped_prefix(self):
        assert station_from_stripped_prefix({"id": "KOWD/extra"}) == "KOWD"

    def test_stripped_prefix_empty_segment(self):
        assert station_from_stripped_prefix({"id": "https://api.weather.gov/stations/"}) is None

    def test_raw_id_last_resort(self):
        feature = {"id": "https://api.weather.gov/stations/"}
        assert extract_station_id(feature) == "https://api.weather.gov/stations/"

    def test_nothing_usable(self):
        assert extract_station_id({"properties": {}}) is None

    def test_custom_chain(self):
        assert extract_station_id({"id": "X"}, [lambda f: None, lambda f: "KZZZ"]) == "KZZZ"


class TestLatestObservation:
    def test_picks_max_timestamp(self, load_fixture):
        features = load_fixture("noaa_observations_kbos.json")["features"]
        assert latest_observation(features)["timestamp"] == "2026-10-19T18:54:00+00:00"

    def test_unparseable_timestamps_rank_last(self):
        features = [
            {"properties": {"timestamp": "garbage", "textDescription": "A"}},
            {"properties": {"timestamp": "2026-01-01T00:00:00+00:00", "textDescription": "B"}},
        ]
        assert latest_observation(features)["textDescription"] == "B"


class TestBuildConditions:
    def test_full_observation(self, load_fixture):
        features = load_fixture("noaa_observations_kbos.json")["features"]
        c = build_conditions(latest_observation(features), EASTERN)
        assert c.temperature == pytest.approx(60.08)
        assert c.text_description == "Partly Cloudy"
        assert c.wind_speed == "11.4"
        assert c.wind_direction == "NW"
        assert c.humidity == "62"
        assert c.heat_index is None
        assert c.dew_point == pytest.approx(46.94)
        assert c.barometric_pressure == "30.02"
        assert c.observation_time == "02:54 PM"

    def test_fields_independent(self):
        props = {
            "temperature": {"value": None},
            "windSpeed": {"value": 10.0},
            "windDirection": "not-a-quantity",
            "relativeHumidity": {"value": "high"},
            "barometricPressure": {"value": 100000},
        }
        c = build_conditions(props, EASTERN)
        assert c.temperature is None
        assert c.wind_speed == "6.2"
        assert c.wind_direction is None
        assert c.humidity is None
        assert c.barometric_pressure == "29.53"
        assert c.text_description == NO_DESCRIPTION_TEXT
        assert c.observation_time == "Unknown"

    def test_heat_index_converted(self):
        c = build_conditions({"heatIndex": {"value": 35.0}})
        assert c.heat_index == pytest.approx(95.0)

    def test_humidity_rounds_half_up(self):
        assert build_conditions({"relativeHumidity": {"value": 62.5}}).humidity == "63"
        assert build_conditions({"relativeHumidity": {"value": 63.5}}).humidity == "64"


class TestObservationTime:
    def test_localized(self):
        assert format_observation_time("2026-07-01T16:05:00+00:00", EASTERN) == "12:05 PM"

    def test_missing(self):
        assert format_observation_time(None, EASTERN) == "Unknown"


class TestResolveCurrent:
    def _resolver(self, **kwargs) -> tuple[StationObservationResolver, MagicMock]:
        mock_noaa = MagicMock(spec=NoaaClient)
        for name, value in kwargs.items():
            setattr(mock_noaa.get_observations, name, value)
        return StationObservationResolver(mock_noaa, display_tz=EASTERN), mock_noaa

    def test_success(self, load_fixture):
        resolver, mock_noaa = self._resolver(
            return_value=load_fixture("noaa_observations_kbos.json")
        )
        stations = load_fixture("noaa_stations_box.json")["features"]
        c = resolver.resolve_current(stations)
        mock_noaa.get_observations.assert_called_once_with("KBOS")
        assert c.text_description == "Partly Cloudy"

    def test_fetch_error_degrades(self, load_fixture):
        resolver, _ = self._resolver(side_effect=UpstreamError("HTTP 500"))
        stations = load_fixture("noaa_stations_box.json")["features"]
        assert resolver.resolve_current(stations) == CurrentConditions.unavailable()

    def test_unexpected_exception_degrades(self, load_fixture):
        resolver, _ = self._resolver(side_effect=RuntimeError("boom"))
        stations = load_fixture("noaa_stations_box.json")["features"]
        c = resolver.resolve_current(stations)
        assert c.text_description == UNAVAILABLE_TEXT
        assert c.temperature is None
        assert c.observation_time is None

    def test_missing_feature_list_degrades(self, load_fixture):
        resolver, _ = self._resolver(return_value={"type": "FeatureCollection"})
        stations = load_fixture("noaa_stations_box.json")["features"]
        assert resolver.resolve_current(stations).text_description == UNAVAILABLE_TEXT

    def test_empty_observations(self, load_fixture):
        resolver, _ = self._resolver(return_value={"features": []})
        stations = load_fixture("noaa_stations_box.json")["features"]
        c = resolver.resolve_current(stations)
        assert c == CurrentConditions.no_observations()
        assert c.text_description == NO_OBSERVATIONS_TEXT

    def test_no_stations(self):
        resolver, mock_noaa = self._resolver()
        assert resolver.resolve_current([]).text_description == NO_OBSERVATIONS_TEXT
        mock_noaa.get_observations.assert_not_called()

    def test_malformed_station_feature(self):
        resolver, _ = self._resolver()
        assert resolver.resolve_current([None]).text_description == UNAVAILABLE_TEXT
