"""Tests for unit conversions."""

import pytest

from forecaster.convert.units import (
    celsius_to_fahrenheit,
    degrees_to_compass,
    kmh_to_mph,
    pascals_to_inhg,
)


class TestTemperature:
    def test_freezing(self):
        assert celsius_to_fahrenheit(0) == 32

    def test_boiling(self):
        assert celsius_to_fahrenheit(100) == 212

    def test_negative_forty(self):
        assert celsius_to_fahrenheit(-40) == -40


class TestSpeedAndPressure:
    def test_kmh_to_mph(self):
        assert kmh_to_mph(100) == pytest.approx(62.1371)

    def test_standard_atmosphere(self):
        assert round(pascals_to_inhg(101325), 2) == 29.92


class TestCompass:
    @pytest.mark.parametrize(
        "degrees,expected",
        [
            (350, "N"),
            (45, "NE"),
            (180, "S"),
            (269, "W"),
            (0, "N"),
            (360, "N"),
            (22.4, "N"),
            (22.5, "NE"),
            (337.4, "NW"),
            (337.5, "N"),
            (112.5, "SE"),
            (292.5, "NW"),
        ],
    )
    def test_eight_point(self, degrees, expected):
        assert degrees_to_compass(degrees) == expected

    @pytest.mark.parametrize(
        "degrees,expected",
        [(0, "N"), (11.25, "NNE"), (200, "SSW"), (350, "N"), (340, "NNW")],
    )
    def test_sixteen_point(self, degrees, expected):
        assert degrees_to_compass(degrees, points=16) == expected

    def test_unsupported_resolution(self):
        with pytest.raises(ValueError):
            degrees_to_compass(90, points=32)
