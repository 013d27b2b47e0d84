"""Unit conversions for NWS observation values."""

KMH_TO_MPH = 0.621371
PA_PER_INHG = 3386.39

COMPASS_8 = ["N", "NE", "E", "SE", "S", "SW", "W", "NW"]
COMPASS_16 = [
    "N", "NNE", "NE", "ENE", "E", "ESE", "SE", "SSE",
    "S", "SSW", "SW", "WSW", "W", "WNW", "NW", "NNW",
]


def celsius_to_fahrenheit(c: float) -> float:
    return c * 9 / 5 + 32


def kmh_to_mph(kmh: float) -> float:
    return kmh * KMH_TO_MPH


def pascals_to_inhg(pa: float) -> float:
    return pa / PA_PER_INHG


def degrees_to_compass(degrees: float, points: int = 8) -> str:
    """Map a bearing to a compass label.

    Sectors are centered on their label, so with 8 points N covers
    [337.5, 360) and [0, 22.5).
    """
    if points == 8:
        labels = COMPASS_8
    elif points == 16:
        labels = COMPASS_16
    else:
        raise ValueError(f"Unsupported compass resolution: {points}")
    step = 360 / points
    index = int(((degrees % 360) + step / 2) // step) % points
    return labels[index]
