"""Output formatters for forecast results."""

import json
from dataclasses import asdict
from datetime import date, tzinfo

from forecaster.aggregate.daily import hours_for_date
from forecaster.convert.units import celsius_to_fahrenheit
from forecaster.models.common import parse_timestamp
from forecaster.models.forecast import DailySummary, ForecastPeriod, ForecastResult
from forecaster.models.location import CitySuggestion
from forecaster.models.observation import CurrentConditions


def result_to_dict(result: ForecastResult) -> dict:
    return asdict(result)


def format_result_json(result: ForecastResult) -> str:
    """JSON result for programmatic consumption."""
    return json.dumps(result_to_dict(result), indent=2)


def format_result_text(
    result: ForecastResult,
    expanded_date: str | None = None,
    display_tz: tzinfo | None = None,
) -> str:
    """Plain text: current conditions, one line per day, hourly lines for one day."""
    lines = [f"=== {result.location} ==="]
    lines.extend(format_current_lines(result.current))
    lines.append("7-Day Forecast:")
    for day in result.daily:
        lines.append(f"  {format_day_line(day)}")
        if day.date == expanded_date:
            for hour in hours_for_date(result.hourly, day.date):
                lines.append(f"      {format_hour_line(day, hour, display_tz)}")
    return "\n".join(lines)


def format_current_lines(c: CurrentConditions) -> list[str]:
    header = "Current Conditions"
    if c.observation_time:
        header += f" (observed {c.observation_time})"
    lines = [f"{header}:"]
    temp = f"{c.temperature:.0f}°F  " if c.temperature is not None else ""
    lines.append(f"  {temp}{c.text_description}")

    details = []
    if c.wind_speed is not None:
        details.append(f"Wind: {c.wind_speed} mph {c.wind_direction or ''}".rstrip())
    if c.humidity is not None:
        details.append(f"Humidity: {c.humidity}%")
    if c.dew_point is not None:
        details.append(f"Dew Point: {c.dew_point:.1f}°F")
    if c.heat_index is not None:
        details.append(f"Heat Index: {c.heat_index:.1f}°F")
    if c.barometric_pressure is not None:
        details.append(f"Pressure: {c.barometric_pressure} inHg")
    if details:
        lines.append("  " + " | ".join(details))
    return lines


def format_day_line(day: DailySummary) -> str:
    d = date.fromisoformat(day.date)
    label = f"{d.strftime('%a')} {d.strftime('%b')} {d.day}"
    return f"{label:<11} H {_temp(day.high)}  L {_temp(day.low)}  {day.description}"


def format_hour_line(
    day: DailySummary, hour: ForecastPeriod, display_tz: tzinfo | None = None
) -> str:
    weekday = date.fromisoformat(day.date).strftime("%a")
    parts = [
        f"{weekday} {_clock(hour.start_time, display_tz)}",
        f"{_temp(hour.temperature)}F",
        hour.short_forecast,
    ]
    if hour.probability_of_precipitation is not None:
        parts.append(f"Precip: {hour.probability_of_precipitation:.0f}%")
    parts.append(f"Wind: {hour.wind_speed} {hour.wind_direction}".rstrip())
    if hour.relative_humidity is not None:
        parts.append(f"Humidity: {hour.relative_humidity:.0f}%")
    if hour.dewpoint is not None:
        parts.append(f"Dew Point: {celsius_to_fahrenheit(hour.dewpoint):.1f}°F")
    return "  ".join(parts)


def format_suggestions_text(suggestions: list[CitySuggestion]) -> str:
    if not suggestions:
        return "No matching cities"
    return "\n".join(f"{s.label} ({s.zip})" for s in suggestions)


def _temp(value: float | None) -> str:
    return "--" if value is None else f"{value:.0f}°"


def _clock(iso_str: str, display_tz: tzinfo | None) -> str:
    # Without a display zone the period keeps the forecast location's offset
    dt = parse_timestamp(iso_str)
    if dt is None:
        return "??:??"
    if display_tz is not None:
        dt = dt.astimezone(display_tz)
    return dt.strftime("%I:%M %p").lstrip("0")
