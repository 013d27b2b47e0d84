"""Daily forecast aggregation: day/night periods -> one summary per calendar day."""

from forecaster.models.forecast import DailySummary, ForecastPeriod

MAX_DAYS = 7


def aggregate(periods: list[ForecastPeriod], max_days: int = MAX_DAYS) -> list[DailySummary]:
    """Bucket periods by the date prefix of start_time and summarize each bucket.

    Buckets with only night periods (the trailing partial day) still produce
    a summary through the min/max fallback.
    """
    groups: dict[str, list[ForecastPeriod]] = {}
    for period in periods:
        date_str = period.start_time.split("T")[0]
        groups.setdefault(date_str, []).append(period)

    return [_summarize(d, groups[d]) for d in sorted(groups)[:max_days]]


def _summarize(date_str: str, day_periods: list[ForecastPeriod]) -> DailySummary:
    day = next((p for p in day_periods if p.is_daytime), None)
    night = next((p for p in day_periods if not p.is_daytime), None)
    temps = [p.temperature for p in day_periods if p.temperature is not None]

    if day is not None and day.temperature is not None:
        high = day.temperature
    else:
        high = max(temps) if temps else None

    if night is not None and night.temperature is not None:
        low = night.temperature
    else:
        low = min(temps) if temps else None

    # Delivery order, not time order, picks the fallback description
    source = day if day is not None else day_periods[0]
    return DailySummary(
        date=date_str,
        high=high,
        low=low,
        description=source.short_forecast,
        icon=source.icon,
    )


def hours_for_date(hourly: list[ForecastPeriod], date_str: str) -> list[ForecastPeriod]:
    """Hourly periods whose start_time falls on date_str (YYYY-MM-DD)."""
    return [p for p in hourly if p.start_time.startswith(date_str)]
