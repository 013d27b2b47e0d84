"""Operational health models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class HealthStatus:
    noaa_api_reachable: bool
    zip_records_loaded: int
    config_timezone: str
