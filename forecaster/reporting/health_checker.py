"""Health checker: NWS API reachability and ZIP table size."""

import httpx

from forecaster.config.schema import ForecasterConfig
from forecaster.location.resolver import LocationResolver
from forecaster.models.reporting import HealthStatus


class HealthChecker:
    def __init__(self, config: ForecasterConfig, resolver: LocationResolver):
        self.config = config
        self.resolver = resolver

    def check(self) -> HealthStatus:
        return HealthStatus(
            noaa_api_reachable=self._check_noaa(),
            zip_records_loaded=len(self.resolver),
            config_timezone=self.config.display.timezone or "local",
        )

    def _check_noaa(self) -> bool:
        try:
            resp = httpx.get(
                self.config.api.base_url,
                headers={"User-Agent": self.config.api.user_agent},
                timeout=self.config.api.timeout_seconds,
            )
            return resp.status_code == 200
        except httpx.HTTPError:
            return False
