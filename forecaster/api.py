"""Forecast API: FastAPI backend for the forecast and autocomplete screens.

Run with: uvicorn forecaster.api:create_app --factory
"""

import logging
import os
from dataclasses import asdict
from pathlib import Path

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware

from forecaster.aggregate.daily import hours_for_date
from forecaster.config.loader import load_config_or_default
from forecaster.config.schema import ForecasterConfig
from forecaster.errors import ForecastError, InvalidLocation
from forecaster.pipeline.forecast_pipeline import ForecastPipeline
from forecaster.reporting.formatters import result_to_dict
from forecaster.reporting.health_checker import HealthChecker

logger = logging.getLogger(__name__)

CONFIG_PATH = Path(os.environ.get("FORECASTER_CONFIG", "ops/configs/default.yaml"))


def create_app(
    config: ForecasterConfig | None = None,
    pipeline: ForecastPipeline | None = None,
) -> FastAPI:
    config = config or load_config_or_default(CONFIG_PATH)
    pipeline = pipeline or ForecastPipeline(config)
    resolver = pipeline.resolver

    app = FastAPI(title="Forecaster", version="0.1.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    def _fetch(q: str):
        try:
            return pipeline.fetch_forecast(q)
        except InvalidLocation as e:
            raise HTTPException(status_code=404, detail=str(e)) from e
        except ForecastError as e:
            logger.warning("Forecast for %r failed: %s", q, e)
            raise HTTPException(status_code=502, detail=str(e)) from e

    @app.get("/api/forecast")
    def get_forecast(q: str):
        """Daily summaries, hourly periods and current conditions."""
        return result_to_dict(_fetch(q))

    @app.get("/api/forecast/hours")
    def get_hours(q: str, date: str):
        """Hourly periods for one YYYY-MM-DD day of the forecast."""
        result = _fetch(q)
        return [asdict(p) for p in hours_for_date(result.hourly, date)]

    @app.get("/api/suggest")
    def get_suggestions(q: str, limit: int | None = Query(None, ge=1)):
        suggestions = resolver.suggest(
            q,
            limit=limit if limit is not None else config.location.suggestion_limit,
            min_length=config.location.min_suggest_length,
        )
        return [
            {"city": s.city, "state": s.state, "zip": s.zip, "label": s.label}
            for s in suggestions
        ]

    @app.get("/api/health")
    def get_health():
        status = HealthChecker(config, resolver).check()
        return asdict(status)

    return app
