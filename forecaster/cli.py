"""CLI entry point for the forecast lookup."""

import argparse
import logging
from zoneinfo import ZoneInfo

from forecaster.config.loader import get_config_value, load_config_or_default
from forecaster.errors import ForecastError
from forecaster.location.resolver import load_resolver
from forecaster.pipeline.forecast_pipeline import ForecastPipeline
from forecaster.reporting.formatters import (
    format_result_json,
    format_result_text,
    format_suggestions_text,
)
from forecaster.reporting.health_checker import HealthChecker

DEFAULT_CONFIG = "ops/configs/default.yaml"


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="forecaster",
        description="7-day forecast and current conditions by ZIP code or city",
    )
    parser.add_argument(
        "--config", default=DEFAULT_CONFIG, help="Config YAML path"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log pipeline steps"
    )

    sub = parser.add_subparsers(dest="command")

    # forecast
    fc_p = sub.add_parser("forecast", help="Fetch the forecast for a location")
    fc_p.add_argument("query", help="ZIP code or city name")
    fc_p.add_argument("--json", action="store_true", help="Print JSON")
    fc_p.add_argument(
        "--expand", metavar="YYYY-MM-DD", help="Show hourly detail for one day"
    )

    # suggest
    sg_p = sub.add_parser("suggest", help="City-name autocomplete")
    sg_p.add_argument("text", help="Start of a city name")
    sg_p.add_argument("--limit", type=int, default=None, help="Max suggestions")

    # health
    sub.add_parser("health", help="Run health checks")

    # config show / config get
    config_p = sub.add_parser("config", help="Config operations")
    config_sub = config_p.add_subparsers(dest="config_command")
    config_sub.add_parser("show", help="Display current config")
    get_p = config_sub.add_parser("get", help="Print one config value")
    get_p.add_argument("key", help="Dotted key, e.g. api.timeout_seconds")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = load_config_or_default(args.config)

    if args.command == "forecast":
        return _cmd_forecast(config, args)
    elif args.command == "suggest":
        return _cmd_suggest(config, args)
    elif args.command == "health":
        return _cmd_health(config)
    elif args.command == "config":
        return _cmd_config(config, args)
    else:
        parser.print_help()
        return 1


def _cmd_forecast(config, args) -> int:
    pipeline = ForecastPipeline(config)
    try:
        result = pipeline.fetch_forecast(args.query)
    except ForecastError as e:
        print(f"Error: {e}")
        return 1

    if args.json:
        print(format_result_json(result))
    else:
        tz_name = config.display.timezone
        print(
            format_result_text(
                result,
                expanded_date=args.expand,
                display_tz=ZoneInfo(tz_name) if tz_name else None,
            )
        )
    return 0


def _cmd_suggest(config, args) -> int:
    resolver = load_resolver(config.location.zip_data_path)
    suggestions = resolver.suggest(
        args.text,
        limit=args.limit or config.location.suggestion_limit,
        min_length=config.location.min_suggest_length,
    )
    print(format_suggestions_text(suggestions))
    return 0


def _cmd_health(config) -> int:
    checker = HealthChecker(config, load_resolver(config.location.zip_data_path))
    status = checker.check()

    print(f"NOAA API: {'OK' if status.noaa_api_reachable else 'FAIL'}")
    print(f"ZIP records: {status.zip_records_loaded}")
    print(f"Display timezone: {status.config_timezone}")
    return 0 if status.noaa_api_reachable else 1


def _cmd_config(config, args) -> int:
    if args.config_command == "show":
        print(config.model_dump_json(indent=2))
        return 0
    elif args.config_command == "get":
        try:
            print(get_config_value(config, args.key))
            return 0
        except KeyError as e:
            print(f"Error: {e}")
            return 1
    else:
        print("Use: config show | config get KEY")
        return 1
