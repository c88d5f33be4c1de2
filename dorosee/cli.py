"""CLI entry point for the Dorosee forecast grid tools."""

import argparse
import logging
from datetime import datetime

import httpx

from dorosee.config.loader import load_config, redacted_dump, redacted_value
from dorosee.config.schema import DoroseeConfig
from dorosee.grid.base_time import get_base_date_time
from dorosee.grid.cities import get_city_grid_coords, nearest_city
from dorosee.grid.projection import convert_to_grid
from dorosee.ingest.advice import reliability_score, weather_advice, weather_emoji
from dorosee.ingest.kma_client import (
    KmaClient,
    KmaConfigError,
    KmaError,
    check_api_config,
)
from dorosee.ingest.weather_service import WeatherService

DEFAULT_CONFIG = "ops/configs/default.yaml"

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="dorosee",
        description="KMA forecast grid conversion and weather lookup",
    )
    parser.add_argument(
        "--config", default=DEFAULT_CONFIG, help="Config YAML path"
    )

    sub = parser.add_subparsers(dest="command")

    grid_p = sub.add_parser("grid", help="Convert latitude/longitude to grid cell")
    grid_p.add_argument("lat", type=float)
    grid_p.add_argument("lon", type=float)

    bt_p = sub.add_parser("base-time", help="Show the forecast slot to query")
    bt_p.add_argument("--at", help="ISO timestamp instead of now (KST if naive)")

    sub.add_parser("cities", help="List the city grid table")

    weather_p = sub.add_parser("weather", help="Fetch current weather")
    weather_p.add_argument("--lat", type=float, default=None)
    weather_p.add_argument("--lon", type=float, default=None)
    weather_p.add_argument("--address", default=None, help="Address for fallback lookup")
    weather_p.add_argument(
        "--no-fallback", action="store_true", help="Fail instead of estimating"
    )

    config_p = sub.add_parser("config", help="Config operations")
    config_sub = config_p.add_subparsers(dest="config_command")
    config_sub.add_parser("show", help="Display current config")
    get_p = config_sub.add_parser("get", help="Get a config value")
    get_p.add_argument("key", help="Dotted key, e.g. kma.timeout")
    config_sub.add_parser("check", help="Check the KMA service key")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "grid":
        return _cmd_grid(args)
    elif args.command == "base-time":
        return _cmd_base_time(args)
    elif args.command == "cities":
        return _cmd_cities()

    config = load_config(args.config)

    if args.command == "weather":
        return _cmd_weather(config, args)
    elif args.command == "config":
        return _cmd_config(config, args)
    else:
        parser.print_help()
        return 1


def _cmd_grid(args) -> int:
    try:
        grid = convert_to_grid(args.lat, args.lon)
    except ValueError as e:
        print(f"Error: cannot project ({args.lat}, {args.lon}): {e}")
        return 1
    print(f"nx={grid.nx} ny={grid.ny}")
    print(f"Nearest city: {nearest_city(grid)}")
    return 0


def _cmd_base_time(args) -> int:
    now = None
    if args.at:
        try:
            now = datetime.fromisoformat(args.at)
        except ValueError:
            print(f"Error: not an ISO timestamp: {args.at}")
            return 1
    window = get_base_date_time(now)
    print(f"base_date={window.base_date} base_time={window.base_time}")
    return 0


def _cmd_cities() -> int:
    for name, coords in get_city_grid_coords().items():
        print(f"{name}: nx={coords.nx} ny={coords.ny}")
    return 0


def _cmd_weather(config: DoroseeConfig, args) -> int:
    lat = args.lat if args.lat is not None else config.location.latitude
    lon = args.lon if args.lon is not None else config.location.longitude

    client: KmaClient | None
    try:
        client = KmaClient(
            service_key=config.kma.service_key or None,
            base_url=config.kma.base_url,
            timeout=config.kma.timeout,
            max_retries=config.kma.max_retries,
            retry_base_delay=config.kma.retry_base_delay,
            num_of_rows=config.kma.num_of_rows,
            page_no=config.kma.page_no,
        )
    except KmaConfigError as e:
        if args.no_fallback or not config.fallback.enabled:
            print(f"Error: {e}")
            return 1
        logger.warning("%s; only estimates are available", e)
        client = None

    service = WeatherService(client, max_window_attempts=config.kma.max_window_attempts)
    if args.no_fallback or not config.fallback.enabled:
        try:
            report = service.get_current_weather(lat, lon)
        except (KmaError, httpx.HTTPError) as e:
            print(f"Error: {e}")
            return 1
    else:
        report = service.get_weather_with_fallback(lat, lon, address=args.address)

    print(
        f"{weather_emoji(report.condition)} {report.location}: "
        f"{report.temperature}°C {report.condition} "
        f"({report.source}, reliability={reliability_score(report.source)})"
    )
    if report.humidity is not None:
        print(f"  humidity={report.humidity}% wind={report.wind_speed}m/s "
              f"precipitation={report.precipitation_type}")
    print(f"  {weather_advice(report.temperature, report.condition)}")
    return 0


def _cmd_config(config: DoroseeConfig, args) -> int:
    if args.config_command == "show":
        print(redacted_dump(config))
        return 0
    elif args.config_command == "get":
        try:
            value = redacted_value(config, args.key)
        except KeyError as e:
            print(f"Error: {e}")
            return 1
        print(f"{args.key} = {value}")
        return 0
    elif args.config_command == "check":
        info = check_api_config(config.kma.service_key or None)
        for key, value in info.items():
            print(f"{key} = {value}")
        return 0 if info["configured"] else 1
    else:
        print("Use: config show | config get KEY | config check")
        return 1
