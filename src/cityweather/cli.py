"""
Command line interface for the city weather client.
"""

import argparse
import logging
import sys

from cityweather.config.error_aggregator import get_error_aggregator
from cityweather.config.error_aggregator import init_error_aggregator
from cityweather.config.logging import setup_logging
from cityweather.config.settings import load_app_config
from cityweather.config.settings import load_credentials
from cityweather.config.types import AppConfig
from cityweather.exceptions import ArgumentError
from cityweather.exceptions import ConfigError
from cityweather.exceptions import NoDataError
from cityweather.exceptions import handle_errors
from cityweather.services.weather_formatter import WeatherFormatter
from cityweather.services.weather_manager import WeatherManager
from cityweather.utils.logging_utils import get_logger


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser."""
    parser = argparse.ArgumentParser(
        prog='cityweather',
        description='Show the current temperature for a city, averaged over '
                    'OpenWeatherMap and WeatherAPI and cached for a few minutes'
    )
    parser.add_argument(
        '--city',
        default='',
        help='City name'
    )
    return parser

def validate_city(city: str | None) -> str:
    """Return the city name, rejecting missing or blank values.

    Raises:
        ArgumentError: If no usable city name was given
    """
    if not city or not city.strip():
        raise ArgumentError("City name must be specified", "city")
    return city

def run(city: str, config: AppConfig, logger: logging.Logger) -> int:
    """Serve weather for one city.

    Args:
        city: City name as typed by the user
        config: Runtime settings
        logger: Logger for diagnostics

    Returns:
        Process exit code
    """
    try:
        with handle_errors(ConfigError, "config", "load credentials"):
            credentials = load_credentials(config.config_file)
    except ConfigError as e:
        print(f"Error loading config: {e.message}")
        return 1

    manager = WeatherManager.from_config(config, credentials)
    try:
        try:
            report = manager.get_weather(city)
        except NoDataError as e:
            logger.error(f"No provider returned weather for {city!r}")
            print(e.message)
            return 1

        print(WeatherFormatter.format_report(report))
        manager.persist(report)
        return 0
    finally:
        manager.close()

def main(argv: list[str] | None = None) -> int:
    """Main entry point for CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    try:
        city = validate_city(args.city)
    except ArgumentError as e:
        print(e.message)
        return 1

    try:
        config = load_app_config()
    except ConfigError as e:
        print(f"Error loading config: {e.message}")
        return 1

    setup_logging(config)
    logger = get_logger(__name__)
    init_error_aggregator(config.error_aggregation)

    try:
        return run(city, config, logger)
    except Exception:
        logger.exception("Unhandled exception")
        return 1
    finally:
        get_error_aggregator().shutdown()

if __name__ == '__main__':
    sys.exit(main())
