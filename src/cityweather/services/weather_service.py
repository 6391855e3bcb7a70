"""
Concurrent weather fetching across providers and result aggregation.
"""

import threading
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor

from cityweather.config.types import Credentials
from cityweather.config.types import DEFAULT_REQUEST_TIMEOUT
from cityweather.exceptions import NoDataError
from cityweather.exceptions import ProviderError
from cityweather.services.base_service import WeatherProvider
from cityweather.services.open_weather_service import OpenWeatherProvider
from cityweather.services.weather_api_service import WeatherApiProvider
from cityweather.services.weather_types import WeatherReading
from cityweather.services.weather_types import WeatherReport
from cityweather.utils.logging_utils import EnhancedLoggerMixin
from cityweather.utils.logging_utils import log_execution


class WeatherFetcher(EnhancedLoggerMixin):
    """Queries every provider at once and keeps whatever succeeds.

    All provider calls are started together and joined before returning.
    A failing provider is logged and dropped; it never stops the others.
    Readings are collected in completion order.
    """

    def __init__(self, providers: Sequence[WeatherProvider]):
        """Initialize fetcher.

        Args:
            providers: Providers to query on every fetch
        """
        super().__init__()
        self.providers = list(providers)
        self.set_log_context(component="weather_fetcher")

    @classmethod
    def from_credentials(
        cls,
        credentials: Credentials,
        timeout: float = DEFAULT_REQUEST_TIMEOUT
    ) -> 'WeatherFetcher':
        """Create a fetcher for OpenWeatherMap and WeatherAPI."""
        return cls([
            OpenWeatherProvider(credentials.openweathermap_api_key, timeout),
            WeatherApiProvider(credentials.weatherapi_api_key, timeout),
        ])

    @log_execution(level='DEBUG', include_args=True)
    def fetch_all(self, city: str) -> list[WeatherReading]:
        """Fetch current weather for a city from all providers concurrently.

        Args:
            city: City name as typed by the user

        Returns:
            Successful readings in completion order, possibly empty
        """
        readings: list[WeatherReading] = []
        lock = threading.Lock()

        def fetch_one(provider: WeatherProvider) -> None:
            reading = self._fetch_one(provider, city)
            if reading is not None:
                with lock:
                    readings.append(reading)

        if self.providers:
            with ThreadPoolExecutor(
                max_workers=len(self.providers),
                thread_name_prefix="weather-fetch"
            ) as executor:
                for provider in self.providers:
                    executor.submit(fetch_one, provider)

        self.info(
            "Fetched weather",
            city=city,
            succeeded=len(readings),
            attempted=len(self.providers)
        )
        return readings

    def _fetch_one(self, provider: WeatherProvider, city: str) -> WeatherReading | None:
        """Run one provider call, turning any failure into ``None``."""
        try:
            return provider.get_current(city)
        except ProviderError as e:
            self.warning("Dropping provider result", provider=provider.service_type, reason=e.message)
        except Exception as e:
            self.error(
                "Unexpected provider failure",
                exc_info=e,
                provider=provider.service_type
            )
        return None

    def close(self) -> None:
        """Close all provider sessions."""
        for provider in self.providers:
            provider.close()

def average_readings(city: str, readings: Sequence[WeatherReading]) -> WeatherReport:
    """Average the temperatures of all successful readings.

    The first reading supplies location, humidity and description.

    Args:
        city: City name as typed by the user
        readings: Successful readings, first completed first

    Returns:
        WeatherReport with the mean temperature

    Raises:
        NoDataError: If there are no readings
    """
    if not readings:
        raise NoDataError("Failed to retrieve weather data", city)

    total = sum(reading.temperature_celsius for reading in readings)
    return WeatherReport(
        city=city,
        temperature_celsius=total / len(readings),
        reading=readings[0],
        from_cache=False,
        sample_count=len(readings)
    )
