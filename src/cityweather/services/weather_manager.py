"""Weather manager: cache check, fetch, aggregation and persistence."""

from collections.abc import Callable
from datetime import UTC
from datetime import datetime

from cityweather.config.error_aggregator import aggregate_error
from cityweather.config.types import AppConfig
from cityweather.config.types import Credentials
from cityweather.exceptions import CacheError
from cityweather.exceptions import CacheWriteError
from cityweather.services.weather_cache import Cache
from cityweather.services.weather_cache import WeatherCacheStore
from cityweather.services.weather_service import WeatherFetcher
from cityweather.services.weather_service import average_readings
from cityweather.services.weather_types import WeatherReport
from cityweather.utils.logging_utils import EnhancedLoggerMixin


def _utc_now() -> datetime:
    return datetime.now(UTC)

class WeatherManager(EnhancedLoggerMixin):
    """Serves weather for one city per run, from cache or from providers.

    The cache is loaded lazily on the first request. A fresh cache that
    contains the city answers without any network traffic; anything else
    goes to the providers. Persisting the new reading is a separate step so
    the caller can show the result before the cache is written.
    """

    def __init__(
        self,
        fetcher: WeatherFetcher,
        cache_store: WeatherCacheStore,
        clock: Callable[[], datetime] = _utc_now
    ):
        """Initialize weather manager.

        Args:
            fetcher: Fetcher used on cache miss or stale cache
            cache_store: Cache store for the cache file
            clock: Source of the current time, timezone aware
        """
        super().__init__()
        self.fetcher = fetcher
        self.cache_store = cache_store
        self.clock = clock
        self.cache: Cache | None = None
        self._cache_loaded = False
        self.set_log_context(component="weather_manager")

    @classmethod
    def from_config(cls, config: AppConfig, credentials: Credentials) -> 'WeatherManager':
        """Create a manager with the default providers and cache file."""
        return cls(
            fetcher=WeatherFetcher.from_credentials(credentials, config.request_timeout),
            cache_store=WeatherCacheStore(config.cache_file, config.cache_ttl)
        )

    def load_cache(self) -> Cache | None:
        """Load the cache once; unreadable caches are logged and ignored."""
        if not self._cache_loaded:
            self._cache_loaded = True
            try:
                self.cache = self.cache_store.load()
            except CacheError as e:
                self.warning("Ignoring unusable weather cache", reason=e.message, path=str(self.cache_store.path))
                aggregate_error(str(e), "weather_cache", e.__traceback__)
                self.cache = None
        return self.cache

    def get_weather(self, city: str) -> WeatherReport:
        """Get weather for a city.

        Args:
            city: City name as typed by the user, matched case-sensitively

        Returns:
            Cached report when the whole cache is fresh and holds the city,
            otherwise the average over all providers that answered

        Raises:
            NoDataError: If no provider returned data
        """
        cache = self.load_cache()
        now = self.clock()

        if cache is not None and self.cache_store.is_fresh(cache, now):
            reading = self.cache_store.lookup(cache, city)
            if reading is not None:
                self.info("Serving weather from cache", city=city)
                return WeatherReport(
                    city=city,
                    temperature_celsius=reading.temperature_celsius,
                    reading=reading,
                    from_cache=True
                )

        readings = self.fetcher.fetch_all(city)
        return average_readings(city, readings)

    def persist(self, report: WeatherReport) -> bool:
        """Store a freshly fetched report and write the cache file.

        Storing bumps the single cache-wide timestamp. Write failures are
        logged and do not raise.

        Args:
            report: Report returned by :meth:`get_weather`

        Returns:
            True if the cache file was written
        """
        if report.from_cache:
            return False

        cache = self.load_cache()
        if cache is None:
            cache = Cache()
            self.cache = cache

        cache.store(report.city, report.reading, self.clock())
        try:
            self.cache_store.save(cache)
        except CacheWriteError as e:
            self.error("Failed to save weather cache", reason=e.message, path=str(self.cache_store.path))
            aggregate_error(str(e), "weather_cache", e.__traceback__)
            return False
        return True

    def close(self) -> None:
        """Release network resources."""
        self.fetcher.close()
