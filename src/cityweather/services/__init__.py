"""Service implementations."""

from .weather_cache import Cache
from .weather_cache import WeatherCacheStore
from .weather_manager import WeatherManager
from .weather_service import WeatherFetcher
from .weather_service import average_readings
from .weather_types import WeatherReading
from .weather_types import WeatherReport


__all__ = [
    'Cache',
    'WeatherCacheStore',
    'WeatherFetcher',
    'WeatherManager',
    'WeatherReading',
    'WeatherReport',
    'average_readings'
]
