"""
City weather client: averaged current weather from two providers.
"""

__version__ = '0.1.0'

from .exceptions import (
    ArgumentError,
    CacheError,
    CacheWriteError,
    CityWeatherError,
    ConfigError,
    NoDataError,
    ProviderError,
    ProviderResponseError,
    ProviderTimeoutError,
)

__all__ = [
    'ArgumentError',
    'CacheError',
    'CacheWriteError',
    'CityWeatherError',
    'ConfigError',
    'NoDataError',
    'ProviderError',
    'ProviderResponseError',
    'ProviderTimeoutError'
]
