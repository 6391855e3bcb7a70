"""Configuration type definitions."""

from dataclasses import dataclass
from dataclasses import field
from datetime import timedelta


DEFAULT_CONFIG_FILE = "config.json"
DEFAULT_CACHE_FILE = "cache.json"
DEFAULT_CACHE_TTL = timedelta(minutes=10)
DEFAULT_REQUEST_TIMEOUT = 10.0

@dataclass(frozen=True)
class Credentials:
    """Provider API keys, read-only for the lifetime of the process."""
    openweathermap_api_key: str
    weatherapi_api_key: str

    def __repr__(self) -> str:
        return "Credentials(openweathermap_api_key='***', weatherapi_api_key='***')"

@dataclass
class ErrorAggregationConfig:
    """Error aggregation configuration."""
    enabled: bool = True
    error_threshold: int = 5

@dataclass
class AppConfig:
    """Runtime settings."""
    config_file: str = DEFAULT_CONFIG_FILE
    cache_file: str = DEFAULT_CACHE_FILE
    cache_ttl: timedelta = DEFAULT_CACHE_TTL
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    log_level: str = "WARNING"
    log_file: str | None = None
    error_aggregation: ErrorAggregationConfig = field(default_factory=ErrorAggregationConfig)
