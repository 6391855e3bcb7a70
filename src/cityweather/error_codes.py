"""Error codes for the city weather client."""

from enum import Enum

class ErrorCode(Enum):
    """Enumeration of all possible error codes."""
    # Argument Errors
    INVALID_ARGUMENT = "invalid_argument"

    # Configuration Errors
    CONFIG_INVALID = "config_invalid"
    CONFIG_MISSING = "config_missing"

    # Cache Errors
    CACHE_READ_FAILED = "cache_read_failed"
    CACHE_WRITE_FAILED = "cache_write_failed"

    # Provider Errors
    PROVIDER_REQUEST_FAILED = "provider_request_failed"
    PROVIDER_TIMEOUT = "provider_timeout"
    PROVIDER_INVALID_RESPONSE = "provider_invalid_response"

    # Data Errors
    NO_DATA = "no_data"
