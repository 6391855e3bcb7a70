"""Centralized error definitions for the city weather client."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any

import requests

from cityweather.config.error_aggregator import aggregate_error
from cityweather.error_codes import ErrorCode


logger = logging.getLogger(__name__)

@dataclass
class CityWeatherError(Exception):
    """Base exception for all city weather errors."""
    message: str
    code: ErrorCode
    details: dict[str, Any] | None = None

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} (Code: {self.code.value}, Details: {self.details})"
        return f"{self.message} (Code: {self.code.value})"

class ArgumentError(CityWeatherError):
    """Invalid or missing command line argument."""
    def __init__(self, message: str, argument: str):
        super().__init__(message, ErrorCode.INVALID_ARGUMENT, {"argument": argument})

class ConfigError(CityWeatherError):
    """Configuration error."""
    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.CONFIG_INVALID,
        details: dict[str, Any] | None = None
    ):
        super().__init__(message, code, details)

class CacheError(CityWeatherError):
    """Cache file could not be read or parsed."""
    def __init__(
        self,
        message: str,
        file_path: str,
        code: ErrorCode = ErrorCode.CACHE_READ_FAILED,
        details: dict[str, Any] | None = None
    ):
        details = details or {}
        details["file_path"] = file_path
        super().__init__(message, code, details)

class CacheWriteError(CacheError):
    """Cache file could not be written."""
    def __init__(self, message: str, file_path: str):
        super().__init__(message, file_path, ErrorCode.CACHE_WRITE_FAILED)

class ProviderError(CityWeatherError):
    """A single weather provider call failed."""
    def __init__(
        self,
        message: str,
        provider: str,
        code: ErrorCode = ErrorCode.PROVIDER_REQUEST_FAILED,
        response: requests.Response | None = None,
        details: dict[str, Any] | None = None
    ):
        details = details or {}
        details["provider"] = provider
        if response is not None:
            details["status_code"] = response.status_code
        super().__init__(message, code, details)
        self.provider = provider
        self.response = response

class ProviderTimeoutError(ProviderError):
    """Provider did not answer within the request timeout."""
    def __init__(self, message: str, provider: str):
        super().__init__(message, provider, ErrorCode.PROVIDER_TIMEOUT)

class ProviderResponseError(ProviderError):
    """Provider answered with an error status or an unusable body."""
    def __init__(
        self,
        message: str,
        provider: str,
        response: requests.Response | None = None,
        details: dict[str, Any] | None = None
    ):
        super().__init__(message, provider, ErrorCode.PROVIDER_INVALID_RESPONSE, response, details)

class NoDataError(CityWeatherError):
    """No provider returned weather data."""
    def __init__(self, message: str, city: str):
        super().__init__(message, ErrorCode.NO_DATA, {"city": city})

@contextmanager
def handle_errors(
    error_type: type[CityWeatherError],
    service: str,
    operation: str
) -> Iterator[None]:
    """Report errors raised inside the block to the error aggregator.

    Errors are always re-raised; callers decide whether they are fatal.

    Args:
        error_type: The expected error type
        service: The service name
        operation: The operation name
    """
    try:
        yield
    except error_type as e:
        aggregate_error(str(e), service, e.__traceback__)
        raise
    except Exception as e:
        logger.error(
            f"Unexpected error in {service}.{operation}: {e}",
            exc_info=True
        )
        aggregate_error(str(e), service, e.__traceback__)
        raise
