"""Base class for weather providers."""

from abc import ABC
from abc import abstractmethod
from typing import Any

import requests

from cityweather.config.logging_filters import mask_query_secrets
from cityweather.config.types import DEFAULT_REQUEST_TIMEOUT
from cityweather.exceptions import ProviderError
from cityweather.exceptions import ProviderResponseError
from cityweather.exceptions import ProviderTimeoutError
from cityweather.exceptions import handle_errors
from cityweather.services.weather_types import WeatherReading
from cityweather.utils.logging_utils import EnhancedLoggerMixin
from cityweather.utils.logging_utils import log_execution


class WeatherProvider(EnhancedLoggerMixin, ABC):
    """One external current-weather API.

    A provider issues a single GET per call with no retries. Each provider
    owns its session and is only ever used from one worker at a time.
    """

    service_type: str = "base"
    base_url: str = ""

    def __init__(
        self,
        api_key: str,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
        session: requests.Session | None = None
    ):
        """Initialize provider.

        Args:
            api_key: Provider API key
            timeout: Request timeout in seconds
            session: Optional session, a new one is created otherwise
        """
        super().__init__()
        self.api_key = api_key
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.setdefault('User-Agent', 'cityweather/0.1.0')
        self.session.headers['Accept'] = 'application/json'
        self.set_log_context(service=self.service_type)

    @abstractmethod
    def build_params(self, city: str) -> dict[str, str]:
        """Build the provider-specific query parameters for a city."""
        pass

    @abstractmethod
    def _parse_response(self, data: dict[str, Any]) -> WeatherReading:
        """Parse a decoded response body into a reading.

        Raises:
            KeyError, TypeError, ValueError, IndexError, AttributeError: If the
                body lacks required fields
        """
        pass

    @log_execution(level='DEBUG')
    def get_current(self, city: str) -> WeatherReading:
        """Fetch current conditions for a city.

        Args:
            city: City name as typed by the user

        Returns:
            WeatherReading from this provider

        Raises:
            ProviderError: On network failure, timeout, non-2xx status,
                undecodable body or missing fields
        """
        with handle_errors(ProviderError, self.service_type, "get current weather"):
            data = self._request(self.build_params(city))
            try:
                reading = self._parse_response(data)
            except (KeyError, TypeError, ValueError, IndexError, AttributeError) as e:
                raise ProviderResponseError(
                    f"{self.service_type} response is missing weather fields: {e!r}",
                    self.service_type
                ) from e

        self.debug(
            "Got weather reading",
            city=city,
            location=reading.location,
            temperature=reading.temperature_celsius
        )
        return reading

    def _request(self, params: dict[str, str]) -> dict[str, Any]:
        """Perform the GET and decode the JSON body.

        The response is closed on every path, including errors.
        """
        self.debug(
            "Weather request",
            url=self.base_url,
            params={k: v for k, v in params.items() if v != self.api_key}
        )

        try:
            with self.session.get(self.base_url, params=params, timeout=self.timeout) as response:
                if not 200 <= response.status_code < 300:
                    raise ProviderResponseError(
                        f"{self.service_type} request failed with status {response.status_code}",
                        self.service_type,
                        response=response,
                        details={"reason": response.reason}
                    )
                try:
                    data = response.json()
                except ValueError as e:
                    raise ProviderResponseError(
                        f"Invalid JSON from {self.service_type}: {e}",
                        self.service_type,
                        response=response
                    ) from e
        except requests.Timeout as e:
            raise ProviderTimeoutError(
                f"{self.service_type} request timed out after {self.timeout}s",
                self.service_type
            ) from e
        except requests.RequestException as e:
            raise ProviderError(
                f"{self.service_type} request failed: {mask_query_secrets(str(e))}",
                self.service_type
            ) from e

        if not isinstance(data, dict):
            raise ProviderResponseError(
                f"{self.service_type} returned {type(data).__name__}, expected an object",
                self.service_type
            )
        return data

    def close(self) -> None:
        """Release the provider's connection pool."""
        self.session.close()
