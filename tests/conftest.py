"""Pytest configuration and shared fixtures."""

import json
from unittest.mock import MagicMock

import pytest
import requests

from cityweather.config import error_aggregator
from cityweather.config.types import Credentials


@pytest.fixture(autouse=True)
def setup_test_env(monkeypatch):
    """Keep tests independent of the caller's environment and of each other."""
    for name in (
        "CITYWEATHER_CONFIG_FILE",
        "CITYWEATHER_CACHE_FILE",
        "CITYWEATHER_CACHE_TTL",
        "CITYWEATHER_REQUEST_TIMEOUT",
        "CITYWEATHER_LOG_LEVEL",
        "CITYWEATHER_LOG_FILE",
        "CITYWEATHER_OPENWEATHERMAP_API_KEY",
        "CITYWEATHER_WEATHERAPI_API_KEY",
    ):
        monkeypatch.delenv(name, raising=False)

    monkeypatch.setattr(error_aggregator, "_error_aggregator", None)
    yield

@pytest.fixture
def credentials():
    """Test API keys."""
    return Credentials(
        openweathermap_api_key="owm-test-key",
        weatherapi_api_key="wapi-test-key"
    )

@pytest.fixture
def config_file(tmp_path):
    """A valid config.json in a temporary directory."""
    path = tmp_path / "config.json"
    path.write_text(json.dumps({
        "openweathermap_api_key": "owm-test-key",
        "weatherapi_api_key": "wapi-test-key"
    }))
    return path

@pytest.fixture
def openweather_payload():
    """Trimmed OpenWeatherMap current weather response."""
    return {
        "coord": {"lon": -0.1257, "lat": 51.5085},
        "weather": [{"id": 500, "main": "Rain", "description": "light rain", "icon": "10d"}],
        "main": {"temp": 10.0, "feels_like": 9.1, "pressure": 1012, "humidity": 81},
        "name": "London",
        "cod": 200
    }

@pytest.fixture
def weatherapi_payload():
    """Trimmed WeatherAPI realtime response."""
    return {
        "location": {"name": "London", "region": "City of London, Greater London", "country": "United Kingdom"},
        "current": {
            "temp_c": 20.0,
            "temp_f": 68.0,
            "condition": {"text": "Partly cloudy", "code": 1003},
            "humidity": 55
        }
    }

def make_response(status_code=200, json_data=None, json_error=None):
    """Create a mock response usable as a context manager."""
    response = MagicMock(spec=requests.Response)
    response.status_code = status_code
    response.reason = "OK" if status_code < 400 else "Error"
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = json_data
    response.__enter__.return_value = response
    response.__exit__.return_value = False
    return response

@pytest.fixture
def response_factory():
    """Factory for mock HTTP responses."""
    return make_response

@pytest.fixture
def mock_session():
    """Create a mock requests session."""
    session = MagicMock(spec=requests.Session)
    session.headers = {}
    return session
