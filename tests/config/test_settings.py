"""Tests for configuration loading."""

import json
from datetime import timedelta
from pathlib import Path

import pytest

from cityweather.config.settings import load_app_config
from cityweather.config.settings import load_credentials
from cityweather.config.types import DEFAULT_CACHE_TTL
from cityweather.config.utils import validate_api_key
from cityweather.error_codes import ErrorCode
from cityweather.exceptions import ConfigError


def test_load_json_credentials(config_file):
    """Test loading API keys from config.json."""
    credentials = load_credentials(config_file)

    assert credentials.openweathermap_api_key == "owm-test-key"
    assert credentials.weatherapi_api_key == "wapi-test-key"

def test_load_yaml_credentials(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "openweathermap_api_key: owm-yaml\n"
        "weatherapi_api_key: wapi-yaml\n"
    )

    credentials = load_credentials(path)

    assert credentials.openweathermap_api_key == "owm-yaml"
    assert credentials.weatherapi_api_key == "wapi-yaml"

def test_env_overrides_file(config_file, monkeypatch):
    monkeypatch.setenv("CITYWEATHER_WEATHERAPI_API_KEY", "wapi-env")

    credentials = load_credentials(config_file)

    assert credentials.openweathermap_api_key == "owm-test-key"
    assert credentials.weatherapi_api_key == "wapi-env"

def test_missing_key_loads_empty(tmp_path, caplog):
    """A missing key is loaded as empty and reported as a warning."""
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"openweathermap_api_key": "owm-test-key", "extra": 1}))

    with caplog.at_level("WARNING"):
        credentials = load_credentials(path)

    assert credentials.weatherapi_api_key == ""
    assert "weatherapi API key is not configured" in caplog.text

def test_missing_file(tmp_path):
    """Test that a missing config file is a CONFIG_MISSING error."""
    with pytest.raises(ConfigError) as exc_info:
        load_credentials(tmp_path / "config.json")

    assert exc_info.value.code == ErrorCode.CONFIG_MISSING
    assert "Configuration file not found" in exc_info.value.message

@pytest.mark.parametrize("name,content", [
    ("config.json", "{ not json"),
    ("config.json", "[1, 2]"),
    ("config.json", '{"openweathermap_api_key": 42, "weatherapi_api_key": "x"}'),
    ("config.yaml", "key: [unclosed"),
    ("config.yml", "- just\n- a list\n"),
])
def test_malformed_file(tmp_path, name, content):
    path = tmp_path / name
    path.write_text(content)

    with pytest.raises(ConfigError) as exc_info:
        load_credentials(path)

    assert exc_info.value.code == ErrorCode.CONFIG_INVALID
    assert exc_info.value.details["file_path"] == str(path)

def test_config_not_utf8(tmp_path):
    """Undecodable bytes are a configuration error, not a crash."""
    path = tmp_path / "config.json"
    path.write_bytes(b'{"openweathermap_api_key": "\xff"}')

    with pytest.raises(ConfigError) as exc_info:
        load_credentials(path)

    assert exc_info.value.code == ErrorCode.CONFIG_INVALID
    assert "Malformed configuration file" in exc_info.value.message

def test_home_directory_expanded(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("CITYWEATHER_CACHE_FILE", "~/weather.json")

    assert Path(load_app_config().cache_file) == tmp_path / "weather.json"

def test_directory_instead_of_file(tmp_path):
    with pytest.raises(ConfigError) as exc_info:
        load_credentials(tmp_path)

    assert exc_info.value.code == ErrorCode.CONFIG_INVALID

def test_app_config_defaults():
    config = load_app_config()

    assert config.config_file == "config.json"
    assert config.cache_file == "cache.json"
    assert config.cache_ttl == DEFAULT_CACHE_TTL == timedelta(minutes=10)
    assert config.request_timeout == 10.0
    assert config.log_level == "WARNING"
    assert config.log_file is None

def test_app_config_from_env(monkeypatch):
    """Test runtime settings from environment variables."""
    monkeypatch.setenv("CITYWEATHER_CONFIG_FILE", "conf/keys.yaml")
    monkeypatch.setenv("CITYWEATHER_CACHE_FILE", "/var/tmp/weather.json")
    monkeypatch.setenv("CITYWEATHER_CACHE_TTL", "30")
    monkeypatch.setenv("CITYWEATHER_REQUEST_TIMEOUT", "2.5")
    monkeypatch.setenv("CITYWEATHER_LOG_LEVEL", "debug")
    monkeypatch.setenv("CITYWEATHER_LOG_FILE", "logs/cityweather.log")

    config = load_app_config()

    assert Path(config.config_file) == Path("conf/keys.yaml")
    assert Path(config.cache_file) == Path("/var/tmp/weather.json")
    assert config.cache_ttl == timedelta(seconds=30)
    assert config.request_timeout == 2.5
    assert config.log_level == "DEBUG"
    assert Path(config.log_file) == Path("logs/cityweather.log")

def test_empty_env_values_ignored(monkeypatch):
    monkeypatch.setenv("CITYWEATHER_CACHE_TTL", "")

    assert load_app_config().cache_ttl == DEFAULT_CACHE_TTL

@pytest.mark.parametrize("name,value", [
    ("CITYWEATHER_CACHE_TTL", "ten"),
    ("CITYWEATHER_CACHE_TTL", "0"),
    ("CITYWEATHER_REQUEST_TIMEOUT", "-1"),
])
def test_invalid_numbers(monkeypatch, name, value):
    monkeypatch.setenv(name, value)

    with pytest.raises(ConfigError, match="Invalid"):
        load_app_config()

@pytest.mark.parametrize("key,expected", [
    ("abc123", []),
    ("", ["owm API key is not configured"]),
    (None, ["owm API key is not configured"]),
    ("   ", ["owm API key is blank"]),
    (" abc123\n", ["owm API key has surrounding whitespace"]),
])
def test_validate_api_key(key, expected):
    assert validate_api_key(key, "owm") == expected
