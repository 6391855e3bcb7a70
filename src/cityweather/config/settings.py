"""Configuration loading for the city weather client."""

import json
import logging
from datetime import timedelta
from pathlib import Path
from typing import Any

import yaml

from cityweather.config.env import EnvConfig
from cityweather.config.types import AppConfig
from cityweather.config.types import Credentials
from cityweather.config.utils import parse_positive_number
from cityweather.config.utils import resolve_path
from cityweather.config.utils import validate_api_key
from cityweather.error_codes import ErrorCode
from cityweather.exceptions import ConfigError


logger = logging.getLogger(__name__)

CREDENTIAL_KEYS = ('openweathermap_api_key', 'weatherapi_api_key')

def load_app_config() -> AppConfig:
    """Build runtime settings from defaults and environment variables.

    Returns:
        AppConfig instance

    Raises:
        ConfigError: If a numeric setting is invalid
    """
    settings = EnvConfig.get_app_settings()
    config = AppConfig()

    try:
        if 'cache_ttl' in settings:
            config.cache_ttl = timedelta(
                seconds=parse_positive_number(settings['cache_ttl'], 'cache TTL')
            )
        if 'request_timeout' in settings:
            config.request_timeout = parse_positive_number(
                settings['request_timeout'], 'request timeout'
            )
    except ValueError as e:
        raise ConfigError(str(e)) from e

    config.config_file = str(resolve_path(settings.get('config_file', config.config_file)))
    config.cache_file = str(resolve_path(settings.get('cache_file', config.cache_file)))
    config.log_level = settings.get('log_level', config.log_level).upper()
    if 'log_file' in settings:
        config.log_file = str(resolve_path(settings['log_file']))

    return config

def _read_config_file(path: Path) -> Any:
    """Parse a JSON or YAML configuration file."""
    with open(path, encoding="utf-8") as f:
        if path.suffix.lower() in ('.yaml', '.yml'):
            return yaml.safe_load(f)
        return json.load(f)

def load_credentials(config_file: str | Path) -> Credentials:
    """Load provider API keys from the configuration file.

    Environment variables override values from the file. A key missing from
    both is loaded as an empty string; the provider using it will fail and be
    skipped at fetch time.

    Args:
        config_file: Path to ``config.json`` (or a YAML equivalent)

    Returns:
        Credentials instance

    Raises:
        ConfigError: If the file is missing, unreadable or malformed
    """
    path = resolve_path(config_file)

    try:
        loaded = _read_config_file(path)
    except FileNotFoundError:
        raise ConfigError(
            f"Configuration file not found: {path}",
            ErrorCode.CONFIG_MISSING,
            {"file_path": str(path)}
        ) from None
    except OSError as e:
        raise ConfigError(
            f"Cannot read configuration file {path}: {e.strerror or e}",
            details={"file_path": str(path)}
        ) from e
    except (json.JSONDecodeError, yaml.YAMLError, UnicodeDecodeError) as e:
        raise ConfigError(
            f"Malformed configuration file {path}: {e}",
            details={"file_path": str(path)}
        ) from e

    if not isinstance(loaded, dict):
        raise ConfigError(
            f"Configuration file {path} must contain an object",
            details={"file_path": str(path), "type": type(loaded).__name__}
        )

    values: dict[str, Any] = {key: loaded.get(key) or '' for key in CREDENTIAL_KEYS}
    EnvConfig.update_credentials_from_env(values)

    for key in CREDENTIAL_KEYS:
        if not isinstance(values[key], str):
            raise ConfigError(
                f"Invalid value for {key} in {path}: expected a string",
                details={"file_path": str(path), "key": key}
            )
        for problem in validate_api_key(values[key], key.removesuffix('_api_key')):
            logger.warning(problem)

    return Credentials(**values)
