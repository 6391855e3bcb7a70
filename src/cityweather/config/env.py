"""Environment variable handling for configuration."""

import os
from typing import Any


class EnvConfig:
    """Environment variable configuration."""

    # Mapping of environment variables to AppConfig fields
    ENV_MAPPING = {
        'CITYWEATHER_CONFIG_FILE': 'config_file',
        'CITYWEATHER_CACHE_FILE': 'cache_file',
        'CITYWEATHER_CACHE_TTL': 'cache_ttl',
        'CITYWEATHER_REQUEST_TIMEOUT': 'request_timeout',
        'CITYWEATHER_LOG_LEVEL': 'log_level',
        'CITYWEATHER_LOG_FILE': 'log_file',
    }

    # Mapping of environment variables to credential keys
    CREDENTIAL_MAPPING = {
        'CITYWEATHER_OPENWEATHERMAP_API_KEY': 'openweathermap_api_key',
        'CITYWEATHER_WEATHERAPI_API_KEY': 'weatherapi_api_key',
    }

    @staticmethod
    def get_env_value(env_var: str, default: Any | None = None) -> Any | None:
        """Get value from environment variable with default."""
        return os.getenv(env_var, default)

    @classmethod
    def get_app_settings(cls) -> dict[str, str]:
        """Get raw runtime settings present in the environment.

        Returns:
            Mapping of AppConfig field name to the unparsed string value
        """
        settings = {}
        for env_var, name in cls.ENV_MAPPING.items():
            value = cls.get_env_value(env_var)
            if value is not None and value != '':
                settings[name] = value
        return settings

    @classmethod
    def update_credentials_from_env(cls, credentials: dict[str, Any]) -> None:
        """Override credential values with environment variables.

        Args:
            credentials: Credentials dictionary to update in place
        """
        for env_var, key in cls.CREDENTIAL_MAPPING.items():
            value = cls.get_env_value(env_var)
            if value:
                credentials[key] = value
