"""OpenWeatherMap provider implementation."""

from typing import Any

from cityweather.services.base_service import WeatherProvider
from cityweather.services.weather_types import WeatherReading


class OpenWeatherProvider(WeatherProvider):
    """OpenWeatherMap current weather API.

    Response shape used::

        {"name": "London",
         "main": {"temp": 12.3, "humidity": 81},
         "weather": [{"description": "light rain"}]}
    """

    service_type: str = "openweathermap"
    base_url: str = "https://api.openweathermap.org/data/2.5/weather"

    def build_params(self, city: str) -> dict[str, str]:
        return {
            'q': city,
            'appid': self.api_key,
            'units': 'metric'
        }

    def _parse_response(self, data: dict[str, Any]) -> WeatherReading:
        weather = data.get('weather') or []
        return WeatherReading(
            location=data.get('name') or '',
            temperature_celsius=data['main']['temp'],
            humidity_percent=data['main']['humidity'],
            description=weather[0].get('description', '') if weather else '',
            source=self.service_type
        )
