"""WeatherAPI.com provider implementation."""

from typing import Any

from cityweather.services.base_service import WeatherProvider
from cityweather.services.weather_types import WeatherReading


class WeatherApiProvider(WeatherProvider):
    """WeatherAPI.com realtime API.

    Response shape used::

        {"location": {"name": "London"},
         "current": {"temp_c": 12.0, "humidity": 82,
                     "condition": {"text": "Light rain"}}}
    """

    service_type: str = "weatherapi"
    base_url: str = "https://api.weatherapi.com/v1/current.json"

    def build_params(self, city: str) -> dict[str, str]:
        return {
            'key': self.api_key,
            'q': city,
            'aqi': 'no'
        }

    def _parse_response(self, data: dict[str, Any]) -> WeatherReading:
        current = data['current']
        condition = current.get('condition') or {}
        return WeatherReading(
            location=(data.get('location') or {}).get('name') or '',
            temperature_celsius=current['temp_c'],
            humidity_percent=current['humidity'],
            description=condition.get('text', ''),
            source=self.service_type
        )
