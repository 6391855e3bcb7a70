"""Tests for report formatting."""

from cityweather.services.weather_formatter import WeatherFormatter
from cityweather.services.weather_types import WeatherReading
from cityweather.services.weather_types import WeatherReport


def test_format_temperature():
    assert WeatherFormatter.format_temperature(15) == "15.00°C"
    assert WeatherFormatter.format_temperature(-3.456) == "-3.46°C"

def test_format_cached():
    """Test the cache hit layout."""
    reading = WeatherReading("London", 12.5, 81, "light rain", "cache")
    report = WeatherReport("London", 12.5, reading, from_cache=True)

    assert WeatherFormatter.format_report(report) == (
        "Weather in London (from cache):\n"
        "Temperature: 12.50°C\n"
        "Humidity: 81%\n"
        "Description: light rain"
    )

def test_format_average():
    """Test the fresh fetch layout."""
    reading = WeatherReading("London", 10.0, 81, "light rain", "openweathermap")
    report = WeatherReport("London", 15.0, reading, sample_count=2)

    assert WeatherFormatter.format_report(report) == (
        "Average Temperature in London:\n"
        "Temperature: 15.00°C"
    )

def test_display_name_from_provider():
    """The location name reported by the provider is shown, not the input."""
    reading = WeatherReading("Paris", 18.0, 50, "clear sky")
    report = WeatherReport("paris", 18.0, reading)

    assert WeatherFormatter.format_report(report).startswith("Average Temperature in Paris:")

def test_display_name_falls_back_to_city():
    reading = WeatherReading("", 18.0, 50, "clear sky")
    report = WeatherReport("Paris", 18.0, reading, from_cache=True)

    assert WeatherFormatter.format_report(report).startswith("Weather in Paris (from cache):")
