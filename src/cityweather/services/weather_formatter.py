"""Text rendering of weather reports for the terminal."""

from cityweather.services.weather_types import WeatherReport


class WeatherFormatter:
    """Centralized weather formatting service."""

    @staticmethod
    def format_temperature(value: float) -> str:
        return f"{value:.2f}°C"

    @classmethod
    def format_cached(cls, report: WeatherReport) -> str:
        """Format a reading served from the cache."""
        reading = report.reading
        return "\n".join([
            f"Weather in {report.display_name} (from cache):",
            f"Temperature: {cls.format_temperature(reading.temperature_celsius)}",
            f"Humidity: {reading.humidity_percent}%",
            f"Description: {reading.description}",
        ])

    @classmethod
    def format_average(cls, report: WeatherReport) -> str:
        """Format the averaged result of a fresh fetch."""
        return "\n".join([
            f"Average Temperature in {report.display_name}:",
            f"Temperature: {cls.format_temperature(report.temperature_celsius)}",
        ])

    @classmethod
    def format_report(cls, report: WeatherReport) -> str:
        """Format a report for display.

        Args:
            report: Cached or freshly averaged report

        Returns:
            Multi-line text without a trailing newline
        """
        if report.from_cache:
            return cls.format_cached(report)
        return cls.format_average(report)
