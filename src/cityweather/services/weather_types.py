"""Weather data types shared by providers, cache and formatter."""

from dataclasses import dataclass
from dataclasses import field
from typing import Any


@dataclass(frozen=True)
class WeatherReading:
    """Current conditions for one location as reported by one source.

    ``source`` records where the reading came from (provider name or
    ``"cache"``) and does not take part in equality.
    """
    location: str
    temperature_celsius: float
    humidity_percent: int
    description: str
    source: str = field(default="", compare=False)

    def __post_init__(self) -> None:
        """Validate and normalise field types."""
        if isinstance(self.temperature_celsius, bool) or not isinstance(self.temperature_celsius, (int, float)):
            raise ValueError(f"temperature_celsius must be a number, got {self.temperature_celsius!r}")
        if isinstance(self.humidity_percent, bool) or not isinstance(self.humidity_percent, (int, float)):
            raise ValueError(f"humidity_percent must be a number, got {self.humidity_percent!r}")
        if not isinstance(self.location, str):
            raise ValueError("location must be a string")
        if not isinstance(self.description, str):
            raise ValueError("description must be a string")

        # Frozen dataclass: normalise through object.__setattr__
        object.__setattr__(self, 'temperature_celsius', float(self.temperature_celsius))
        object.__setattr__(self, 'humidity_percent', int(round(self.humidity_percent)))

    def to_dict(self) -> dict[str, Any]:
        """Convert to the cache file's reading layout."""
        return {
            'main': {
                'temp': self.temperature_celsius,
                'humidity': self.humidity_percent
            },
            'weather': [{'description': self.description}],
            'name': self.location
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any], source: str = "cache") -> 'WeatherReading':
        """Create a reading from the cache file's reading layout.

        Args:
            data: Dictionary with ``main``, ``weather`` and ``name`` keys
            source: Provenance to record on the reading

        Returns:
            WeatherReading object

        Raises:
            ValueError: If the dictionary does not have the expected shape
        """
        try:
            main = data['main']
            weather = data.get('weather') or []
            description = weather[0].get('description', '') if weather else ''
            return cls(
                location=data.get('name') or '',
                temperature_celsius=main['temp'],
                humidity_percent=main.get('humidity', 0),
                description=description,
                source=source
            )
        except (KeyError, TypeError, AttributeError, IndexError) as e:
            raise ValueError(f"Invalid weather reading: {e!r}") from e

@dataclass(frozen=True)
class WeatherReport:
    """What gets shown to the user for one city."""
    city: str
    temperature_celsius: float
    reading: WeatherReading
    from_cache: bool = False
    sample_count: int = 1

    @property
    def display_name(self) -> str:
        """Location name reported by the source, or the city as typed."""
        return self.reading.location or self.city
