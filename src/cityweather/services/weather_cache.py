"""File-backed cache of the last known reading per city.

The cache holds one timestamp for the whole file: storing any city marks
every cached city as freshly refreshed. Freshness is therefore decided for
the cache as a whole, never per city.
"""

import json
import os
import re
import tempfile
from contextlib import suppress
from dataclasses import dataclass
from dataclasses import field
from datetime import UTC
from datetime import datetime
from datetime import timedelta
from pathlib import Path
from typing import Any

from cityweather.config.types import DEFAULT_CACHE_TTL
from cityweather.exceptions import CacheError
from cityweather.exceptions import CacheWriteError
from cityweather.services.weather_types import WeatherReading
from cityweather.utils.logging_utils import EnhancedLoggerMixin


# RFC 3339 producers may write nanoseconds; datetime stops at microseconds
_EXCESS_FRACTION = re.compile(r'(\.\d{6})\d+')

@dataclass
class Cache:
    """Cached readings keyed by city name as typed by the user."""
    entries: dict[str, WeatherReading] = field(default_factory=dict)
    last_refreshed: datetime | None = None

    def __len__(self) -> int:
        return len(self.entries)

    def store(self, city: str, reading: WeatherReading, now: datetime) -> None:
        """Insert or overwrite one city and bump the global timestamp."""
        self.entries[city] = reading
        self.last_refreshed = now

    def to_dict(self) -> dict[str, Any]:
        """Convert to the cache file layout."""
        return {
            'data': {city: reading.to_dict() for city, reading in self.entries.items()},
            'timestamp': format_timestamp(self.last_refreshed)
        }

    @classmethod
    def from_dict(cls, data: Any) -> 'Cache':
        """Create a cache from the cache file layout.

        Raises:
            ValueError: If the data does not have the expected shape
        """
        if not isinstance(data, dict):
            raise ValueError(f"expected an object, got {type(data).__name__}")

        raw_entries = data.get('data') or {}
        if not isinstance(raw_entries, dict):
            raise ValueError(f"'data' must be an object, got {type(raw_entries).__name__}")

        entries = {}
        for city, raw in raw_entries.items():
            try:
                entries[city] = WeatherReading.from_dict(raw)
            except ValueError as e:
                raise ValueError(f"entry {city!r}: {e}") from e

        return cls(entries=entries, last_refreshed=parse_timestamp(data.get('timestamp')))

def format_timestamp(value: datetime | None) -> str | None:
    """Format a timestamp as RFC 3339 in local time with its UTC offset."""
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone().isoformat()

def parse_timestamp(value: Any) -> datetime | None:
    """Parse an RFC 3339 timestamp into an aware datetime.

    Naive timestamps are taken as UTC. ``None`` means never refreshed.

    Raises:
        ValueError: If the value is not a valid timestamp
    """
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValueError(f"timestamp must be a string, got {type(value).__name__}")

    text = value.strip()
    if text[-1:] in ('Z', 'z'):
        text = text[:-1] + '+00:00'
    text = _EXCESS_FRACTION.sub(r'\1', text)

    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        raise ValueError(f"invalid timestamp {value!r}") from None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed

def load(path: str | Path) -> Cache:
    """Load the cache file.

    Args:
        path: Cache file path

    Returns:
        The loaded cache, or an empty cache if the file does not exist

    Raises:
        CacheError: If the file exists but cannot be read or parsed
    """
    path = Path(path)
    try:
        text = path.read_text(encoding='utf-8')
    except FileNotFoundError:
        return Cache()
    except (OSError, UnicodeDecodeError) as e:
        raise CacheError(f"Cannot read cache file: {e}", str(path)) from e

    try:
        return Cache.from_dict(json.loads(text))
    except ValueError as e:
        # json.JSONDecodeError is a ValueError as well
        raise CacheError(f"Malformed cache file: {e}", str(path)) from e

def is_fresh(cache: Cache, now: datetime, ttl: timedelta = DEFAULT_CACHE_TTL) -> bool:
    """Whether the whole cache was refreshed less than ``ttl`` ago."""
    if cache.last_refreshed is None:
        return False
    return now - cache.last_refreshed < ttl

def lookup(cache: Cache, city: str) -> WeatherReading | None:
    """Get the cached reading for a city, matched case-sensitively."""
    return cache.entries.get(city)

def save(path: str | Path, cache: Cache) -> None:
    """Write the whole cache, replacing the file atomically.

    Args:
        path: Cache file path
        cache: Cache to persist

    Raises:
        CacheWriteError: If the file cannot be written
    """
    path = Path(path)
    tmp_name = None
    try:
        payload = json.dumps(cache.to_dict(), indent=2, ensure_ascii=False)
        path.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            'w',
            encoding='utf-8',
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix='.tmp',
            delete=False
        ) as tmp:
            tmp_name = tmp.name
            tmp.write(payload)
            tmp.flush()
            os.fsync(tmp.fileno())
        os.chmod(tmp_name, 0o644)
        os.replace(tmp_name, path)
        tmp_name = None
    except (OSError, TypeError, ValueError) as e:
        raise CacheWriteError(f"Cannot write cache file: {e}", str(path)) from e
    finally:
        if tmp_name is not None:
            with suppress(OSError):
                os.unlink(tmp_name)

class WeatherCacheStore(EnhancedLoggerMixin):
    """Cache store bound to one file and TTL."""

    def __init__(self, path: str | Path, ttl: timedelta = DEFAULT_CACHE_TTL):
        """Initialize cache store.

        Args:
            path: Cache file path
            ttl: Time-to-live applied to the whole cache
        """
        super().__init__()
        self.path = Path(path)
        self.ttl = ttl
        self.set_log_context(component="weather_cache")

    def load(self) -> Cache:
        """Load the cache file, see :func:`load`."""
        cache = load(self.path)
        self.debug(
            "Loaded weather cache",
            path=str(self.path),
            entries=len(cache),
            last_refreshed=format_timestamp(cache.last_refreshed)
        )
        return cache

    def is_fresh(self, cache: Cache, now: datetime) -> bool:
        """Check the cache against this store's TTL."""
        return is_fresh(cache, now, self.ttl)

    def lookup(self, cache: Cache, city: str) -> WeatherReading | None:
        """Get the cached reading for a city."""
        return lookup(cache, city)

    def save(self, cache: Cache) -> None:
        """Persist the cache, see :func:`save`."""
        save(self.path, cache)
        self.debug("Saved weather cache", path=str(self.path), entries=len(cache))
