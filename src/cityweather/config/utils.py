"""Configuration utility functions."""

from pathlib import Path


def resolve_path(path: str | Path) -> Path:
    """Resolve a user-supplied path, expanding ``~``.

    Relative paths stay relative to the working directory.

    Args:
        path: Path to resolve

    Returns:
        Resolved Path object
    """
    if isinstance(path, str):
        path = Path(path)
    return path.expanduser()

def validate_api_key(key: str | None, service: str) -> list[str]:
    """Check an API key for obvious problems.

    Args:
        key: API key to validate
        service: Service name for messages

    Returns:
        List of problems found, empty when the key looks usable
    """
    problems = []
    if not key:
        problems.append(f"{service} API key is not configured")
    elif not key.strip():
        problems.append(f"{service} API key is blank")
    elif key != key.strip():
        problems.append(f"{service} API key has surrounding whitespace")
    return problems

def parse_positive_number(value: str, name: str) -> float:
    """Parse a strictly positive number from a settings string.

    Args:
        value: Raw string value
        name: Setting name for error messages

    Returns:
        Parsed number

    Raises:
        ValueError: If the value is not a positive number
    """
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid {name}: {value!r} is not a number") from None
    if number <= 0:
        raise ValueError(f"Invalid {name}: must be positive, got {value!r}")
    return number
