from __future__ import annotations

from typing import Optional

MIN_CITY_NAME_LENGTH = 2

ERROR_EMPTY_CITY = "Please enter a city name"
ERROR_MIN_LENGTH = f"City name must be at least {MIN_CITY_NAME_LENGTH} characters"
ERROR_INVALID_CHARS = "City name can only contain letters and spaces"


def validate_city_input(city: str) -> Optional[str]:
    """Return a message describing why `city` can't be searched, or None."""
    trimmed = city.strip()

    if not trimmed:
        return ERROR_EMPTY_CITY
    if len(trimmed) < MIN_CITY_NAME_LENGTH:
        return ERROR_MIN_LENGTH
    if not all(ch.isalpha() or ch.isspace() for ch in trimmed):
        return ERROR_INVALID_CHARS
    return None
