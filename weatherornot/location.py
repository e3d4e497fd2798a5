"""Location string classification.

Turns a free-form location string into one of three query shapes that map
directly onto the OpenWeatherMap lookup endpoints:

1. Coordinates ("40.7128,-74.0060")
2. Postal codes ("90210", "10001,US", "SW1A 1AA,GB")
3. City names ("London", "San Francisco,CA", "New York,NY,US")

Rules are tried in that order and the first match wins.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Union


class LocationParseError(ValueError):
    """Raised when a location string cannot be classified."""


class EmptyInputError(LocationParseError):
    """Raised when the location string is empty after trimming."""


@dataclass(frozen=True)
class Coordinates:
    """A latitude/longitude pair in decimal degrees.

    Attributes:
        latitude: Decimal latitude in [-90, 90].
        longitude: Decimal longitude in [-180, 180].
    """

    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        if not -90 <= self.latitude <= 90:
            raise ValueError(f"Latitude out of range: {self.latitude}")
        if not -180 <= self.longitude <= 180:
            raise ValueError(f"Longitude out of range: {self.longitude}")

    def __str__(self) -> str:
        return f"Coordinates: {self.latitude:.4f}, {self.longitude:.4f}"


@dataclass(frozen=True)
class PostalCode:
    """A ZIP or postal code with its 2-letter country code.

    Attributes:
        code: The postal code as entered (e.g., "90210", "SW1A 1AA").
        country_code: Uppercase ISO 3166-1 alpha-2 code, "US" by default.
    """

    code: str
    country_code: str = "US"

    def __post_init__(self) -> None:
        if not self.code:
            raise ValueError("Postal code cannot be empty")
        cc = self.country_code
        if len(cc) != 2 or not (cc.isascii() and cc.isalpha() and cc.isupper()):
            raise ValueError(f"Invalid country code: {self.country_code!r}")

    def __str__(self) -> str:
        return f"ZIP: {self.code}, {self.country_code}"


@dataclass(frozen=True)
class CityName:
    """A city with optional state and country qualifiers.

    Attributes:
        city: City name (e.g., "San Francisco").
        state: State or region as entered, if given.
        country: Uppercase country code, if given.
    """

    city: str
    state: str | None = None
    country: str | None = None

    def __post_init__(self) -> None:
        if not self.city.strip():
            raise ValueError("City name cannot be empty")

    def __str__(self) -> str:
        parts = [p for p in (self.city, self.state, self.country) if p]
        return "City: " + ", ".join(parts)


LocationQuery = Union[Coordinates, PostalCode, CityName]


_COORDS_RE = re.compile(r"^(-?\d+\.?\d*)\s*,\s*(-?\d+\.?\d*)$", re.ASCII)
_US_ZIP_RE = re.compile(r"^(\d{5})(?:-\d{4})?$", re.ASCII)
_ZIP_WITH_COUNTRY_RE = re.compile(
    r"^([A-Z0-9]+(?:[\s-][A-Z0-9]+)?),\s*([A-Z]{2})$", re.ASCII | re.IGNORECASE
)
_DIGIT_RE = re.compile(r"\d", re.ASCII)


def _parse_coordinates(text: str) -> Coordinates | None:
    match = _COORDS_RE.match(text)
    if match is None:
        return None

    lat = float(match.group(1))
    lon = float(match.group(2))
    if not (math.isfinite(lat) and math.isfinite(lon)):
        return None
    # Out-of-range pairs fall through to the remaining rules
    if not (-90 <= lat <= 90 and -180 <= lon <= 180):
        return None
    return Coordinates(latitude=lat, longitude=lon)


def _parse_postal_code(text: str) -> PostalCode | None:
    match = _US_ZIP_RE.match(text)
    if match is not None:
        return PostalCode(code=match.group(1), country_code="US")

    match = _ZIP_WITH_COUNTRY_RE.match(text)
    if match is None:
        return None

    # Purely alphabetic tokens ("Paris,FR") are city names, not postal codes
    if not _DIGIT_RE.search(match.group(1)):
        return None

    return PostalCode(code=match.group(1), country_code=match.group(2).upper())


def _parse_city(text: str) -> CityName:
    parts = [p.strip() for p in text.split(",")]
    city = parts[0]
    if not city:
        raise EmptyInputError(
            f"Location {text!r} has no city name before the first comma."
        )

    if len(parts) == 2:
        return CityName(city=city, state=parts[1] or None)
    if len(parts) == 3:
        return CityName(
            city=city,
            state=parts[1] or None,
            country=parts[2].upper() or None,
        )
    return CityName(city=city)


def parse_location(text: str) -> LocationQuery:
    """Classify a raw location string.

    Args:
        text: User-provided location (ZIP, "City,State,CC", or "lat,lon").

    Returns:
        A Coordinates, PostalCode, or CityName value.

    Raises:
        EmptyInputError: If the input is blank, or has no city name
            where one is required.
    """
    text = text.strip()
    if not text:
        raise EmptyInputError("Location input cannot be empty.")

    coords = _parse_coordinates(text)
    if coords is not None:
        return coords

    postal = _parse_postal_code(text)
    if postal is not None:
        return postal

    return _parse_city(text)
