"""OpenWeatherMap API client for current conditions and forecasts.

Every lookup is a two-step flow:
1. /weather (by ZIP, city name, or coordinates) -> current conditions and
   the resolved coordinates of the location
2. /forecast?lat=..&lon=.. -> 3-hour steps for the next five days

The 3-hour steps are kept as the "hourly" series and also rolled up into
per-day highs and lows.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, timezone

import httpx

from weatherornot import config
from weatherornot.location import CityName, Coordinates, LocationQuery, PostalCode

logger = logging.getLogger(__name__)


class OWMAPIError(Exception):
    """Raised when OpenWeatherMap returns an error or unexpected response."""


class OWMAuthError(OWMAPIError):
    """Raised when the API key is missing, invalid, or not yet activated."""


class OWMLocationNotFoundError(OWMAPIError):
    """Raised when OpenWeatherMap has no match for the requested location."""


@dataclass(frozen=True)
class Location:
    """The place OpenWeatherMap resolved the query to.

    Attributes:
        name: City name reported by the API.
        country: 2-letter country code.
        latitude: Decimal latitude.
        longitude: Decimal longitude.
        timezone: UTC offset label, e.g. "UTC-5".
    """

    name: str
    country: str
    latitude: float
    longitude: float
    timezone: str = "UTC+0"


@dataclass(frozen=True)
class CurrentWeather:
    """Current observed conditions.

    Attributes:
        temperature: Air temperature in the requested units.
        feels_like: Apparent temperature.
        humidity: Relative humidity in percent.
        pressure: Sea-level pressure in hPa.
        wind_speed: Wind speed (mph for imperial, m/s otherwise).
        wind_degree: Wind direction in degrees.
        visibility: Visibility in meters.
        cloud_cover: Cloudiness in percent.
        condition: Description, e.g. "light rain".
        condition_code: OpenWeatherMap condition id (2xx-8xx).
        icon: OpenWeatherMap icon id, e.g. "10d".
        sunrise: Local sunrise time.
        sunset: Local sunset time.
        time: Local observation time.
    """

    temperature: float
    feels_like: float
    humidity: int
    pressure: int
    wind_speed: float
    wind_degree: int
    visibility: int
    cloud_cover: int
    condition: str
    condition_code: int
    icon: str
    sunrise: datetime
    sunset: datetime
    time: datetime

    @property
    def is_night(self) -> bool:
        return not (self.sunrise <= self.time < self.sunset)


@dataclass(frozen=True)
class HourlyForecast:
    """A single 3-hour forecast step."""

    time: datetime
    temperature: float
    feels_like: float
    humidity: int
    wind_speed: float
    condition: str
    condition_code: int
    icon: str
    precip_chance: int


@dataclass(frozen=True)
class DailyForecast:
    """A day's forecast aggregated from its 3-hour steps."""

    date: date
    temp_max: float
    temp_min: float
    humidity: int
    wind_speed: float
    condition: str
    condition_code: int
    icon: str
    precip_chance: int


@dataclass(frozen=True)
class WeatherData:
    """Complete weather response for one location.

    Attributes:
        location: The resolved location.
        current: Current conditions.
        hourly: Up to OWM_HOURLY_LIMIT 3-hour steps.
        daily: Up to OWM_DAILY_LIMIT days, in date order.
    """

    location: Location
    current: CurrentWeather
    hourly: list[HourlyForecast] = field(default_factory=list)
    daily: list[DailyForecast] = field(default_factory=list)


def _create_client() -> httpx.Client:
    """Create an httpx client configured for the OpenWeatherMap API."""
    return httpx.Client(
        base_url=config.OWM_API_BASE_URL,
        headers={"Accept": "application/json"},
        timeout=config.OWM_REQUEST_TIMEOUT,
    )


def _request_with_retry(
    client: httpx.Client, path: str, params: dict, max_retries: int = 1
) -> dict:
    """Make a GET request with simple retry logic for server errors.

    Args:
        client: The httpx client to use.
        path: Path relative to the API base URL.
        params: Query parameters, including appid and units.
        max_retries: Number of retries for 5xx errors.

    Returns:
        Parsed JSON response as a dict.

    Raises:
        OWMAuthError: On 401 responses.
        OWMLocationNotFoundError: On 404 responses.
        OWMAPIError: On other HTTP errors, timeouts, or invalid JSON.
    """
    last_error = None
    for attempt in range(max_retries + 1):
        try:
            response = client.get(path, params=params)
        except httpx.TimeoutException:
            raise OWMAPIError("Request to OpenWeatherMap timed out. Please try again.")
        except httpx.HTTPError as exc:
            raise OWMAPIError(f"HTTP error communicating with OpenWeatherMap: {exc}")

        logger.debug("GET %s -> HTTP %d", path, response.status_code)

        if response.status_code == 401:
            raise OWMAuthError(
                "OpenWeatherMap rejected the API key. "
                "Check api_key with 'weatherornot config show'."
            )

        if response.status_code == 404:
            raise OWMLocationNotFoundError(
                "OpenWeatherMap could not find that location. "
                "Try adding a state or country code."
            )

        if response.status_code >= 500:
            last_error = OWMAPIError(
                f"OpenWeatherMap server error (HTTP {response.status_code}). "
                "The service may be temporarily unavailable."
            )
            if attempt < max_retries:
                time.sleep(config.OWM_RETRY_DELAY)
                continue
            raise last_error

        if response.status_code != 200:
            raise OWMAPIError(
                f"Unexpected response from OpenWeatherMap (HTTP {response.status_code})."
            )

        try:
            return response.json()
        except ValueError:
            raise OWMAPIError("Received invalid JSON from OpenWeatherMap.")

    raise last_error  # pragma: no cover


def _tz_from_offset(seconds: int) -> timezone:
    return timezone(timedelta(seconds=seconds))


def _offset_label(seconds: int) -> str:
    """Format a UTC offset in seconds as "UTC-5" or "UTC+5:30"."""
    sign = "-" if seconds < 0 else "+"
    hours, rem = divmod(abs(seconds), 3600)
    minutes = rem // 60
    if minutes:
        return f"UTC{sign}{hours}:{minutes:02d}"
    return f"UTC{sign}{hours}"


def _first_condition(item: dict) -> tuple[str, int, str]:
    """Return (description, id, icon) of the first weather entry, if any."""
    weather = item.get("weather") or []
    if not weather:
        return "", 0, ""
    w = weather[0]
    return w.get("description", ""), w.get("id", 0), w.get("icon", "")


def _parse_current(data: dict) -> tuple[Location, CurrentWeather]:
    """Parse a /weather response into its location and current conditions."""
    try:
        coord = data["coord"]
        main = data["main"]
        offset = data.get("timezone", 0)
        tz = _tz_from_offset(offset)
        sys_ = data.get("sys", {})
        wind = data.get("wind", {})

        location = Location(
            name=data.get("name", ""),
            country=sys_.get("country", ""),
            latitude=coord["lat"],
            longitude=coord["lon"],
            timezone=_offset_label(offset),
        )

        condition, code, icon = _first_condition(data)
        current = CurrentWeather(
            temperature=main.get("temp", 0.0),
            feels_like=main.get("feels_like", 0.0),
            humidity=main.get("humidity", 0),
            pressure=main.get("pressure", 0),
            wind_speed=wind.get("speed", 0.0),
            wind_degree=wind.get("deg", 0),
            visibility=data.get("visibility", 0),
            cloud_cover=data.get("clouds", {}).get("all", 0),
            condition=condition,
            condition_code=code,
            icon=icon,
            sunrise=datetime.fromtimestamp(sys_.get("sunrise", 0), tz),
            sunset=datetime.fromtimestamp(sys_.get("sunset", 0), tz),
            time=datetime.fromtimestamp(data.get("dt", 0), tz),
        )
    except (KeyError, TypeError):
        raise OWMAPIError("Unexpected current weather response format from OpenWeatherMap.")
    return location, current


def _parse_forecast(
    data: dict, tz: timezone
) -> tuple[list[HourlyForecast], list[DailyForecast]]:
    """Parse a /forecast response into hourly steps and daily roll-ups."""
    try:
        items = data["list"]
    except (KeyError, TypeError):
        raise OWMAPIError("Unexpected forecast response format from OpenWeatherMap.")

    city_offset = data.get("city", {}).get("timezone")
    if city_offset is not None:
        tz = _tz_from_offset(city_offset)

    hourly = []
    days: dict[date, dict] = {}
    for item in items:
        main = item.get("main", {})
        wind = item.get("wind", {})
        when = datetime.fromtimestamp(item.get("dt", 0), tz)
        condition, code, icon = _first_condition(item)
        precip = int(item.get("pop", 0) * 100)

        if len(hourly) < config.OWM_HOURLY_LIMIT:
            hourly.append(
                HourlyForecast(
                    time=when,
                    temperature=main.get("temp", 0.0),
                    feels_like=main.get("feels_like", 0.0),
                    humidity=main.get("humidity", 0),
                    wind_speed=wind.get("speed", 0.0),
                    condition=condition,
                    condition_code=code,
                    icon=icon,
                    precip_chance=precip,
                )
            )

        day = days.get(when.date())
        if day is None:
            days[when.date()] = {
                "date": when.date(),
                "temp_max": main.get("temp_max", 0.0),
                "temp_min": main.get("temp_min", 0.0),
                "humidity": main.get("humidity", 0),
                "wind_speed": wind.get("speed", 0.0),
                "condition": condition,
                "condition_code": code,
                "icon": icon,
                "precip_chance": precip,
            }
        else:
            day["temp_max"] = max(day["temp_max"], main.get("temp_max", day["temp_max"]))
            day["temp_min"] = min(day["temp_min"], main.get("temp_min", day["temp_min"]))
            day["precip_chance"] = max(day["precip_chance"], precip)

    daily = [DailyForecast(**days[d]) for d in sorted(days)]
    return hourly, daily[: config.OWM_DAILY_LIMIT]


def _fetch(params: dict, api_key: str, units: str) -> WeatherData:
    """Run the /weather then /forecast flow for one set of lookup params."""
    common = {"appid": api_key, "units": units}

    client = _create_client()
    try:
        # Step 1: Current conditions, which also resolve the coordinates
        current_data = _request_with_retry(client, "/weather", {**params, **common})
        location, current = _parse_current(current_data)

        # Step 2: Forecast at the resolved coordinates
        try:
            forecast_data = _request_with_retry(
                client,
                "/forecast",
                {"lat": location.latitude, "lon": location.longitude, **common},
            )
            hourly, daily = _parse_forecast(forecast_data, current.time.tzinfo)
        except OWMAPIError as exc:
            # Forecast is optional; current conditions are still useful on their own
            logger.warning("Forecast unavailable: %s", exc)
            hourly, daily = [], []

        return WeatherData(location=location, current=current, hourly=hourly, daily=daily)
    finally:
        client.close()


def get_weather_by_zip(
    code: str, country_code: str = "US", *, api_key: str, units: str = "imperial"
) -> WeatherData:
    """Fetch weather for a ZIP or postal code.

    Raises:
        OWMAPIError: On API communication errors.
        OWMLocationNotFoundError: If the postal code is unknown.
    """
    return _fetch({"zip": f"{code},{country_code}"}, api_key, units)


def get_weather_by_city(
    city: str,
    state: str | None = None,
    country: str | None = None,
    *,
    api_key: str,
    units: str = "imperial",
) -> WeatherData:
    """Fetch weather for a city, optionally qualified by state and country."""
    query = ",".join(p for p in (city, state, country) if p)
    return _fetch({"q": query}, api_key, units)


def get_weather_by_coords(
    latitude: float, longitude: float, *, api_key: str, units: str = "imperial"
) -> WeatherData:
    """Fetch weather for decimal coordinates."""
    return _fetch({"lat": latitude, "lon": longitude}, api_key, units)


def get_weather(query: LocationQuery, *, api_key: str, units: str = "imperial") -> WeatherData:
    """Fetch weather for a classified location query.

    Dispatches to the ZIP, city, or coordinate lookup based on the query type.
    """
    if isinstance(query, PostalCode):
        return get_weather_by_zip(
            query.code, query.country_code, api_key=api_key, units=units
        )
    if isinstance(query, CityName):
        return get_weather_by_city(
            query.city, query.state, query.country, api_key=api_key, units=units
        )
    if isinstance(query, Coordinates):
        return get_weather_by_coords(
            query.latitude, query.longitude, api_key=api_key, units=units
        )
    raise TypeError(f"Unsupported location query: {query!r}")
