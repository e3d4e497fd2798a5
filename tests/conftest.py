"""Shared test fixtures for OpenWeatherMap response data."""

from datetime import date, datetime, timedelta, timezone

import pytest

from weatherornot.owm_client import (
    CurrentWeather,
    DailyForecast,
    HourlyForecast,
    Location,
    WeatherData,
)

# 2026-02-23 00:00 UTC, which is 2026-02-22 19:00 in New York (UTC-5)
BASE_TS = 1771804800
NY_OFFSET = -18000
HOUR = 3600


@pytest.fixture()
def current_response():
    """Sample /weather response for New York, NY."""
    return {
        "coord": {"lon": -74.006, "lat": 40.7128},
        "weather": [
            {"id": 800, "main": "Clear", "description": "clear sky", "icon": "01d"}
        ],
        "base": "stations",
        "main": {
            "temp": 45.3,
            "feels_like": 41.2,
            "temp_min": 43.0,
            "temp_max": 47.0,
            "pressure": 1015,
            "humidity": 52,
        },
        "visibility": 10000,
        "wind": {"speed": 8.5, "deg": 270},
        "clouds": {"all": 0},
        "dt": BASE_TS,
        "sys": {
            "type": 1,
            "id": 4610,
            "country": "US",
            "sunrise": BASE_TS - 12 * HOUR,
            "sunset": BASE_TS + HOUR,
        },
        "timezone": NY_OFFSET,
        "id": 5128581,
        "name": "New York",
        "cod": 200,
    }


def _forecast_item(ts, temp, temp_min, temp_max, pop, code, description):
    return {
        "dt": ts,
        "main": {
            "temp": temp,
            "feels_like": temp - 3,
            "temp_min": temp_min,
            "temp_max": temp_max,
            "pressure": 1012,
            "humidity": 60,
        },
        "weather": [{"id": code, "main": "", "description": description, "icon": "01d"}],
        "clouds": {"all": 20},
        "wind": {"speed": 5.0, "deg": 180},
        "pop": pop,
        "dt_txt": "",
    }


@pytest.fixture()
def forecast_response():
    """Sample /forecast response spanning three local days."""
    return {
        "cod": "200",
        "message": 0,
        "cnt": 4,
        "list": [
            # 2026-02-22 21:00 local
            _forecast_item(BASE_TS + 2 * HOUR, 25.0, 24.0, 26.0, 0.2, 600, "light snow"),
            # 2026-02-23 00:00 local
            _forecast_item(BASE_TS + 5 * HOUR, 30.0, 28.0, 31.0, 0.1, 800, "clear sky"),
            # 2026-02-23 03:00 local
            _forecast_item(BASE_TS + 8 * HOUR, 35.0, 33.0, 36.0, 0.6, 500, "light rain"),
            # 2026-02-24 00:00 local
            _forecast_item(BASE_TS + 29 * HOUR, 40.0, 38.0, 42.0, 0.0, 803, "broken clouds"),
        ],
        "city": {
            "id": 5128581,
            "name": "New York",
            "coord": {"lat": 40.7128, "lon": -74.006},
            "country": "US",
            "timezone": NY_OFFSET,
            "sunrise": BASE_TS - 12 * HOUR,
            "sunset": BASE_TS + HOUR,
        },
    }


@pytest.fixture()
def weather_data():
    """A fully populated WeatherData for display tests."""
    tz = timezone(timedelta(seconds=NY_OFFSET))
    start = datetime(2026, 2, 22, 19, 0, tzinfo=tz)
    current = CurrentWeather(
        temperature=45.3,
        feels_like=41.2,
        humidity=52,
        pressure=1015,
        wind_speed=8.5,
        wind_degree=270,
        visibility=10000,
        cloud_cover=0,
        condition="clear sky",
        condition_code=800,
        icon="01d",
        sunrise=start - timedelta(hours=12),
        sunset=start + timedelta(hours=1),
        time=start,
    )
    hourly = [
        HourlyForecast(
            time=start + timedelta(hours=3 * i),
            temperature=40.0 + i,
            feels_like=37.0 + i,
            humidity=60,
            wind_speed=5.0,
            condition="few clouds",
            condition_code=801,
            icon="02n",
            precip_chance=10 * i,
        )
        for i in range(16)
    ]
    daily = [
        DailyForecast(
            date=date(2026, 2, 22) + timedelta(days=i),
            temp_max=50.0 + i,
            temp_min=35.0 + i,
            humidity=55,
            wind_speed=6.0,
            condition="light rain",
            condition_code=500,
            icon="10d",
            precip_chance=40,
        )
        for i in range(5)
    ]
    return WeatherData(
        location=Location(
            name="New York",
            country="US",
            latitude=40.7128,
            longitude=-74.006,
            timezone="UTC-5",
        ),
        current=current,
        hourly=hourly,
        daily=daily,
    )
