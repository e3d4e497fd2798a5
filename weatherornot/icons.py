"""Weather icons and unit labels for terminal output.

Icons are chosen from the OpenWeatherMap condition id groups:
2xx thunderstorm, 3xx drizzle, 5xx rain, 6xx snow, 7xx atmosphere (fog,
mist, haze), 800 clear, 801-802 partly cloudy, 803-804 cloudy.
"""

from __future__ import annotations

ART_WIDTH = 13

_ART: dict[str, list[str]] = {
    "clear_day": [
        "    \\   /    ",
        "     .-.     ",
        "  ― (   ) ―  ",
        "     `-'     ",
        "    /   \\    ",
    ],
    "clear_night": [
        "    .-.      ",
        "   (   )     ",
        "  (  .  )    ",
        "   (___)     ",
        "             ",
    ],
    "partly_cloudy": [
        "   \\  /      ",
        ' _ /"".-.    ',
        "   \\_(   ).  ",
        "   /(___(__) ",
        "             ",
    ],
    "cloudy": [
        "             ",
        "     .--.    ",
        "  .-(    ).  ",
        " (___.__)__) ",
        "             ",
    ],
    "rain": [
        "     .-.     ",
        "    (   ).   ",
        "   (___(__)  ",
        "  ‚'‚'‚'‚'   ",
        "  ‚'‚'‚'‚'   ",
    ],
    "drizzle": [
        "     .-.     ",
        "    (   ).   ",
        "   (___(__)  ",
        "   ‚'‚'‚'    ",
        "   ‚'‚'‚'    ",
    ],
    "thunderstorm": [
        "     .-.     ",
        "    (   ).   ",
        "   (___(__)  ",
        "  ⚡'⚡'⚡'   ",
        "  ‚'‚'‚'     ",
    ],
    "snow": [
        "     .-.     ",
        "    (   ).   ",
        "   (___(__)  ",
        "   * * * *   ",
        "  * * * *    ",
    ],
    "fog": [
        "             ",
        " _ - _ - _ - ",
        "  _ - _ - _  ",
        " _ - _ - _ - ",
        "             ",
    ],
    "unknown": [
        "             ",
        "    .-.      ",
        "   (   )     ",
        "    `-'      ",
        "             ",
    ],
}

_EMOJI: dict[str, str] = {
    "clear_day": "☀️",
    "clear_night": "\U0001f319",
    "partly_cloudy": "⛅",
    "cloudy": "☁️",
    "rain": "\U0001f327️",
    "drizzle": "\U0001f326️",
    "thunderstorm": "⛈️",
    "snow": "❄️",
    "fog": "\U0001f32b️",
    "unknown": "\U0001f321️",
}


def condition_kind(condition_code: int, is_night: bool = False) -> str:
    """Map an OpenWeatherMap condition id to an icon key."""
    if 200 <= condition_code < 300:
        return "thunderstorm"
    if 300 <= condition_code < 400:
        return "drizzle"
    if 500 <= condition_code < 600:
        return "rain"
    if 600 <= condition_code < 700:
        return "snow"
    if 700 <= condition_code < 800:
        return "fog"
    if condition_code == 800:
        return "clear_night" if is_night else "clear_day"
    if 800 < condition_code < 803:
        return "partly_cloudy"
    if condition_code >= 803:
        return "cloudy"
    return "unknown"


def get_weather_art(condition_code: int, is_night: bool = False) -> list[str]:
    """Return the 5-line ASCII art for a condition, each line ART_WIDTH wide."""
    return list(_ART[condition_kind(condition_code, is_night)])


def get_weather_emoji(condition_code: int, is_night: bool = False) -> str:
    return _EMOJI[condition_kind(condition_code, is_night)]


def temp_unit(units: str) -> str:
    """Temperature unit symbol for an OpenWeatherMap units setting."""
    if units == "imperial":
        return "°F"
    if units == "metric":
        return "°C"
    return "K"


def wind_unit(units: str) -> str:
    return "mph" if units == "imperial" else "m/s"
