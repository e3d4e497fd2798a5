"""Widget-style display: current, hourly, and daily data in bordered boxes."""

from __future__ import annotations

from rich import box
from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from weatherornot.icons import get_weather_emoji, temp_unit, wind_unit
from weatherornot.owm_client import WeatherData

MAX_HOURLY_ROWS = 12
MAX_DAILY_ROWS = 5


def _location_label(data: WeatherData) -> str:
    label = data.location.name
    if data.location.country:
        label += ", " + data.location.country
    return label


def _box(title: str, body: str, color: str) -> Panel:
    """Wrap text in a rounded box with a colored title."""
    return Panel(
        Text(body),
        title=Text(title, style=f"bold {color}"),
        title_align="left",
        box=box.ROUNDED,
        border_style=color,
        padding=(1, 2),
        expand=False,
    )


def current_box(data: WeatherData, units: str) -> Panel:
    c = data.current
    t_unit = temp_unit(units)
    lines = [
        f"{get_weather_emoji(c.condition_code, c.is_night)}  {c.condition.title()}",
        "",
        f"Temperature:  {c.temperature:.1f}{t_unit} (feels like {c.feels_like:.1f}{t_unit})",
        f"Humidity:     {c.humidity}%",
        f"Wind:         {c.wind_speed:.1f} {wind_unit(units)}",
        f"Pressure:     {c.pressure} hPa",
        f"Clouds:       {c.cloud_cover}%",
        f"Visibility:   {c.visibility / 1000:.1f} km",
    ]
    return _box("Current Weather", "\n".join(lines), "cyan")


def hourly_box(data: WeatherData, units: str) -> Panel:
    t_unit = temp_unit(units)
    lines = []
    for hour in data.hourly[:MAX_HOURLY_ROWS]:
        lines.append(
            f"{hour.time:%H:%M}  {get_weather_emoji(hour.condition_code)}  "
            f"{hour.temperature:.1f}{t_unit}  {hour.condition.title()}"
        )
    return _box("Hourly Forecast", "\n".join(lines), "yellow")


def daily_box(data: WeatherData, units: str) -> Panel:
    t_unit = temp_unit(units)
    lines = []
    for day in data.daily[:MAX_DAILY_ROWS]:
        lines.append(
            f"{day.date:%a, %b %d}  {get_weather_emoji(day.condition_code)}  "
            f"{day.temp_max:.0f}{t_unit} / {day.temp_min:.0f}{t_unit}  "
            f"{day.condition.title()}"
        )
    return _box("5-Day Forecast", "\n".join(lines), "magenta")


def render_widget(
    console: Console,
    data: WeatherData,
    units: str,
    show_location: bool = True,
    show_hourly: bool = True,
    show_daily: bool = True,
) -> None:
    """Print the widget display to the given console."""
    parts = []
    if show_location:
        parts.append(Text("  " + _location_label(data) + "  ", style="bold blue"))
        parts.append(Text(""))

    parts.append(current_box(data, units))

    if show_hourly and data.hourly:
        parts.append(Text(""))
        parts.append(hourly_box(data, units))

    if show_daily and data.daily:
        parts.append(Text(""))
        parts.append(daily_box(data, units))

    console.print(Group(*parts))
