"""Neofetch-style display: weather art on the left, labelled facts on the right."""

from __future__ import annotations

from rich.console import Console
from rich.text import Text

from weatherornot.icons import ART_WIDTH, get_weather_art, temp_unit, wind_unit
from weatherornot.owm_client import WeatherData


def _field(label: str, value: str) -> Text:
    line = Text(label, style="bold blue")
    line.append(" " + value)
    return line


def build_info_lines(data: WeatherData, units: str, show_location: bool = True) -> list[Text]:
    """Build the right-hand column of the neofetch display."""
    c = data.current
    t_unit = temp_unit(units)
    lines = []

    if show_location:
        label = data.location.name
        if data.location.country:
            label += ", " + data.location.country
        lines.append(Text(label, style="bold cyan"))
        lines.append(Text("-" * len(label), style="cyan"))

    lines.append(_field("Weather:", c.condition.title()))
    lines.append(_field("Temp:", f"{c.temperature:.1f}{t_unit}"))
    lines.append(_field("Feels like:", f"{c.feels_like:.1f}{t_unit}"))
    lines.append(_field("Humidity:", f"{c.humidity}%"))
    lines.append(_field("Wind:", f"{c.wind_speed:.1f} {wind_unit(units)}"))
    lines.append(_field("Pressure:", f"{c.pressure} hPa"))
    lines.append(_field("Visibility:", f"{c.visibility / 1000:.1f} km"))
    lines.append(_field("Clouds:", f"{c.cloud_cover}%"))
    return lines


def render_neofetch(
    console: Console, data: WeatherData, units: str, show_location: bool = True
) -> None:
    """Print the art and info columns side by side."""
    art = get_weather_art(data.current.condition_code, data.current.is_night)
    info = build_info_lines(data, units, show_location)

    for i in range(max(len(art), len(info))):
        row = Text(art[i] if i < len(art) else " " * ART_WIDTH, style="yellow")
        row.append("  ")
        if i < len(info):
            row.append_text(info[i])
        console.print(row, overflow="ignore", crop=False, no_wrap=True)
