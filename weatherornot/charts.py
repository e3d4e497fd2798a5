"""ASCII temperature charts.

Line charts are drawn with asciichartpy; the range bars and sparkline are
plain block characters so they survive copy/paste into chat or logs.
"""

from __future__ import annotations

import asciichartpy

from weatherornot.icons import temp_unit
from weatherornot.owm_client import WeatherData

CHART_HEIGHT = 10
MAX_CHART_DAYS = 5
RANGE_BAR_WIDTH = 30
SPARK_CHARS = "▁▂▃▄▅▆▇█"


def _plot(values: list[float], caption: str, units: str) -> str:
    graph = asciichartpy.plot(values, {"height": CHART_HEIGHT, "format": "{:8.1f} "})
    unit = temp_unit(units)
    return (
        f"\n{graph}\n"
        f"{caption:^{len(graph.splitlines()[0])}}\n"
        f"Range: {min(values):.1f}{unit} - {max(values):.1f}{unit}\n"
    )


def render_hourly_temp_chart(data: WeatherData, hours: int, units: str) -> str:
    """Chart temperatures for the next `hours` forecast steps."""
    temps = [h.temperature for h in data.hourly[:hours]]
    if not temps:
        return ""
    return _plot(temps, f"Temperature Trend (Next {len(temps)} Hours)", units)


def render_daily_temp_chart(data: WeatherData, units: str) -> str:
    """Chart each day's high temperature."""
    highs = [d.temp_max for d in data.daily[:MAX_CHART_DAYS]]
    if not highs:
        return ""
    return _plot(highs, f"Daily Max Temperature ({len(highs)} Days)", units)


def render_daily_range_bars(data: WeatherData, units: str) -> str:
    """Draw one low-to-high bar per day, scaled so a 20 degree spread fills the bar."""
    if not data.daily:
        return ""

    unit = temp_unit(units)
    lines = ["", "Daily Temperature Range:", "─" * 50]
    for day in data.daily[:MAX_CHART_DAYS]:
        spread = day.temp_max - day.temp_min
        bar = "█" * int(spread / 20.0 * RANGE_BAR_WIDTH) if spread > 0 else ""
        lines.append(
            f"{day.date:%a %m/%d}  {day.temp_min:.0f}{unit} {bar} {day.temp_max:.0f}{unit}"
        )
    return "\n".join(lines) + "\n"


def sparkline(values: list[float]) -> str:
    """Generate a one-line sparkline from a list of values."""
    if not values:
        return ""

    low, high = min(values), max(values)
    span = high - low
    chars = []
    for v in values:
        idx = int((v - low) / span * 7) if span > 0 else 0
        chars.append(SPARK_CHARS[min(7, max(0, idx))])
    return "".join(chars)
