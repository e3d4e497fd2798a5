"""Command-line interface for weatherornot.

Run with: weatherornot [LOCATION] [options]

LOCATION can be a ZIP code ("10001" or "10001,US"), a city ("San Francisco",
"San Francisco,CA", "San Francisco,CA,US"), or coordinates ("37.7749,-122.4194").
With no LOCATION, the configured default_location is used.
"""

from __future__ import annotations

import logging
from dataclasses import replace

import click
from rich import box
from rich.console import Console
from rich.table import Table

from weatherornot import __version__, config
from weatherornot.charts import (
    render_daily_range_bars,
    render_daily_temp_chart,
    render_hourly_temp_chart,
    sparkline,
)
from weatherornot.location import LocationParseError, parse_location
from weatherornot.neofetch import render_neofetch
from weatherornot.owm_client import OWMAPIError, get_weather
from weatherornot.settings import (
    VALID_DISPLAY_MODES,
    VALID_UNITS,
    Settings,
    SettingsError,
    add_favorite,
    create_settings,
    default_settings,
    load_settings,
    mask_api_key,
    remove_favorite,
    resolve_location,
    save_settings,
    set_value,
)
from weatherornot.widget import render_widget

logger = logging.getLogger(__name__)

WEATHER_COMMAND = "weather"


class DefaultCommandGroup(click.Group):
    """A group that runs WEATHER_COMMAND when no subcommand is named.

    Lets `weatherornot 90210` work alongside `weatherornot config show`.
    """

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        if not args or args[0] not in (*self.commands, "--help", "-h", "--version"):
            args = [WEATHER_COMMAND, *args]
        return super().parse_args(ctx, args)


def _load() -> Settings:
    try:
        return load_settings()
    except SettingsError as exc:
        raise click.ClickException(str(exc))


def _save(settings: Settings) -> None:
    try:
        save_settings(settings)
    except SettingsError as exc:
        raise click.ClickException(str(exc))


@click.group(cls=DefaultCommandGroup, context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="weatherornot")
def cli():
    """A beautiful weather CLI tool.

    \b
    Location can be specified as:
      ZIP code:     10001 or 10001,US
      City:         "San Francisco" or "San Francisco,CA" or "San Francisco,CA,US"
      Coordinates:  "37.7749,-122.4194"
      Favorite:     -f home

    Put -- before coordinates with a negative latitude:
    weatherornot -- "-33.8688,151.2093"
    """


@cli.command(WEATHER_COMMAND)
@click.argument("location", required=False)
@click.option("-m", "--mode", type=click.Choice(VALID_DISPLAY_MODES), help="Display mode (default from config).")
@click.option("-u", "--units", type=click.Choice(VALID_UNITS), help="Units (default from config).")
@click.option("-f", "--favorite", help="Use a favorite location from config.")
@click.option("--no-color", is_flag=True, help="Disable colored output.")
@click.option("--graph/--no-graph", default=True, show_default=True, help="Show temperature graph.")
@click.option(
    "--chart",
    type=click.Choice(["hourly", "daily", "range", "spark"]),
    default="hourly",
    show_default=True,
    help="Kind of temperature graph.",
)
@click.option("--hours", default=12, show_default=True, type=click.IntRange(min=1), help="Hourly steps to chart.")
@click.option("--days", default=5, show_default=True, type=click.IntRange(1, 5), help="Days of forecast to show.")
@click.option("--show-location/--hide-location", default=True, show_default=True, help="Show location name.")
@click.option("-v", "--verbose", is_flag=True, help="Log API requests to stderr.")
def weather(
    location: str | None,
    mode: str | None,
    units: str | None,
    favorite: str | None,
    no_color: bool,
    graph: bool,
    chart: str,
    hours: int,
    days: int,
    show_location: bool,
    verbose: bool,
):
    """Show current weather and forecast for LOCATION."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG)

    settings = _load()

    api_key = settings.api_key or config.get_env_api_key()
    if not api_key:
        raise click.ClickException(
            "No API key configured. Run 'weatherornot config init' or "
            "'weatherornot config set api_key <key>'."
        )

    try:
        raw_location = resolve_location(settings, favorite=favorite, argument=location)
        query = parse_location(raw_location)
    except SettingsError as exc:
        raise click.ClickException(str(exc))
    except LocationParseError as exc:
        raise click.ClickException(f"Failed to parse location: {exc}")
    logger.debug("Resolved %r to %s", raw_location, query)

    units = units or settings.units
    mode = mode or settings.display_mode
    show_colors = settings.show_colors and not no_color

    try:
        data = get_weather(query, api_key=api_key, units=units)
    except OWMAPIError as exc:
        raise click.ClickException(f"Failed to fetch weather data: {exc}")

    data = replace(data, daily=data.daily[:days])

    console = Console(no_color=not show_colors, highlight=False)
    if mode == "neofetch":
        render_neofetch(console, data, units, show_location=show_location)
    else:
        render_widget(console, data, units, show_location=show_location)

    if graph:
        if chart == "daily":
            output = render_daily_temp_chart(data, units)
        elif chart == "range":
            output = render_daily_range_bars(data, units)
        elif chart == "spark":
            temps = [h.temperature for h in data.hourly[:hours]]
            output = f"\nTemp {sparkline(temps)}" if temps else ""
        else:
            output = render_hourly_temp_chart(data, hours, units)
        if output:
            click.echo(output)


@cli.group("config")
def config_group():
    """View and manage the configuration file."""


@config_group.command("init")
def config_init():
    """Initialize the configuration file."""
    settings = default_settings()
    settings.api_key = click.prompt("Enter your OpenWeatherMap API key", default="", show_default=False)
    settings.default_location = click.prompt(
        "Enter default location (e.g., 10001 or San Francisco,CA)", default="", show_default=False
    )
    try:
        path = create_settings(settings)
    except SettingsError as exc:
        raise click.ClickException(f"Failed to create config: {exc}")
    click.echo(f"Configuration file created at: {path}")


@config_group.command("set")
@click.argument("key")
@click.argument("value")
def config_set(key: str, value: str):
    """Set a configuration value.

    \b
    Available keys:
      api_key           OpenWeatherMap API key
      default_location  Location used when none is given
      units             metric, imperial, or standard
      display_mode      widget or neofetch
      show_colors       true or false
    """
    settings = _load()
    try:
        set_value(settings, key, value)
    except SettingsError as exc:
        raise click.ClickException(str(exc))
    _save(settings)
    click.echo(f"Set {key} = {value}")


@config_group.command("show")
def config_show():
    """Show the current configuration."""
    settings = _load()
    console = Console(highlight=False)

    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("setting", style="dim")
    table.add_column("value", style="bold")
    table.add_row("API Key", mask_api_key(settings.api_key) or "(not set)")
    table.add_row("Provider", settings.provider)
    table.add_row("Default Location", settings.default_location or "(not set)")
    table.add_row("Units", settings.units)
    table.add_row("Display Mode", settings.display_mode)
    table.add_row("Show Colors", str(settings.show_colors).lower())
    console.print(table)

    if settings.favorites:
        console.print()
        console.print(_favorites_table(settings))


@config_group.command("path")
def config_path():
    """Show the configuration file path."""
    click.echo(str(config.get_config_path()))


@config_group.group("favorite")
def favorite_group():
    """Manage favorite locations."""


def _favorites_table(settings: Settings) -> Table:
    table = Table(show_header=True, box=box.ROUNDED, header_style="bold", title="Favorites")
    table.add_column("Name", style="cyan")
    table.add_column("Location")
    for name, location in sorted(settings.favorites.items()):
        table.add_row(name, location)
    return table


@favorite_group.command("add")
@click.argument("name")
@click.argument("location")
def favorite_add(name: str, location: str):
    """Add a favorite location.

    \b
    Examples:
      weatherornot config favorite add home 90210
      weatherornot config favorite add work "New York,NY,US"
    """
    try:
        parse_location(location)
    except LocationParseError as exc:
        raise click.ClickException(f"Invalid location: {exc}")

    settings = _load()
    add_favorite(settings, name, location)
    _save(settings)
    click.echo(f"Added favorite: {name} = {location}")


@favorite_group.command("remove")
@click.argument("name")
def favorite_remove(name: str):
    """Remove a favorite location."""
    settings = _load()
    try:
        remove_favorite(settings, name)
    except SettingsError as exc:
        raise click.ClickException(str(exc))
    _save(settings)
    click.echo(f"Removed favorite: {name}")


@favorite_group.command("list")
def favorite_list():
    """List all favorite locations."""
    settings = _load()
    if not settings.favorites:
        click.echo("No favorites configured")
        return
    Console(highlight=False).print(_favorites_table(settings))


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
