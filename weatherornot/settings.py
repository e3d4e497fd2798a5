"""Persisted user settings stored as TOML.

The file lives at ~/.config/weatherornot.toml (or $WEATHERORNOT_CONFIG) and
is created with defaults the first time it is loaded.
"""

from __future__ import annotations

import logging
import tomllib
from dataclasses import asdict, dataclass, field
from pathlib import Path

import tomli_w

from weatherornot import config

logger = logging.getLogger(__name__)

VALID_UNITS = ("metric", "imperial", "standard")
VALID_DISPLAY_MODES = ("widget", "neofetch")

_TRUE_STRINGS = {"1", "t", "true", "yes", "on"}
_FALSE_STRINGS = {"0", "f", "false", "no", "off"}


class SettingsError(Exception):
    """Raised when settings cannot be read, written, or updated."""


@dataclass
class Settings:
    """User preferences for weatherornot.

    Attributes:
        api_key: OpenWeatherMap API key.
        provider: Weather provider name (informational).
        default_location: Location used when none is given on the command line.
        units: "metric", "imperial", or "standard".
        display_mode: "widget" or "neofetch".
        show_colors: Whether to color terminal output.
        favorites: Named location strings, e.g. {"home": "90210"}.
    """

    api_key: str = ""
    provider: str = "OpenWeatherMap"
    default_location: str = ""
    units: str = "imperial"
    display_mode: str = "widget"
    show_colors: bool = True
    favorites: dict[str, str] = field(default_factory=dict)


def default_settings() -> Settings:
    """Return a fresh Settings instance with default values."""
    return Settings()


def _from_dict(data: dict) -> Settings:
    """Build Settings from parsed TOML, falling back to defaults for missing keys."""
    defaults = default_settings()
    values = {}
    for key, default in asdict(defaults).items():
        value = data.get(key, default)
        if not isinstance(value, type(default)):
            raise SettingsError(
                f"Invalid value for '{key}' in settings file: {value!r}"
            )
        values[key] = value

    favorites = values["favorites"]
    if not all(isinstance(v, str) for v in favorites.values()):
        raise SettingsError("Favorite locations must be strings.")
    values["favorites"] = dict(favorites)
    return Settings(**values)


def _write(settings: Settings, path: Path) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("wb") as fh:
            tomli_w.dump(asdict(settings), fh)
    except OSError as exc:
        raise SettingsError(f"Could not write settings file {path}: {exc}")


def create_settings(settings: Settings, path: Path | None = None) -> Path:
    """Create a new settings file, overwriting any existing one.

    Returns:
        The path written.
    """
    path = path or config.get_config_path()
    _write(settings, path)
    logger.info("Created settings file at %s", path)
    return path


def save_settings(settings: Settings, path: Path | None = None) -> Path:
    """Persist settings to the settings file."""
    path = path or config.get_config_path()
    _write(settings, path)
    logger.debug("Saved settings to %s", path)
    return path


def load_settings(path: Path | None = None) -> Settings:
    """Load settings, creating the file with defaults if it does not exist.

    Raises:
        SettingsError: If the file is unreadable or contains invalid values.
    """
    path = path or config.get_config_path()
    if not path.exists():
        settings = default_settings()
        create_settings(settings, path)
        return settings

    try:
        with path.open("rb") as fh:
            data = tomllib.load(fh)
    except tomllib.TOMLDecodeError as exc:
        raise SettingsError(f"Error reading settings file {path}: {exc}")
    except OSError as exc:
        raise SettingsError(f"Could not open settings file {path}: {exc}")

    return _from_dict(data)


def _parse_bool(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE_STRINGS:
        return True
    if lowered in _FALSE_STRINGS:
        return False
    raise SettingsError("show_colors must be true or false")


def set_value(settings: Settings, key: str, value: str) -> None:
    """Validate and assign a single setting by key.

    Raises:
        SettingsError: For unknown keys or invalid values.
    """
    if key == "api_key":
        settings.api_key = value
    elif key == "default_location":
        settings.default_location = value
    elif key == "units":
        if value not in VALID_UNITS:
            raise SettingsError("units must be metric, imperial, or standard")
        settings.units = value
    elif key == "display_mode":
        if value not in VALID_DISPLAY_MODES:
            raise SettingsError("display_mode must be widget or neofetch")
        settings.display_mode = value
    elif key == "show_colors":
        settings.show_colors = _parse_bool(value)
    else:
        raise SettingsError(f"Unknown config key: {key}")


def add_favorite(settings: Settings, name: str, location: str) -> None:
    settings.favorites[name] = location


def remove_favorite(settings: Settings, name: str) -> None:
    if name not in settings.favorites:
        raise SettingsError(f"Favorite '{name}' not found")
    del settings.favorites[name]


def resolve_location(
    settings: Settings,
    favorite: str | None = None,
    argument: str | None = None,
) -> str:
    """Pick the raw location string for this run.

    Priority: named favorite, then the command-line argument, then the
    configured default location.

    Raises:
        SettingsError: If the favorite is unknown or nothing is configured.
    """
    if favorite:
        if favorite not in settings.favorites:
            raise SettingsError(f"Favorite '{favorite}' not found")
        return settings.favorites[favorite]
    if argument:
        return argument
    if settings.default_location:
        return settings.default_location
    raise SettingsError(
        "No location specified and no default location configured."
    )


def mask_api_key(api_key: str) -> str:
    """Hide all but the first and last four characters of an API key."""
    if len(api_key) <= 8:
        return "*" * len(api_key)
    return api_key[:4] + "*" * (len(api_key) - 8) + api_key[-4:]
