"""Centralized configuration loaded from environment variables.

All settings are read from environment variables with sensible defaults.
User-level preferences (API key, default location, favorites) live in the
TOML settings file instead; see weatherornot.settings.
"""

import os
from pathlib import Path


def get_env_api_key() -> str:
    """Get the OpenWeatherMap API key from the environment.

    Read at call time so a key exported after import is still picked up.
    Used only when the settings file has no api_key.
    """
    return os.environ.get("OPENWEATHERMAP_API_KEY", "")


def get_config_path() -> Path:
    """Return the path of the TOML settings file."""
    override = os.environ.get("WEATHERORNOT_CONFIG")
    if override:
        return Path(override).expanduser()
    return Path.home() / ".config" / "weatherornot.toml"


def _get_int(key: str, default: int) -> int:
    """Read an integer environment variable with a default."""
    return int(os.environ.get(key, str(default)))


# OpenWeatherMap API
OWM_API_BASE_URL: str = os.environ.get(
    "OWM_API_BASE_URL", "https://api.openweathermap.org/data/2.5"
)
OWM_REQUEST_TIMEOUT: int = _get_int("OWM_REQUEST_TIMEOUT", 10)
OWM_RETRY_DELAY: int = _get_int("OWM_RETRY_DELAY", 2)

# Forecast trimming: 16 x 3-hour steps = 48 hours
OWM_HOURLY_LIMIT: int = _get_int("OWM_HOURLY_LIMIT", 16)
OWM_DAILY_LIMIT: int = _get_int("OWM_DAILY_LIMIT", 5)
