"""weatherornot: current conditions and forecasts in the terminal."""

__version__ = "0.1.0"
