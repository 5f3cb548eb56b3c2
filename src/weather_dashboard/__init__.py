"""Terminal weather dashboard backed by the OpenWeatherMap 5 day / 3 hour forecast."""

__version__ = "0.1.0"
