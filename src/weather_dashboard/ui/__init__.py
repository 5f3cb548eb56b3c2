"""Terminal presentation for weather records and search history."""

from .renderer import ForecastRenderer

__all__ = ["ForecastRenderer"]
