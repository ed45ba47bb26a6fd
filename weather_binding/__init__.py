"""Fetch weather and forecast data from remote weather providers."""
from __future__ import annotations

from .config import ConfigurationError, LocationConfig, ProviderConfig, WeatherConfig, load_config
from .entities import Forecast, ProviderName, Weather
from .services import WeatherFetcher, create_fetcher

__all__ = [
    "ConfigurationError",
    "Forecast",
    "LocationConfig",
    "ProviderConfig",
    "ProviderName",
    "Weather",
    "WeatherConfig",
    "WeatherFetcher",
    "create_fetcher",
    "load_config",
]
