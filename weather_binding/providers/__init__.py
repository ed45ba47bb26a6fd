"""Weather provider variants and their registry."""
from __future__ import annotations

from typing import Dict, Type, Union

from .base import ProviderError, WeatherProvider
from .forecastio import ForecastIoProvider
from .openweathermap import OpenWeatherMapProvider
from .weatherbit import WeatherbitProvider
from .worldweatheronline import WorldWeatherOnlineProvider
from ..entities import ProviderName


PROVIDERS: Dict[ProviderName, Type[WeatherProvider]] = {
    provider.name: provider
    for provider in (
        OpenWeatherMapProvider,
        WeatherbitProvider,
        ForecastIoProvider,
        WorldWeatherOnlineProvider,
    )
}


def get_provider(name: Union[ProviderName, str]) -> WeatherProvider:
    try:
        provider_name = name if isinstance(name, ProviderName) else ProviderName.parse(name)
        provider_cls = PROVIDERS[provider_name]
    except (KeyError, ValueError) as exc:
        raise ProviderError(f"unsupported weather provider: {name}") from exc
    return provider_cls()


__all__ = [
    "PROVIDERS",
    "ForecastIoProvider",
    "OpenWeatherMapProvider",
    "ProviderError",
    "WeatherProvider",
    "WeatherbitProvider",
    "WorldWeatherOnlineProvider",
    "get_provider",
]
