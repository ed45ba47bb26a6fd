from __future__ import annotations

from .base import WeatherProvider
from ..entities import ProviderName


class WeatherbitProvider(WeatherProvider):
    """Weatherbit answers current and daily forecast with the same ``data`` layout."""

    name = ProviderName.WEATHERBIT
    base_url = "https://api.weatherbit.io/v2.0"

    def current_url_template(self) -> str:
        return (
            f"{self.base_url}/current?key=[API_KEY]&lat=[LATITUDE]&lon=[LONGITUDE]"
            "&lang=[LANGUAGE]&units=[UNITS]"
        )

    def forecast_url_template(self) -> str:
        return (
            f"{self.base_url}/forecast/daily?key=[API_KEY]&lat=[LATITUDE]&lon=[LONGITUDE]"
            "&lang=[LANGUAGE]&units=[UNITS]&days=5"
        )


__all__ = ["WeatherbitProvider"]
