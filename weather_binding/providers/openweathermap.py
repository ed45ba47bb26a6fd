from __future__ import annotations

from .base import WeatherProvider
from ..entities import ProviderName


class OpenWeatherMapProvider(WeatherProvider):
    name = ProviderName.OPENWEATHERMAP
    base_url = "https://api.openweathermap.org/data/2.5"

    def current_url_template(self) -> str:
        return (
            f"{self.base_url}/weather?lat=[LATITUDE]&lon=[LONGITUDE]&lang=[LANGUAGE]"
            "&mode=json&units=metric&APPID=[API_KEY]"
        )

    def forecast_url_template(self) -> str:
        return (
            f"{self.base_url}/forecast/daily?lat=[LATITUDE]&lon=[LONGITUDE]&lang=[LANGUAGE]"
            "&cnt=5&mode=json&units=metric&APPID=[API_KEY]"
        )


__all__ = ["OpenWeatherMapProvider"]
