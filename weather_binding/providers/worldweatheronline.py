from __future__ import annotations

from .base import WeatherProvider
from ..entities import ProviderName


class WorldWeatherOnlineProvider(WeatherProvider):
    name = ProviderName.WORLDWEATHERONLINE
    base_url = "https://api.worldweatheronline.com/premium/v1/weather.ashx"

    def current_url_template(self) -> str:
        return (
            f"{self.base_url}?key=[API_KEY]&q=[LATITUDE],[LONGITUDE]"
            "&num_of_days=5&format=json&lang=[LANGUAGE]"
        )


__all__ = ["WorldWeatherOnlineProvider"]
