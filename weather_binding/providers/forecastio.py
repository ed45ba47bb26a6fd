from __future__ import annotations

from .base import WeatherProvider
from ..entities import ProviderName


class ForecastIoProvider(WeatherProvider):
    name = ProviderName.FORECASTIO
    base_url = "https://api.forecast.io/forecast"

    def current_url_template(self) -> str:
        return (
            f"{self.base_url}/[API_KEY]/[LATITUDE],[LONGITUDE]"
            "?units=[UNITS]&lang=[LANGUAGE]&exclude=hourly,minutely,flags"
        )


__all__ = ["ForecastIoProvider"]
