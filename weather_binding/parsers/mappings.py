"""Field mappings from provider JSON documents onto :class:`Weather`.

Keys are attribute paths on the weather object, values are dotted paths into
the document. Forecast fields are resolved relative to each forecast item.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional

from ..entities import ProviderName


@dataclass(frozen=True)
class ParserMapping:
    current: Mapping[str, str]
    forecast_path: Optional[str] = None
    forecast: Mapping[str, str] = field(default_factory=dict)


# "cod" and "message" are present on every answer, the daily forecast
# reports a numeric "message" next to "cod": "200".
OPENWEATHERMAP = ParserMapping(
    current={
        "condition.text": "weather.0.description",
        "condition.condition_id": "weather.0.id",
        "condition.icon": "weather.0.icon",
        "condition.observation_time": "dt",
        "temperature.current": "main.temp",
        "temperature.min": "main.temp_min",
        "temperature.max": "main.temp_max",
        "temperature.feel": "main.feels_like",
        "atmosphere.humidity": "main.humidity",
        "atmosphere.pressure": "main.pressure",
        "atmosphere.visibility": "visibility",
        "wind.speed": "wind.speed",
        "wind.degree": "wind.deg",
        "wind.gust": "wind.gust",
        "clouds.percent": "clouds.all",
        "precipitation.rain": "rain.1h",
        "precipitation.snow": "snow.1h",
        "response_code": "cod",
        "error": "message",
    },
    forecast_path="list",
    forecast={
        "condition.text": "weather.0.description",
        "condition.condition_id": "weather.0.id",
        "condition.icon": "weather.0.icon",
        "condition.observation_time": "dt",
        "temperature.current": "temp.day",
        "temperature.min": "temp.min",
        "temperature.max": "temp.max",
        "temperature.feel": "feels_like.day",
        "atmosphere.humidity": "humidity",
        "atmosphere.pressure": "pressure",
        "wind.speed": "speed",
        "wind.degree": "deg",
        "wind.gust": "gust",
        "clouds.percent": "clouds",
        "precipitation.rain": "rain",
        "precipitation.snow": "snow",
        "precipitation.probability": "pop",
    },
)

# The daily forecast answer arrives with its "data" key renamed to "forecast"
# by the fetcher, so it never overwrites the current conditions.
WEATHERBIT = ParserMapping(
    current={
        "condition.text": "data.0.weather.description",
        "condition.condition_id": "data.0.weather.code",
        "condition.icon": "data.0.weather.icon",
        "condition.observation_time": "data.0.ts",
        "temperature.current": "data.0.temp",
        "temperature.feel": "data.0.app_temp",
        "atmosphere.humidity": "data.0.rh",
        "atmosphere.pressure": "data.0.pres",
        "atmosphere.visibility": "data.0.vis",
        "wind.speed": "data.0.wind_spd",
        "wind.degree": "data.0.wind_dir",
        "wind.gust": "data.0.gust",
        "clouds.percent": "data.0.clouds",
        "precipitation.rain": "data.0.precip",
        "precipitation.snow": "data.0.snow",
        "error": "error",
    },
    forecast_path="forecast",
    forecast={
        "condition.text": "weather.description",
        "condition.condition_id": "weather.code",
        "condition.icon": "weather.icon",
        "condition.observation_time": "ts",
        "temperature.current": "temp",
        "temperature.min": "min_temp",
        "temperature.max": "max_temp",
        "atmosphere.humidity": "rh",
        "atmosphere.pressure": "pres",
        "atmosphere.visibility": "vis",
        "wind.speed": "wind_spd",
        "wind.degree": "wind_dir",
        "wind.gust": "wind_gust_spd",
        "clouds.percent": "clouds",
        "precipitation.rain": "precip",
        "precipitation.snow": "snow",
        "precipitation.probability": "pop",
    },
)

FORECASTIO = ParserMapping(
    current={
        "condition.text": "currently.summary",
        "condition.icon": "currently.icon",
        "condition.observation_time": "currently.time",
        "temperature.current": "currently.temperature",
        "temperature.feel": "currently.apparentTemperature",
        "atmosphere.humidity": "currently.humidity",
        "atmosphere.pressure": "currently.pressure",
        "atmosphere.visibility": "currently.visibility",
        "wind.speed": "currently.windSpeed",
        "wind.degree": "currently.windBearing",
        "wind.gust": "currently.windGust",
        "clouds.percent": "currently.cloudCover",
        "precipitation.rain": "currently.precipIntensity",
        "precipitation.probability": "currently.precipProbability",
        "response_code": "code",
        "error": "error",
    },
    forecast_path="daily.data",
    forecast={
        "condition.text": "summary",
        "condition.icon": "icon",
        "condition.observation_time": "time",
        "temperature.min": "temperatureMin",
        "temperature.max": "temperatureMax",
        "atmosphere.humidity": "humidity",
        "atmosphere.pressure": "pressure",
        "wind.speed": "windSpeed",
        "wind.degree": "windBearing",
        "clouds.percent": "cloudCover",
        "precipitation.rain": "precipIntensity",
        "precipitation.probability": "precipProbability",
    },
)

WORLDWEATHERONLINE = ParserMapping(
    current={
        "condition.text": "data.current_condition.0.weatherDesc.0.value",
        "condition.condition_id": "data.current_condition.0.weatherCode",
        "condition.icon": "data.current_condition.0.weatherIconUrl.0.value",
        "temperature.current": "data.current_condition.0.temp_C",
        "temperature.feel": "data.current_condition.0.FeelsLikeC",
        "atmosphere.humidity": "data.current_condition.0.humidity",
        "atmosphere.pressure": "data.current_condition.0.pressure",
        "atmosphere.visibility": "data.current_condition.0.visibility",
        "wind.speed": "data.current_condition.0.windspeedKmph",
        "wind.degree": "data.current_condition.0.winddirDegree",
        "clouds.percent": "data.current_condition.0.cloudcover",
        "precipitation.rain": "data.current_condition.0.precipMM",
        "error": "data.error.0.msg",
    },
    forecast_path="data.weather",
    forecast={
        "temperature.current": "avgtempC",
        "temperature.min": "mintempC",
        "temperature.max": "maxtempC",
        "precipitation.snow": "totalSnow_cm",
    },
)

MAPPINGS: Dict[ProviderName, ParserMapping] = {
    ProviderName.OPENWEATHERMAP: OPENWEATHERMAP,
    ProviderName.WEATHERBIT: WEATHERBIT,
    ProviderName.FORECASTIO: FORECASTIO,
    ProviderName.WORLDWEATHERONLINE: WORLDWEATHERONLINE,
}


__all__ = ["MAPPINGS", "ParserMapping"]
