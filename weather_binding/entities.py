from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional


class ProviderName(str, Enum):
    """Known weather providers, valued by their canonical display text."""

    OPENWEATHERMAP = "OpenWeatherMap"
    WEATHERBIT = "Weatherbit"
    FORECASTIO = "ForecastIo"
    WORLDWEATHERONLINE = "WorldWeatherOnline"

    @classmethod
    def parse(cls, value: str) -> "ProviderName":
        text = (value or "").strip().lower()
        for member in cls:
            if member.value.lower() == text or member.name.lower() == text:
                return member
        raise ValueError(f"unknown weather provider: {value!r}")

    def __str__(self) -> str:
        return self.value


@dataclass
class Condition:
    text: Optional[str] = None
    condition_id: Optional[str] = None
    icon: Optional[str] = None
    observation_time: Optional[datetime] = None
    last_update: Optional[datetime] = None


@dataclass
class Temperature:
    current: Optional[float] = None
    min: Optional[float] = None
    max: Optional[float] = None
    feel: Optional[float] = None


@dataclass
class Atmosphere:
    humidity: Optional[float] = None
    pressure: Optional[float] = None
    visibility: Optional[float] = None


@dataclass
class Wind:
    speed: Optional[float] = None
    direction: Optional[float] = None
    degree: Optional[float] = None
    gust: Optional[float] = None


@dataclass
class Precipitation:
    rain: Optional[float] = None
    snow: Optional[float] = None
    probability: Optional[float] = None


@dataclass
class Clouds:
    percent: Optional[float] = None


@dataclass
class Weather:
    """Weather data of one provider for one location.

    Filled in place by the parser during each request phase. ``error`` is the
    in-band error channel: when set, the condition data must not be trusted.
    """

    provider: ProviderName
    condition: Condition = field(default_factory=Condition)
    temperature: Temperature = field(default_factory=Temperature)
    atmosphere: Atmosphere = field(default_factory=Atmosphere)
    wind: Wind = field(default_factory=Wind)
    precipitation: Precipitation = field(default_factory=Precipitation)
    clouds: Clouds = field(default_factory=Clouds)
    forecast: List["Forecast"] = field(default_factory=list)
    error: Optional[str] = None
    response_code: Optional[int] = None

    def has_error(self) -> bool:
        return self.error is not None


@dataclass
class Forecast(Weather):
    """One forecast period inside a :class:`Weather`."""

    day: int = 0


__all__ = [
    "Atmosphere",
    "Clouds",
    "Condition",
    "Forecast",
    "Precipitation",
    "ProviderName",
    "Temperature",
    "Weather",
    "Wind",
]
