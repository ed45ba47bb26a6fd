"""Parser abstraction used by the fetcher."""
from __future__ import annotations

from typing import Protocol

from ..entities import Weather


class WeatherParser(Protocol):
    """Turns a provider response body into weather data."""

    def parse_into(self, body: str, weather: Weather) -> None:
        """Populate ``weather`` in place, raising on malformed input."""
        ...


__all__ = ["WeatherParser"]
