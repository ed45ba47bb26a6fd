from __future__ import annotations

from .base import WeatherParser
from .json_parser import JsonWeatherParser
from .mappings import MAPPINGS, ParserMapping

__all__ = ["JsonWeatherParser", "MAPPINGS", "ParserMapping", "WeatherParser"]
