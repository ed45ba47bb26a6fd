from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any, Mapping

from .mappings import ParserMapping
from ..entities import Forecast, Weather


logger = logging.getLogger(__name__)

_MISSING = object()

_TEXT_TARGETS = frozenset({"error", "condition.text", "condition.icon", "condition.condition_id"})


class JsonWeatherParser:
    """Copies values out of a JSON document following a :class:`ParserMapping`."""

    def __init__(self, mapping: ParserMapping) -> None:
        self.mapping = mapping

    def parse_into(self, body: str, weather: Weather) -> None:
        document = json.loads(body)
        _apply(document, self.mapping.current, weather)

        if not self.mapping.forecast_path:
            return
        items = resolve(document, self.mapping.forecast_path)
        if not isinstance(items, list):
            return
        for index, item in enumerate(items):
            forecast = Forecast(provider=weather.provider, day=index)
            _apply(item, self.mapping.forecast, forecast)
            weather.forecast.append(forecast)
        logger.debug("%s: parsed %d forecast entries", weather.provider, len(items))


def resolve(document: Any, path: str) -> Any:
    """Walk a dotted path; integer segments index into lists.

    Returns the module-level missing sentinel when any segment does not
    resolve or the value is JSON ``null``.
    """
    current = document
    for segment in path.split("."):
        if isinstance(current, list):
            if not segment.isdigit() or int(segment) >= len(current):
                return _MISSING
            current = current[int(segment)]
        elif isinstance(current, dict):
            if segment not in current:
                return _MISSING
            current = current[segment]
        else:
            return _MISSING
    return _MISSING if current is None else current


def _apply(document: Any, fields: Mapping[str, str], target: Weather) -> None:
    for target_path, source_path in fields.items():
        value = resolve(document, source_path)
        if value is _MISSING:
            continue
        _assign(target, target_path, _convert(target_path, value))


def _convert(target_path: str, value: Any) -> Any:
    if target_path in _TEXT_TARGETS:
        return str(value)
    if target_path == "response_code":
        return int(value)
    if target_path == "condition.observation_time":
        return datetime.fromtimestamp(float(value), tz=timezone.utc)
    return float(value)


def _assign(target: Weather, target_path: str, value: Any) -> None:
    *parents, attribute = target_path.split(".")
    obj: Any = target
    for parent in parents:
        obj = getattr(obj, parent)
    setattr(obj, attribute, value)


__all__ = ["JsonWeatherParser", "resolve"]
