"""Binding configuration: provider credentials and polled locations.

The configuration is loaded once by the host and handed to every fetcher it
builds. Values come in the binding's properties style::

    weather:apikey.OpenWeatherMap=0123456789
    weather:location.home.latitude=46.6142
    weather:location.home.longitude=13.8468
    weather:location.home.provider=OpenWeatherMap
    weather:location.home.language=de
"""
from __future__ import annotations

import logging
import os
from decimal import Decimal
from pathlib import Path
from typing import Dict, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .entities import ProviderName


logger = logging.getLogger(__name__)

PREFIX = "weather:"

_LOCATION_FIELDS = {
    "latitude": "latitude",
    "longitude": "longitude",
    "provider": "provider_name",
    "language": "language",
    "units": "measurement_units",
    "updateInterval": "update_interval",
    "name": "name",
}


class ConfigurationError(ValueError):
    """Raised when the binding configuration is missing or invalid."""


def env(name: str, default: Optional[str] = None, environ: Optional[Mapping[str, str]] = None) -> str:
    """Fetch environment variables while allowing explicit defaults."""

    source = os.environ if environ is None else environ
    value = source.get(name, default)
    if value is None:
        raise ConfigurationError(f"Environment variable {name} is required")
    return value


def _parse_provider(value):
    if value is None or isinstance(value, ProviderName):
        return value
    return ProviderName.parse(str(value))


class ProviderConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    provider_name: ProviderName
    api_key: Optional[str] = None
    api_key_2: Optional[str] = None

    @field_validator("provider_name", mode="before")
    @classmethod
    def validate_provider(cls, value):
        return _parse_provider(value)


class LocationConfig(BaseModel):
    """Settings of one polled location."""

    model_config = ConfigDict(frozen=True)

    location_id: str
    provider_name: Optional[ProviderName] = None
    latitude: Optional[Decimal] = None
    longitude: Optional[Decimal] = None
    measurement_units: Optional[str] = None
    language: Optional[str] = "en"
    update_interval: int = Field(15, ge=1)
    name: Optional[str] = None

    @field_validator("provider_name", mode="before")
    @classmethod
    def validate_provider(cls, value):
        return _parse_provider(value)


class WeatherConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    providers: Dict[ProviderName, ProviderConfig] = Field(default_factory=dict)
    locations: Dict[str, LocationConfig] = Field(default_factory=dict)

    def get_provider_config(self, provider_name: ProviderName) -> Optional[ProviderConfig]:
        return self.providers.get(provider_name)

    def get_location_config(self, location_id: str) -> Optional[LocationConfig]:
        return self.locations.get(location_id)

    # Loading ------------------------------------------------------------
    @classmethod
    def from_properties(cls, properties: Mapping[str, str]) -> "WeatherConfig":
        api_keys: Dict[ProviderName, Dict[str, str]] = {}
        locations: Dict[str, Dict[str, str]] = {}

        for raw_key, value in properties.items():
            key = raw_key[len(PREFIX):] if raw_key.startswith(PREFIX) else raw_key
            parts = key.split(".")
            if parts[0] in ("apikey", "apikey2") and len(parts) == 2:
                provider = _provider_from_key(parts[1], raw_key)
                slot = "api_key" if parts[0] == "apikey" else "api_key_2"
                api_keys.setdefault(provider, {})[slot] = value
            elif parts[0] == "location" and len(parts) == 3:
                location_id, option = parts[1], parts[2]
                if option not in _LOCATION_FIELDS:
                    logger.warning("Ignoring unknown location option %s", raw_key)
                    continue
                locations.setdefault(location_id, {})[_LOCATION_FIELDS[option]] = value
            else:
                logger.warning("Ignoring unknown configuration key %s", raw_key)

        providers = {
            provider: ProviderConfig(provider_name=provider, **keys) for provider, keys in api_keys.items()
        }
        parsed_locations: Dict[str, LocationConfig] = {}
        for location_id, values in locations.items():
            if not values.get("provider_name"):
                raise ConfigurationError(f"location {location_id!r} has no provider configured")
            try:
                parsed_locations[location_id] = LocationConfig(location_id=location_id, **values)
            except ValidationError as exc:
                raise ConfigurationError(f"invalid configuration for location {location_id!r}: {exc}") from exc

        logger.debug("Loaded %d provider(s) and %d location(s)", len(providers), len(parsed_locations))
        return cls(providers=providers, locations=parsed_locations)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "WeatherConfig":
        return load_config(env("WEATHER_CONFIG_FILE", environ=environ))


def _provider_from_key(text: str, raw_key: str) -> ProviderName:
    try:
        return ProviderName.parse(text)
    except ValueError as exc:
        raise ConfigurationError(f"unknown provider in {raw_key!r}") from exc


def read_properties(path: Union[str, Path]) -> Dict[str, str]:
    properties: Dict[str, str] = {}
    text = Path(path).read_text(encoding="utf-8")
    for number, line in enumerate(text.splitlines(), start=1):
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        key, sep, value = line.partition("=")
        if not sep:
            raise ConfigurationError(f"{path}:{number}: expected key=value")
        properties[key.strip()] = value.strip()
    return properties


def load_config(path: Union[str, Path]) -> WeatherConfig:
    try:
        properties = read_properties(path)
    except OSError as exc:
        raise ConfigurationError(f"cannot read configuration file {path}: {exc}") from exc
    return WeatherConfig.from_properties(properties)


__all__ = [
    "ConfigurationError",
    "LocationConfig",
    "ProviderConfig",
    "WeatherConfig",
    "env",
    "load_config",
    "read_properties",
]
