"""Command to fetch the weather of one configured location."""
from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import asdict
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional, Sequence

import requests

from .config import ConfigurationError, load_config
from .entities import Weather
from .providers import ProviderError
from .services import create_fetcher


logger = logging.getLogger(__name__)


def _json_default(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")
    if isinstance(value, Enum):
        return value.value
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def serialize_weather(weather: Weather) -> str:
    payload = asdict(weather)
    payload["provider"] = weather.provider.value
    return json.dumps(payload, default=_json_default)


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="weather-fetch", description=__doc__)
    parser.add_argument("--config", required=True, help="Path to the binding configuration file")
    parser.add_argument("--location", required=True, help="Location id to fetch")
    parser.add_argument("--log-level", default="WARNING", help="Logging level")
    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.WARNING))

    try:
        config = load_config(args.config)
    except ConfigurationError as exc:
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        return 1

    location = config.get_location_config(args.location)
    if location is None:
        print(f"Unknown location: {args.location}", file=sys.stderr)
        return 1

    try:
        fetcher = create_fetcher(location.provider_name, config)
        weather = fetcher.get_weather(location)
    except (ProviderError, requests.RequestException, ValueError) as exc:
        print(f"Weather request failed: {exc}", file=sys.stderr)
        return 1

    print(serialize_weather(weather))
    if weather.has_error():
        print(f"Weather request failed: {weather.error}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
