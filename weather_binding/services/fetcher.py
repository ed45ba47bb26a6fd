from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Optional, Union

import requests

from ..config import LocationConfig, WeatherConfig
from ..entities import ProviderName, Weather
from ..parsers import MAPPINGS, JsonWeatherParser, WeatherParser
from ..providers import WeatherProvider, get_provider


logger = logging.getLogger(__name__)

EMPTY_RESPONSE_ERROR = "Error: response is empty!"


def _utcnow() -> datetime:
    return datetime.now(tz=timezone.utc)


@dataclass
class RequestConfig:
    timeout: float = 15.0


class WeatherFetcher:
    """Retrieves, parses and returns the weather of one provider.

    The provider supplies the URL templates, the parser turns each response
    body into weather data. One call issues the current conditions request
    and, if the provider has one and nothing failed so far, the forecast
    request.
    """

    def __init__(
        self,
        provider: WeatherProvider,
        parser: WeatherParser,
        config: WeatherConfig,
        session: Optional[requests.Session] = None,
        request_config: Optional[RequestConfig] = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.provider = provider
        self.parser = parser
        self.config = config
        self.request_config = request_config or RequestConfig()
        self.session = session or requests.Session()
        self._clock = clock
        self._log = logging.getLogger(self.__class__.__name__)

    # Public API ---------------------------------------------------------
    def get_weather(self, location: LocationConfig) -> Weather:
        weather = Weather(provider=self.provider.name)
        weather = self.execute_request(
            weather, self.prepare_url(self.provider.current_url_template(), location), location
        )

        forecast_template = self.provider.forecast_url_template()
        if forecast_template is not None and not weather.has_error():
            weather = self.execute_request(weather, self.prepare_url(forecast_template, location), location)

        if self._log.isEnabledFor(logging.DEBUG):
            self._log.debug("%s[%s]: %s", weather.provider, location.location_id, weather)
            for forecast in weather.forecast:
                self._log.debug("%s[%s]: %s", weather.provider, location.location_id, forecast)
        return weather

    fetch = get_weather

    def prepare_url(self, url: str, location: LocationConfig) -> str:
        """Fills the placeholders of a URL template; unknown tokens stay as they are."""
        provider_config = self.config.get_provider_config(self.provider.name)
        if provider_config is not None:
            url = _replace(url, "[API_KEY]", provider_config.api_key)
            url = _replace(url, "[API_KEY_2]", provider_config.api_key_2)

        if location.latitude is not None:
            url = _replace(url, "[LATITUDE]", str(location.latitude))
        if location.longitude is not None:
            url = _replace(url, "[LONGITUDE]", str(location.longitude))
        if location.measurement_units is not None:
            url = _replace(url, "[UNITS]", location.measurement_units)

        return _replace(url, "[LANGUAGE]", location.language)

    def execute_request(self, weather: Weather, url: str, location: LocationConfig) -> Weather:
        """Runs one request phase on ``weather`` and hands it back.

        Request and parser failures are recorded on the weather and re-raised.
        """
        provider = weather.provider
        try:
            self._log.debug("%s[%s]: request : %s", provider, location.location_id, url)
            response = self.session.request("GET", url, timeout=self.request_config.timeout)
            if not response.ok:
                self._log.warning(
                    "%s[%s]: provider returned HTTP %s", provider, location.location_id, response.status_code
                )
            body = response.text.strip()

            # current and daily forecast share the same layout
            if provider is ProviderName.WEATHERBIT and "forecast/daily" in url:
                body = body.replace("data", "forecast")

            if self._log.isEnabledFor(logging.DEBUG):
                self._log.debug(
                    "%s[%s]: response: %s", provider, location.location_id, body.replace("\n", "").strip()
                )

            if body:
                self.parser.parse_into(body, weather)

            if provider is ProviderName.OPENWEATHERMAP and weather.response_code == 200:
                weather.error = None

            if not weather.has_error() and not body:
                weather.error = EMPTY_RESPONSE_ERROR

            if weather.has_error():
                self._log.error(
                    "%s[%s]: Can't retrieve weather data: %s", provider, location.location_id, weather.error
                )
            else:
                self._set_last_update(weather)
        except Exception as exc:
            weather.error = f"{type(exc).__name__}: {exc}"
            self._log.error("%s: %s", provider, exc, exc_info=exc)
            raise
        return weather

    # Helpers ------------------------------------------------------------
    def _set_last_update(self, weather: Weather) -> None:
        now = self._clock()
        weather.condition.last_update = now
        for forecast in weather.forecast:
            forecast.condition.last_update = now


def _replace(text: str, token: str, value: Optional[str]) -> str:
    if value is None:
        return text
    return text.replace(token, value)


def create_fetcher(
    provider_name: Union[ProviderName, str],
    config: WeatherConfig,
    session: Optional[requests.Session] = None,
    parser: Optional[WeatherParser] = None,
    request_config: Optional[RequestConfig] = None,
) -> WeatherFetcher:
    """Builds a fetcher for a provider, parsing with its JSON mapping by default."""
    provider = get_provider(provider_name)
    if parser is None:
        parser = JsonWeatherParser(MAPPINGS[provider.name])
    logger.debug("Created fetcher for %s", provider.name)
    return WeatherFetcher(provider, parser, config, session=session, request_config=request_config)


__all__ = ["EMPTY_RESPONSE_ERROR", "RequestConfig", "WeatherFetcher", "create_fetcher"]
