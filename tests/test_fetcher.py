from __future__ import annotations

import logging
from datetime import datetime, timezone
from decimal import Decimal
from typing import Callable, List, Optional

import pytest
import requests

from weather_binding.config import LocationConfig, ProviderConfig, WeatherConfig
from weather_binding.entities import Forecast, ProviderName, Weather
from weather_binding.providers import WeatherProvider
from weather_binding.services.fetcher import EMPTY_RESPONSE_ERROR, WeatherFetcher


NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
CURRENT_URL = "https://weather.test/current?key=[API_KEY]&lat=[LATITUDE]&lon=[LONGITUDE]"
FORECAST_URL = "https://weather.test/forecast/daily?key=[API_KEY]&lat=[LATITUDE]&lon=[LONGITUDE]"


class TemplateProvider(WeatherProvider):
    def __init__(self, name: ProviderName, current: str, forecast: Optional[str] = None) -> None:
        self.name = name
        self._current = current
        self._forecast = forecast

    def current_url_template(self) -> str:
        return self._current

    def forecast_url_template(self) -> Optional[str]:
        return self._forecast


class RecordingParser:
    def __init__(self, on_parse: Optional[Callable[[str, Weather], None]] = None) -> None:
        self.bodies: List[str] = []
        self.on_parse = on_parse

    def parse_into(self, body: str, weather: Weather) -> None:
        self.bodies.append(body)
        if self.on_parse is not None:
            self.on_parse(body, weather)


class FailingParser:
    def parse_into(self, body: str, weather: Weather) -> None:
        raise ValueError("bad payload")


def make_config(provider: ProviderName = ProviderName.OPENWEATHERMAP) -> WeatherConfig:
    return WeatherConfig(
        providers={provider: ProviderConfig(provider_name=provider, api_key="key-1", api_key_2="key-2")}
    )


def make_location(**overrides) -> LocationConfig:
    values = dict(
        location_id="home",
        latitude=Decimal("46.6142"),
        longitude=Decimal("13.8468"),
        measurement_units="M",
        language="de",
    )
    values.update(overrides)
    return LocationConfig(**values)


def make_fetcher(provider: WeatherProvider, parser, config: Optional[WeatherConfig] = None) -> WeatherFetcher:
    return WeatherFetcher(provider, parser, config or make_config(provider.name), clock=lambda: NOW)


def add_forecasts(count: int) -> Callable[[str, Weather], None]:
    def _parse(body: str, weather: Weather) -> None:
        for day in range(count):
            weather.forecast.append(Forecast(provider=weather.provider, day=day))

    return _parse


def set_error(message: str, response_code: Optional[int] = None) -> Callable[[str, Weather], None]:
    def _parse(body: str, weather: Weather) -> None:
        weather.error = message
        weather.response_code = response_code

    return _parse


def test_prepare_url_substitutes_every_placeholder():
    provider = TemplateProvider(
        ProviderName.OPENWEATHERMAP,
        "https://weather.test/[API_KEY]/[API_KEY_2]?lat=[LATITUDE]&lon=[LONGITUDE]&units=[UNITS]&lang=[LANGUAGE]",
    )
    fetcher = make_fetcher(provider, RecordingParser())

    url = fetcher.prepare_url(provider.current_url_template(), make_location())

    assert url == "https://weather.test/key-1/key-2?lat=46.6142&lon=13.8468&units=M&lang=de"
    for token in ("[API_KEY]", "[API_KEY_2]", "[LATITUDE]", "[LONGITUDE]", "[UNITS]", "[LANGUAGE]"):
        assert token not in url


def test_prepare_url_leaves_tokens_of_missing_location_values():
    provider = TemplateProvider(
        ProviderName.OPENWEATHERMAP,
        "https://weather.test/?lat=[LATITUDE]&lon=[LONGITUDE]&units=[UNITS]&lang=[LANGUAGE]",
    )
    fetcher = make_fetcher(provider, RecordingParser())
    location = make_location(latitude=None, longitude=None, measurement_units=None, language="")

    url = fetcher.prepare_url(provider.current_url_template(), location)

    assert url == "https://weather.test/?lat=[LATITUDE]&lon=[LONGITUDE]&units=[UNITS]&lang="


def test_prepare_url_without_provider_config_keeps_api_keys():
    provider = TemplateProvider(ProviderName.OPENWEATHERMAP, "https://weather.test/[API_KEY]/[API_KEY_2]")
    fetcher = make_fetcher(provider, RecordingParser(), config=WeatherConfig())

    url = fetcher.prepare_url(provider.current_url_template(), make_location())

    assert url == "https://weather.test/[API_KEY]/[API_KEY_2]"


def test_prepare_url_keeps_secondary_key_token_when_not_configured():
    provider = TemplateProvider(ProviderName.OPENWEATHERMAP, "https://weather.test/[API_KEY]/[API_KEY_2]")
    config = WeatherConfig(
        providers={
            ProviderName.OPENWEATHERMAP: ProviderConfig(provider_name=ProviderName.OPENWEATHERMAP, api_key="only")
        }
    )
    fetcher = make_fetcher(provider, RecordingParser(), config=config)

    assert fetcher.prepare_url(provider.current_url_template(), make_location()) == "https://weather.test/only/[API_KEY_2]"


def test_current_and_forecast_requests_use_substituted_urls(requests_mock):
    provider = TemplateProvider(ProviderName.OPENWEATHERMAP, CURRENT_URL, FORECAST_URL)
    parser = RecordingParser()
    requests_mock.get("https://weather.test/current", text='{"current": 1}')
    requests_mock.get("https://weather.test/forecast/daily", text='{"forecast": 1}')

    weather = make_fetcher(provider, parser).get_weather(make_location())

    assert not weather.has_error()
    assert weather.provider is ProviderName.OPENWEATHERMAP
    assert parser.bodies == ['{"current": 1}', '{"forecast": 1}']
    assert [request.url for request in requests_mock.request_history] == [
        "https://weather.test/current?key=key-1&lat=46.6142&lon=13.8468",
        "https://weather.test/forecast/daily?key=key-1&lat=46.6142&lon=13.8468",
    ]


def test_request_uses_fixed_timeout(requests_mock):
    provider = TemplateProvider(ProviderName.OPENWEATHERMAP, CURRENT_URL)
    requests_mock.get("https://weather.test/current", text="{}")

    make_fetcher(provider, RecordingParser()).get_weather(make_location())

    assert requests_mock.last_request.timeout == 15.0


def test_error_after_current_request_skips_forecast(requests_mock):
    provider = TemplateProvider(ProviderName.WEATHERBIT, CURRENT_URL, FORECAST_URL)
    parser = RecordingParser(on_parse=set_error("API key not valid"))
    requests_mock.get("https://weather.test/current", text='{"error": "API key not valid"}')
    requests_mock.get("https://weather.test/forecast/daily", text="{}")

    weather = make_fetcher(provider, parser).get_weather(make_location())

    assert requests_mock.call_count == 1
    assert weather.error == "API key not valid"
    assert weather.condition.last_update is None


def test_weatherbit_daily_forecast_body_renames_data(requests_mock):
    provider = TemplateProvider(ProviderName.WEATHERBIT, CURRENT_URL, FORECAST_URL)
    parser = RecordingParser()
    requests_mock.get("https://weather.test/current", text='{"data":[{"temp":1}]}')
    requests_mock.get("https://weather.test/forecast/daily", text='{"data":[{"data_point":1}]}')

    make_fetcher(provider, parser).get_weather(make_location())

    assert parser.bodies == ['{"data":[{"temp":1}]}', '{"forecast":[{"forecast_point":1}]}']


def test_other_providers_keep_data_in_daily_forecast_body(requests_mock):
    provider = TemplateProvider(ProviderName.FORECASTIO, FORECAST_URL)
    parser = RecordingParser()
    requests_mock.get("https://weather.test/forecast/daily", text='{"data":[{"data_point":1}]}')

    make_fetcher(provider, parser).get_weather(make_location())

    assert parser.bodies == ['{"data":[{"data_point":1}]}']


def test_openweathermap_response_code_200_clears_parser_error(requests_mock):
    provider = TemplateProvider(ProviderName.OPENWEATHERMAP, CURRENT_URL)
    parser = RecordingParser(on_parse=set_error("0.0123", response_code=200))
    requests_mock.get("https://weather.test/current", text='{"cod": "200", "message": 0.0123}')

    weather = make_fetcher(provider, parser).get_weather(make_location())

    assert weather.error is None
    assert weather.condition.last_update == NOW


def test_response_code_200_does_not_clear_error_for_other_providers(requests_mock):
    provider = TemplateProvider(ProviderName.WEATHERBIT, CURRENT_URL)
    parser = RecordingParser(on_parse=set_error("quota exceeded", response_code=200))
    requests_mock.get("https://weather.test/current", text="{}")

    weather = make_fetcher(provider, parser).get_weather(make_location())

    assert weather.error == "quota exceeded"
    assert weather.condition.last_update is None


def test_empty_body_sets_in_band_error(requests_mock, caplog):
    provider = TemplateProvider(ProviderName.OPENWEATHERMAP, CURRENT_URL, FORECAST_URL)
    parser = RecordingParser()
    requests_mock.get("https://weather.test/current", text="  \n ")

    with caplog.at_level(logging.ERROR):
        weather = make_fetcher(provider, parser).get_weather(make_location())

    assert weather.error == EMPTY_RESPONSE_ERROR
    assert parser.bodies == []
    assert requests_mock.call_count == 1
    assert "Can't retrieve weather data" in caplog.text


def test_body_is_trimmed_before_parsing(requests_mock):
    provider = TemplateProvider(ProviderName.OPENWEATHERMAP, CURRENT_URL)
    parser = RecordingParser()
    requests_mock.get("https://weather.test/current", text='\n  {"a": 1}  \n')

    make_fetcher(provider, parser).get_weather(make_location())

    assert parser.bodies == ['{"a": 1}']


def test_success_stamps_condition_and_every_forecast(requests_mock):
    provider = TemplateProvider(ProviderName.OPENWEATHERMAP, CURRENT_URL)
    requests_mock.get("https://weather.test/current", text="{}")
    fetcher = WeatherFetcher(provider, RecordingParser(on_parse=add_forecasts(3)), make_config())

    weather = fetcher.get_weather(make_location())

    stamp = weather.condition.last_update
    assert stamp is not None
    assert stamp.tzinfo is not None
    assert len(weather.forecast) == 3
    assert all(forecast.condition.last_update is stamp for forecast in weather.forecast)


def test_transport_failure_is_recorded_logged_and_raised(requests_mock, caplog):
    provider = TemplateProvider(ProviderName.OPENWEATHERMAP, CURRENT_URL, FORECAST_URL)
    fetcher = make_fetcher(provider, RecordingParser())
    requests_mock.get("https://weather.test/current", exc=requests.exceptions.ConnectTimeout("timed out"))
    weather = Weather(provider=ProviderName.OPENWEATHERMAP)

    with caplog.at_level(logging.ERROR):
        with pytest.raises(requests.exceptions.ConnectTimeout):
            fetcher.execute_request(weather, "https://weather.test/current", make_location())

    assert weather.error == "ConnectTimeout: timed out"
    assert weather.condition.last_update is None
    assert any(record.levelno == logging.ERROR and "timed out" in record.getMessage() for record in caplog.records)


def test_transport_failure_propagates_from_get_weather(requests_mock):
    provider = TemplateProvider(ProviderName.OPENWEATHERMAP, CURRENT_URL, FORECAST_URL)
    requests_mock.get("https://weather.test/current", exc=requests.exceptions.ConnectionError("refused"))
    requests_mock.get("https://weather.test/forecast/daily", text="{}")

    with pytest.raises(requests.exceptions.ConnectionError):
        make_fetcher(provider, RecordingParser()).get_weather(make_location())

    assert requests_mock.call_count == 1


def test_parser_failure_is_recorded_and_raised(requests_mock):
    provider = TemplateProvider(ProviderName.OPENWEATHERMAP, CURRENT_URL)
    fetcher = make_fetcher(provider, FailingParser())
    requests_mock.get("https://weather.test/current", text="not json")
    weather = Weather(provider=ProviderName.OPENWEATHERMAP)

    with pytest.raises(ValueError):
        fetcher.execute_request(weather, "https://weather.test/current", make_location())

    assert weather.error == "ValueError: bad payload"


def test_fetch_is_an_alias_of_get_weather(requests_mock):
    provider = TemplateProvider(ProviderName.OPENWEATHERMAP, CURRENT_URL)
    requests_mock.get("https://weather.test/current", text="{}")

    weather = make_fetcher(provider, RecordingParser()).fetch(make_location())

    assert weather.condition.last_update == NOW
