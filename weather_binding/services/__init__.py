from __future__ import annotations

from .fetcher import EMPTY_RESPONSE_ERROR, RequestConfig, WeatherFetcher, create_fetcher

__all__ = ["EMPTY_RESPONSE_ERROR", "RequestConfig", "WeatherFetcher", "create_fetcher"]
