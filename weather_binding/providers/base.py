from __future__ import annotations

from typing import Optional

from ..entities import ProviderName


class ProviderError(RuntimeError):
    """Base provider error."""


class WeatherProvider:
    """URL templates of one weather provider.

    Templates may carry the placeholders ``[API_KEY]``, ``[API_KEY_2]``,
    ``[LATITUDE]``, ``[LONGITUDE]``, ``[UNITS]`` and ``[LANGUAGE]``; the
    fetcher fills them in from the configuration before each request.
    """

    name: ProviderName

    def current_url_template(self) -> str:
        raise NotImplementedError

    def forecast_url_template(self) -> Optional[str]:
        """Some providers need a second request for the forecast."""
        return None

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.name})"


__all__ = ["ProviderError", "WeatherProvider"]
