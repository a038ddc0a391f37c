"""OpenWeatherMap current weather provider."""
from __future__ import annotations

from typing import Optional

from multiweather.providers.base import HTTPBackend, as_float, dig


class OpenWeatherMapProvider(HTTPBackend):
    """Queries the current weather endpoint by city name.

    The endpoint reports ``main.temp`` in Kelvin when no ``units`` parameter
    is sent, so no conversion is needed.
    """

    name = "openWeatherMap"
    base_url = "http://api.openweathermap.org/data/2.5/weather"

    def __init__(self, *, api_key: Optional[str] = None, base_url: Optional[str] = None, **kwargs) -> None:
        super().__init__(**kwargs)
        self.api_key = api_key
        self.base_url = base_url or self.base_url

    def temperature(self, city: str) -> float:
        params = {"q": city}
        if self.api_key:
            params["appid"] = self.api_key
        data = self._get_json(self.base_url, params=params)
        kelvin = as_float(dig(data, "main", "temp", source=self.name), source=self.name, field="main.temp")
        self._log.info("%s: %s: %.2f", self.name, city, kelvin)
        return kelvin


__all__ = ["OpenWeatherMapProvider"]
