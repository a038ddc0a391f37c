"""Weather Underground conditions provider."""
from __future__ import annotations

from typing import Optional
from urllib.parse import quote

from multiweather.providers.base import HTTPBackend, as_float, dig
from multiweather.units import celsius_to_kelvin


class WeatherUndergroundProvider(HTTPBackend):
    name = "weatherUnderground"
    base_url = "http://api.wunderground.com/api"

    def __init__(self, *, api_key: str, base_url: Optional[str] = None, **kwargs) -> None:
        super().__init__(**kwargs)
        self.api_key = api_key
        self.base_url = (base_url or self.base_url).rstrip("/")

    def temperature(self, city: str) -> float:
        # the key lives in the path, not the query string
        url = f"{self.base_url}/{quote(self.api_key, safe='')}/conditions/q/{quote(city, safe='')}.json"
        data = self._get_json(url)
        celsius = as_float(
            dig(data, "current_observation", "temp_c", source=self.name),
            source=self.name,
            field="current_observation.temp_c",
        )
        kelvin = celsius_to_kelvin(celsius)
        self._log.info("%s: %s: %.2f", self.name, city, kelvin)
        return kelvin


__all__ = ["WeatherUndergroundProvider"]
