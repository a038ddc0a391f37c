"""Forecast.io provider.

Forecast.io only answers for coordinates, so the city is resolved through a
:class:`~multiweather.abstractions.LocationResolver` first. The response is a
large, loosely typed document; only ``currently.temperature`` (Fahrenheit) is
read from it.
"""
from __future__ import annotations

from typing import Optional
from urllib.parse import quote

from multiweather.abstractions import LocationResolver
from multiweather.entities import Location
from multiweather.providers.base import HTTPBackend, as_float, dig
from multiweather.units import fahrenheit_to_kelvin


def format_coordinates(location: Location) -> str:
    """Render ``lat,lng`` with the shortest repr that round-trips."""
    return f"{float(location.lat)!r},{float(location.lng)!r}"


class ForecastIoProvider(HTTPBackend):
    name = "forecastIo"
    base_url = "https://api.forecast.io/forecast"

    def __init__(
        self,
        *,
        api_key: str,
        resolver: LocationResolver,
        base_url: Optional[str] = None,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self.api_key = api_key
        self.resolver = resolver
        self.base_url = (base_url or self.base_url).rstrip("/")

    def temperature(self, city: str) -> float:
        location = self.resolver.find_city_location(city)
        url = f"{self.base_url}/{quote(self.api_key, safe='')}/{format_coordinates(location)}"
        data = self._get_json(url)
        fahrenheit = as_float(
            dig(data, "currently", "temperature", source=self.name),
            source=self.name,
            field="currently.temperature",
        )
        kelvin = fahrenheit_to_kelvin(fahrenheit)
        self._log.info("%s: %s: %.2f", self.name, city, kelvin)
        return kelvin


__all__ = ["ForecastIoProvider", "format_coordinates"]
