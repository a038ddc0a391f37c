"""Capabilities the aggregator and providers depend on."""
from __future__ import annotations

from typing import Protocol

from multiweather.entities import Location


class WeatherProvider(Protocol):
    """A data source capable of reporting the current temperature of a city."""

    name: str

    def temperature(self, city: str) -> float:
        """Return the current temperature in Kelvin."""
        ...


class LocationResolver(Protocol):
    """Turns a free-form place name into coordinates."""

    def find_city_location(self, city: str) -> Location:
        """Return the coordinates of the best match for ``city``."""
        ...


__all__ = ["WeatherProvider", "LocationResolver"]
