"""Google Maps geocoding backed location resolver."""
from __future__ import annotations

from typing import Optional, Sequence

from multiweather.entities import Location
from multiweather.errors import UpstreamFormatError
from multiweather.providers.base import HTTPBackend, as_float, dig


class GoogleGeocoder(HTTPBackend):
    """Resolve a city through the Google geocoding API.

    Only the first entry of ``results`` is considered; its
    ``geometry.location`` object carries ``lat`` and ``lng``.
    """

    name = "googleGeoCode"
    base_url = "https://maps.googleapis.com/maps/api/geocode/json"

    def __init__(self, *, api_key: Optional[str] = None, base_url: Optional[str] = None, **kwargs) -> None:
        super().__init__(**kwargs)
        self.api_key = api_key
        self.base_url = base_url or self.base_url

    def find_city_location(self, city: str) -> Location:
        params = {"address": city, "components": "country"}
        if self.api_key:
            params["key"] = self.api_key
        data = self._get_json(self.base_url, params=params)

        results = dig(data, "results", source=self.name)
        if not isinstance(results, Sequence) or isinstance(results, str):
            raise UpstreamFormatError(f"{self.name}: results is not a list")
        if not results:
            raise UpstreamFormatError(f"{self.name}: no results for {city!r}")

        location = dig(results[0], "geometry", "location", source=self.name)
        lat = as_float(dig(location, "lat", source=self.name), source=self.name, field="lat")
        lng = as_float(dig(location, "lng", source=self.name), source=self.name, field="lng")
        self._log.debug("%s: %s: %s,%s", self.name, city, lat, lng)
        return Location(lat=lat, lng=lng)


__all__ = ["GoogleGeocoder"]
