"""REST API views for aggregated temperatures."""
from __future__ import annotations

import logging
import time
from functools import lru_cache
from typing import Any, Dict

from django.conf import settings
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from multiweather.geocoding import GoogleGeocoder
from multiweather.providers.base import RequestConfig
from multiweather.providers.forecastio import ForecastIoProvider
from multiweather.providers.openweathermap import OpenWeatherMapProvider
from multiweather.providers.wunderground import WeatherUndergroundProvider
from multiweather.services.aggregator import TemperatureAggregator


logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_aggregator() -> TemperatureAggregator:
    request_config = RequestConfig(timeout=settings.WEATHER_PROVIDER_TIMEOUT)
    providers = (
        OpenWeatherMapProvider(api_key=settings.OPENWEATHERMAP_API_KEY or None, request_config=request_config),
        WeatherUndergroundProvider(api_key=settings.WUNDERGROUND_API_KEY, request_config=request_config),
        ForecastIoProvider(
            api_key=settings.FORECASTIO_API_KEY,
            resolver=GoogleGeocoder(api_key=settings.GOOGLE_GEOCODE_API_KEY or None, request_config=request_config),
            request_config=request_config,
        ),
    )
    return TemperatureAggregator(providers)


def measure(aggregator: TemperatureAggregator, city: str) -> Dict[str, Any]:
    """Run the aggregator and build the response payload."""
    begin = time.monotonic()
    temp = aggregator.temperature(city)
    return {
        "city": city,
        "temp": temp,
        "took": f"{time.monotonic() - begin:.6f}s",
    }


class WeatherView(APIView):
    """Return the averaged temperature (Kelvin) for the city in the path."""

    permission_classes = [AllowAny]

    def get(self, request, city: str = "", *args, **kwargs):  # noqa: D401
        if not city:
            return Response({"detail": "city is required"}, status=status.HTTP_400_BAD_REQUEST)

        try:
            payload = measure(get_aggregator(), city)
        except Exception as exc:  # noqa: BLE001 - every aggregator failure is a 500
            logger.error("Temperature lookup for %s failed: %s", city, exc)
            return Response({"detail": str(exc)}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
        return Response(payload, status=status.HTTP_200_OK)
