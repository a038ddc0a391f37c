"""Exception hierarchy shared by providers, resolvers and the aggregator."""
from __future__ import annotations

from typing import Optional


class WeatherError(RuntimeError):
    """Base error for the multiweather package."""


class ProviderError(WeatherError):
    """Raised when a provider or location resolver cannot produce a value."""


class TransportError(ProviderError):
    """Network level failure: connection refused, timeout, DNS."""


class UpstreamFormatError(ProviderError):
    """The upstream body could not be mapped onto the expected shape."""


class UpstreamStatusError(ProviderError):
    """The upstream answered with a non-success HTTP status."""

    def __init__(self, status_code: int, message: Optional[str] = None) -> None:
        super().__init__(message or f"HTTP {status_code}")
        self.status_code = status_code


class ConfigurationError(WeatherError):
    """The aggregator was asked for a value without any providers."""


__all__ = [
    "WeatherError",
    "ProviderError",
    "TransportError",
    "UpstreamFormatError",
    "UpstreamStatusError",
    "ConfigurationError",
]
