"""Concurrent temperature aggregation over several providers."""
from __future__ import annotations

import logging
import math
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from typing import Dict, Iterable, List, Tuple

from multiweather.abstractions import WeatherProvider
from multiweather.errors import ConfigurationError


logger = logging.getLogger(__name__)


class TemperatureAggregator:
    """Average the temperature reported by every provider for a city.

    All providers are queried at once, one thread each, and their outcomes are
    consumed in completion order. The result is all-or-nothing: the first
    failure observed is raised as is and the remaining providers are not
    waited for, even if some of them already succeeded. Providers still in
    flight finish in the background and their results are discarded.
    """

    def __init__(self, providers: Iterable[WeatherProvider]) -> None:
        self._providers: Tuple[WeatherProvider, ...] = tuple(providers)

    @property
    def providers(self) -> Tuple[WeatherProvider, ...]:
        return self._providers

    def temperature(self, city: str) -> float:
        """Return the mean temperature for ``city`` in Kelvin."""
        count = len(self._providers)
        if count == 0:
            raise ConfigurationError("no providers configured")

        # fresh pool per call, sized so that every provider starts immediately
        executor = ThreadPoolExecutor(max_workers=count, thread_name_prefix="provider")
        try:
            futures: Dict[Future, WeatherProvider] = {
                executor.submit(provider.temperature, city): provider for provider in self._providers
            }
            readings: List[float] = []
            for future in as_completed(futures):
                error = future.exception()
                if error is not None:
                    logger.warning(
                        "Provider %s failed for %s, skipping %d pending: %s",
                        _provider_name(futures[future]),
                        city,
                        sum(1 for f in futures if not f.done()),
                        error,
                    )
                    raise error
                readings.append(future.result())
        finally:
            executor.shutdown(wait=False, cancel_futures=True)

        # fsum is exact, so the mean does not depend on completion order
        return math.fsum(readings) / count


def _provider_name(provider: WeatherProvider) -> str:
    return getattr(provider, "name", provider.__class__.__name__)


__all__ = ["TemperatureAggregator"]
