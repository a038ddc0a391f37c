from __future__ import annotations

import threading
import time

import pytest

from multiweather.errors import ConfigurationError, TransportError, UpstreamFormatError
from multiweather.services.aggregator import TemperatureAggregator


class _FixedProvider:
    def __init__(self, kelvin: float, delay: float = 0.0, name: str = "fixed") -> None:
        self.kelvin = kelvin
        self.delay = delay
        self.name = name
        self.calls = 0
        self._lock = threading.Lock()

    def temperature(self, city: str) -> float:
        with self._lock:
            self.calls += 1
        if self.delay:
            time.sleep(self.delay)
        return self.kelvin


class _FailingProvider:
    name = "failing"

    def __init__(self, error: Exception, delay: float = 0.0) -> None:
        self.error = error
        self.delay = delay

    def temperature(self, city: str) -> float:
        if self.delay:
            time.sleep(self.delay)
        raise self.error


class _BlockedProvider:
    """Succeeds only once ``release`` is set."""

    name = "blocked"

    def __init__(self, kelvin: float = 300.0) -> None:
        self.kelvin = kelvin
        self.release = threading.Event()
        self.finished = threading.Event()

    def temperature(self, city: str) -> float:
        self.release.wait(timeout=5)
        self.finished.set()
        return self.kelvin


class _BarrierProvider:
    """Only returns when every provider sharing the barrier is running."""

    name = "barrier"

    def __init__(self, barrier: threading.Barrier, kelvin: float) -> None:
        self.barrier = barrier
        self.kelvin = kelvin

    def temperature(self, city: str) -> float:
        self.barrier.wait()
        return self.kelvin


def test_averages_two_providers() -> None:
    aggregator = TemperatureAggregator([_FixedProvider(280), _FixedProvider(290)])

    assert aggregator.temperature("new york") == pytest.approx(285.0)


def test_average_ignores_completion_order() -> None:
    aggregator = TemperatureAggregator(
        [
            _FixedProvider(270.0, delay=0.15),
            _FixedProvider(280.0, delay=0.0),
            _FixedProvider(300.0, delay=0.05),
        ]
    )

    assert aggregator.temperature("oslo") == pytest.approx(850.0 / 3)


def test_single_provider_returns_its_value() -> None:
    assert TemperatureAggregator([_FixedProvider(273.15)]).temperature("x") == pytest.approx(273.15)


def test_duplicate_providers_are_independent() -> None:
    provider = _FixedProvider(290.0)
    aggregator = TemperatureAggregator([provider, provider, _FixedProvider(287.0)])

    assert aggregator.temperature("rome") == pytest.approx(289.0)
    assert provider.calls == 2


def test_repeated_calls_are_stable() -> None:
    aggregator = TemperatureAggregator([_FixedProvider(281.3), _FixedProvider(279.9), _FixedProvider(290.2)])

    results = {aggregator.temperature("lisbon") for _ in range(5)}

    assert len(results) == 1


def test_mean_is_exact_whatever_the_completion_order() -> None:
    readings = (281.3, 279.9, 290.2)
    forward = TemperatureAggregator([_FixedProvider(k, delay=0.05 * i) for i, k in enumerate(readings)])
    backward = TemperatureAggregator([_FixedProvider(k, delay=0.05 * (2 - i)) for i, k in enumerate(readings)])

    assert forward.temperature("lisbon") == backward.temperature("lisbon") == 283.8


def test_failure_is_raised_verbatim() -> None:
    error = TransportError("openWeatherMap: timeout")
    aggregator = TemperatureAggregator([_FixedProvider(290.0), _FailingProvider(error)])

    with pytest.raises(TransportError) as excinfo:
        aggregator.temperature("paris")

    assert excinfo.value is error


def test_one_failure_fails_the_aggregate_even_after_successes() -> None:
    error = UpstreamFormatError("forecastIo: missing currently.temperature")
    aggregator = TemperatureAggregator(
        [_FixedProvider(290.0), _FixedProvider(291.0), _FailingProvider(error, delay=0.1)]
    )

    with pytest.raises(UpstreamFormatError) as excinfo:
        aggregator.temperature("madrid")

    assert excinfo.value is error


def test_first_observed_failure_wins() -> None:
    fast = TransportError("fast")
    slow = TransportError("slow")
    aggregator = TemperatureAggregator([_FailingProvider(slow, delay=0.5), _FailingProvider(fast)])

    with pytest.raises(TransportError) as excinfo:
        aggregator.temperature("vienna")

    assert excinfo.value is fast


def test_fast_failure_does_not_wait_for_slow_provider() -> None:
    blocked = _BlockedProvider()
    error = TransportError("connection refused")
    aggregator = TemperatureAggregator([blocked, _FailingProvider(error, delay=0.01)])

    try:
        with pytest.raises(TransportError):
            aggregator.temperature("tokyo")
        assert not blocked.finished.is_set()
    finally:
        blocked.release.set()

    assert blocked.finished.wait(timeout=5)


def test_fast_failure_latency_is_bounded_by_failing_provider() -> None:
    aggregator = TemperatureAggregator(
        [_FixedProvider(290.0, delay=1.5), _FailingProvider(TransportError("dns"), delay=0.05)]
    )

    start = time.monotonic()
    with pytest.raises(TransportError):
        aggregator.temperature("cairo")

    assert time.monotonic() - start < 1.0


def test_providers_run_concurrently() -> None:
    barrier = threading.Barrier(3, timeout=5)
    aggregator = TemperatureAggregator([_BarrierProvider(barrier, k) for k in (280.0, 285.0, 290.0)])

    assert aggregator.temperature("sydney") == pytest.approx(285.0)


def test_latency_is_bounded_by_slowest_provider() -> None:
    aggregator = TemperatureAggregator(
        [_FixedProvider(280.0, delay=0.4), _FixedProvider(285.0, delay=0.5), _FixedProvider(290.0, delay=0.6)]
    )

    start = time.monotonic()
    result = aggregator.temperature("lima")
    elapsed = time.monotonic() - start

    assert result == pytest.approx(285.0)
    assert elapsed < 1.2


def test_no_providers_is_a_configuration_error() -> None:
    aggregator = TemperatureAggregator([])

    with pytest.raises(ConfigurationError):
        aggregator.temperature("anywhere")


def test_providers_are_frozen_at_construction() -> None:
    providers = [_FixedProvider(280.0)]
    aggregator = TemperatureAggregator(providers)
    providers.append(_FixedProvider(300.0))

    assert len(aggregator.providers) == 1
    assert aggregator.temperature("x") == pytest.approx(280.0)
