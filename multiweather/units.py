"""Temperature conversions.

Every provider reports Kelvin, so these helpers only go one way.
"""
from __future__ import annotations

ZERO_CELSIUS_K = 273.15


def celsius_to_kelvin(value: float) -> float:
    return value + ZERO_CELSIUS_K


def fahrenheit_to_kelvin(value: float) -> float:
    return (value - 32) / 1.8 + ZERO_CELSIUS_K


__all__ = ["ZERO_CELSIUS_K", "celsius_to_kelvin", "fahrenheit_to_kelvin"]
