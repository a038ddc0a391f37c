from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Location:
    """Geographic coordinates in decimal degrees."""

    lat: float
    lng: float


__all__ = ["Location"]
