"""Coordinate and forecast-window value types."""

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class GeographicCoordinate:
    latitude: float  # degrees, WGS84
    longitude: float  # degrees, WGS84

    def is_valid(self) -> bool:
        """True when both components are finite and within range."""
        return (
            math.isfinite(self.latitude)
            and math.isfinite(self.longitude)
            and -90.0 <= self.latitude <= 90.0
            and -180.0 <= self.longitude <= 180.0
        )


@dataclass(frozen=True)
class GridCoordinate:
    nx: int
    ny: int

    def distance_to(self, other: "GridCoordinate") -> float:
        """Euclidean distance in grid cells."""
        return math.hypot(self.nx - other.nx, self.ny - other.ny)


@dataclass(frozen=True)
class ForecastWindow:
    base_date: str  # YYYYMMDD
    base_time: str  # HHMM, one of the issuance slots
