"""WGS84 latitude/longitude to KMA forecast grid (Lambert conformal conic).

The KMA short-term forecast API addresses locations by cell indices on a
5 km grid. The grid is a Lambert conformal conic projection with standard
parallels at 30N and 60N and origin at 38N 126E, which sits at cell (43, 136).
"""

import math
from dataclasses import dataclass
from functools import cached_property

from dorosee.models.grid import GridCoordinate

DEGRAD = math.pi / 180.0


@dataclass(frozen=True)
class LambertConformalConic:
    re_km: float  # earth radius
    grid_km: float  # cell spacing
    slat1: float  # standard parallel 1 (degrees)
    slat2: float  # standard parallel 2 (degrees)
    olon: float  # origin longitude (degrees)
    olat: float  # origin latitude (degrees)
    xo: int  # origin cell x
    yo: int  # origin cell y

    @property
    def re(self) -> float:
        return self.re_km / self.grid_km

    @cached_property
    def _cone(self) -> tuple[float, float, float]:
        """Cone constant sn, scale factor sf and origin radius ro."""
        slat1 = self.slat1 * DEGRAD
        slat2 = self.slat2 * DEGRAD
        olat = self.olat * DEGRAD

        sn = math.tan(math.pi * 0.25 + slat2 * 0.5) / math.tan(math.pi * 0.25 + slat1 * 0.5)
        sn = math.log(math.cos(slat1) / math.cos(slat2)) / math.log(sn)
        sf = math.tan(math.pi * 0.25 + slat1 * 0.5)
        sf = math.pow(sf, sn) * math.cos(slat1) / sn
        ro = math.tan(math.pi * 0.25 + olat * 0.5)
        ro = self.re * sf / math.pow(ro, sn)
        return sn, sf, ro

    @property
    def sn(self) -> float:
        return self._cone[0]

    @property
    def sf(self) -> float:
        return self._cone[1]

    @property
    def ro(self) -> float:
        return self._cone[2]

    def to_grid(self, latitude: float, longitude: float) -> GridCoordinate:
        sn, sf, ro = self._cone
        olon = self.olon * DEGRAD

        ra = math.tan(math.pi * 0.25 + latitude * DEGRAD * 0.5)
        ra = self.re * sf / math.pow(ra, sn)
        theta = longitude * DEGRAD - olon
        if theta > math.pi:
            theta -= 2.0 * math.pi
        if theta < -math.pi:
            theta += 2.0 * math.pi
        theta *= sn

        nx = round_half_up(ra * math.sin(theta) + self.xo)
        ny = round_half_up(ro - ra * math.cos(theta) + self.yo)
        return GridCoordinate(nx=nx, ny=ny)


KMA_DFS_PROJECTION = LambertConformalConic(
    re_km=6371.00877,
    grid_km=5.0,
    slat1=30.0,
    slat2=60.0,
    olon=126.0,
    olat=38.0,
    xo=43,
    yo=136,
)


def round_half_up(value: float) -> int:
    """floor(value + 0.5). Not banker's rounding, not truncation."""
    return math.floor(value + 0.5)


def convert_to_grid(latitude: float, longitude: float) -> GridCoordinate:
    """Project a WGS84 coordinate onto the KMA 5 km forecast grid.

    Out-of-range input yields an out-of-range cell; the forecast API decides
    whether a cell is serviceable. NaN or infinite input raises ValueError
    from the math module.
    """
    return KMA_DFS_PROJECTION.to_grid(latitude, longitude)
