"""Precomputed grid cells of major cities, for labelling a coordinate.

The literals are carried over as published alongside the chatbot. Only the
Seoul entry is confirmed against convert_to_grid (City Hall, 37.5665N
126.9780E); the rest come from an undocumented external table and are not
re-derived, so some may differ by a cell from a fresh projection.
"""

from collections.abc import Mapping
from types import MappingProxyType

from dorosee.grid.projection import convert_to_grid
from dorosee.models.grid import GridCoordinate

UNKNOWN_LOCATION = "현재 위치"

CITY_GRID_COORDS: Mapping[str, GridCoordinate] = MappingProxyType({
    "서울": GridCoordinate(nx=60, ny=127),
    "부산": GridCoordinate(nx=98, ny=76),
    "대구": GridCoordinate(nx=89, ny=90),
    "인천": GridCoordinate(nx=55, ny=124),
    "광주": GridCoordinate(nx=58, ny=74),
    "대전": GridCoordinate(nx=67, ny=100),
    "울산": GridCoordinate(nx=102, ny=84),
    "세종": GridCoordinate(nx=66, ny=103),
    "강남구": GridCoordinate(nx=61, ny=126),
    "홍대입구역": GridCoordinate(nx=59, ny=127),
    "명동": GridCoordinate(nx=60, ny=127),
})


def get_city_grid_coords() -> Mapping[str, GridCoordinate]:
    return CITY_GRID_COORDS


def nearest_city(
    grid: GridCoordinate, table: Mapping[str, GridCoordinate] | None = None
) -> str | None:
    """Closest city by Euclidean distance in grid cells.

    Ties keep the earlier table entry, so Seoul's cell yields 서울 rather
    than 명동.
    """
    if table is None:
        table = CITY_GRID_COORDS

    closest: str | None = None
    min_distance = float("inf")
    for name, coords in table.items():
        distance = coords.distance_to(grid)
        if distance < min_distance:
            min_distance = distance
            closest = name
    return closest


def location_name(
    latitude: float,
    longitude: float,
    table: Mapping[str, GridCoordinate] | None = None,
) -> str:
    name = nearest_city(convert_to_grid(latitude, longitude), table)
    return name if name is not None else UNKNOWN_LOCATION
