"""Estimated weather for when the KMA API is unusable."""

from datetime import datetime

from dorosee.grid.cities import UNKNOWN_LOCATION
from dorosee.models.common import kst_now, to_kst, utc_now_iso
from dorosee.models.weather import WeatherReport

SOURCE_LOCATION_TABLE = "지역별 데이터"
SOURCE_SEASONAL = "계절별 추정"

# Keyword -> (temperature, condition). Order matters: first match wins.
LOCATION_WEATHER: tuple[tuple[str, int, str], ...] = (
    ("서울", 23, "맑음"),
    ("강남", 24, "구름 조금"),
    ("홍대", 22, "맑음"),
    ("명동", 25, "맑음"),
    ("부산", 26, "맑음"),
    ("해운대", 27, "맑음"),
    ("대구", 25, "구름 조금"),
    ("인천", 22, "구름 많음"),
    ("광주", 24, "맑음"),
)


def location_based_weather(address: str | None) -> WeatherReport | None:
    if not address:
        return None
    for keyword, temp, condition in LOCATION_WEATHER:
        if keyword in address:
            return WeatherReport(
                temperature=temp,
                condition=condition,
                location=keyword,
                source=SOURCE_LOCATION_TABLE,
                fetched_at=utc_now_iso(),
            )
    return None


def seasonal_weather(
    latitude: float, now: datetime | None = None, location_name: str | None = None
) -> WeatherReport:
    """Rough temperature from latitude band, season and time of day."""
    now = kst_now() if now is None else to_kst(now)
    month, hour = now.month, now.hour

    temp = 20
    if latitude > 38:
        temp -= 3
    if latitude < 35:
        temp += 3

    if month == 12 or month <= 2:
        temp -= 10
        condition = "흐림"
    elif month <= 5:
        condition = "맑음"
    elif month <= 8:
        temp += 8
        condition = "맑음"
    else:
        temp -= 2
        condition = "맑음"

    if 6 <= hour <= 12:
        temp += 2
    elif 13 <= hour <= 18:
        temp += 5
    elif 19 <= hour <= 21:
        temp += 1
    else:
        temp -= 3

    return WeatherReport(
        temperature=temp,
        condition=condition,
        location=location_name or UNKNOWN_LOCATION,
        source=SOURCE_SEASONAL,
        fetched_at=utc_now_iso(),
    )


def estimate_weather(
    latitude: float,
    address: str | None = None,
    now: datetime | None = None,
    location_name: str | None = None,
) -> WeatherReport:
    report = location_based_weather(address)
    if report is not None:
        return report
    return seasonal_weather(latitude, now, location_name)
