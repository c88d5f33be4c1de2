"""Parse getVilageFcst items into a current-conditions summary."""

import logging
from datetime import datetime

from dorosee.models.common import PrecipitationType, SkyStatus, to_kst
from dorosee.models.weather import ForecastItem

logger = logging.getLogger(__name__)

DEFAULT_TEMPERATURE = 20
DEFAULT_HUMIDITY = 50
DEFAULT_WIND_SPEED = 0.0

PRECIPITATION_LABELS: dict[int, str] = {
    PrecipitationType.NONE: "없음",
    PrecipitationType.RAIN: "비",
    PrecipitationType.RAIN_SNOW: "비/눈",
    PrecipitationType.SNOW: "눈",
    PrecipitationType.SHOWER: "소나기",
}

SKY_LABELS: dict[int, str] = {
    SkyStatus.CLEAR: "맑음",
    SkyStatus.PARTLY_CLOUDY: "구름많음",
    SkyStatus.CLOUDY: "흐림",
}


def parse_items(raw_items: list[dict]) -> list[ForecastItem]:
    items: list[ForecastItem] = []
    for raw in raw_items:
        try:
            items.append(
                ForecastItem(
                    category=str(raw["category"]),
                    fcst_date=str(raw["fcstDate"]),
                    fcst_time=str(raw["fcstTime"]),
                    fcst_value=str(raw["fcstValue"]),
                    base_date=str(raw.get("baseDate", "")),
                    base_time=str(raw.get("baseTime", "")),
                    nx=int(raw.get("nx", 0)),
                    ny=int(raw.get("ny", 0)),
                )
            )
        except (KeyError, TypeError, ValueError):
            logger.warning("Skipping malformed forecast item: %r", raw)
    return items


def summarize(items: list[ForecastItem], now: datetime) -> dict:
    """Pick the first value per category at or after the current hour.

    Fractional TMP and REH values are truncated toward zero.
    """
    target = to_kst(now).strftime("%Y%m%d%H00")

    temperature: int | None = None
    sky: int | None = None
    pty: int | None = None
    humidity: int | None = None
    wind_speed: float | None = None

    for item in items:
        if item.fcst_timestamp < target:
            continue
        try:
            if item.category == "TMP" and temperature is None:
                temperature = int(float(item.fcst_value))
            elif item.category == "SKY" and sky is None:
                sky = int(item.fcst_value)
            elif item.category == "PTY" and pty is None:
                pty = int(item.fcst_value)
            elif item.category == "REH" and humidity is None:
                humidity = int(float(item.fcst_value))
            elif item.category == "WSD" and wind_speed is None:
                wind_speed = float(item.fcst_value)
        except ValueError:
            logger.warning("Unparseable %s value: %r", item.category, item.fcst_value)

    return {
        "temperature": temperature if temperature is not None else DEFAULT_TEMPERATURE,
        "condition": weather_condition(pty, sky),
        "humidity": humidity if humidity is not None else DEFAULT_HUMIDITY,
        "wind_speed": wind_speed if wind_speed is not None else DEFAULT_WIND_SPEED,
        "precipitation_type": precipitation_type(pty),
    }


def weather_condition(pty: int | None, sky: int | None) -> str:
    """Precipitation type wins over sky state."""
    if pty is not None and pty > 0:
        return PRECIPITATION_LABELS.get(pty, "비")
    if sky is not None:
        return SKY_LABELS.get(sky, "맑음")
    return "맑음"


def precipitation_type(pty: int | None) -> str:
    if pty is None:
        return "없음"
    return PRECIPITATION_LABELS.get(pty, "없음")
