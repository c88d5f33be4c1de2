"""Current weather for a coordinate: grid conversion, slot selection, fetch."""

import logging
from datetime import datetime

import httpx

from dorosee.config.defaults import DEFAULT_LATITUDE, DEFAULT_LONGITUDE
from dorosee.grid.base_time import iter_base_windows
from dorosee.grid.cities import location_name
from dorosee.grid.projection import convert_to_grid
from dorosee.ingest.fallback import estimate_weather
from dorosee.ingest.forecast_parser import summarize
from dorosee.ingest.kma_client import KmaClient, KmaError, KmaNoDataError
from dorosee.models.common import kst_now, to_kst, utc_now_iso
from dorosee.models.grid import GridCoordinate
from dorosee.models.weather import ForecastItem, WeatherReport

logger = logging.getLogger(__name__)

SOURCE_KMA = "기상청"


class WeatherService:
    def __init__(self, client: KmaClient | None, max_window_attempts: int = 3):
        self.client = client
        self.max_window_attempts = max_window_attempts

    def get_current_weather(
        self,
        latitude: float = DEFAULT_LATITUDE,
        longitude: float = DEFAULT_LONGITUDE,
        now: datetime | None = None,
    ) -> WeatherReport:
        """Fetch and summarize the KMA forecast for a coordinate.

        A slot with no data yet (publication lag) falls back to the previous
        slot, up to max_window_attempts. Every other failure propagates.
        """
        if self.client is None:
            raise KmaError("KMA client not configured")
        now = kst_now() if now is None else to_kst(now)
        grid = convert_to_grid(latitude, longitude)

        items = self._fetch_latest(grid, now)
        summary = summarize(items, now)
        return WeatherReport(
            temperature=summary["temperature"],
            condition=summary["condition"],
            location=location_name(latitude, longitude),
            source=SOURCE_KMA,
            fetched_at=utc_now_iso(),
            humidity=summary["humidity"],
            wind_speed=summary["wind_speed"],
            precipitation_type=summary["precipitation_type"],
        )

    def get_weather_with_fallback(
        self,
        latitude: float = DEFAULT_LATITUDE,
        longitude: float = DEFAULT_LONGITUDE,
        address: str | None = None,
        now: datetime | None = None,
    ) -> WeatherReport:
        try:
            return self.get_current_weather(latitude, longitude, now)
        except (KmaError, httpx.HTTPError):
            logger.exception(
                "KMA weather failed for (%.4f, %.4f); using estimate",
                latitude, longitude,
            )
            return estimate_weather(
                latitude,
                address=address,
                now=now,
                location_name=location_name(latitude, longitude),
            )

    def _fetch_latest(self, grid: GridCoordinate, now: datetime) -> list[ForecastItem]:
        assert self.client is not None
        last_error: KmaNoDataError | None = None
        for window in iter_base_windows(now, self.max_window_attempts):
            try:
                return self.client.get_vilage_forecast(grid, window)
            except KmaNoDataError as e:
                logger.warning(
                    "No data for base_date=%s base_time=%s, trying previous slot",
                    window.base_date, window.base_time,
                )
                last_error = e

        assert last_error is not None
        raise last_error
