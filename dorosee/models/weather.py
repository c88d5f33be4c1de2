"""KMA short-term forecast data models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ForecastItem:
    category: str
    fcst_date: str  # YYYYMMDD
    fcst_time: str  # HHMM
    fcst_value: str
    base_date: str
    base_time: str
    nx: int
    ny: int

    @property
    def fcst_timestamp(self) -> str:
        return f"{self.fcst_date}{self.fcst_time}"


@dataclass(frozen=True)
class WeatherReport:
    temperature: int
    condition: str
    location: str
    source: str
    fetched_at: str
    humidity: int | None = None
    wind_speed: float | None = None
    precipitation_type: str | None = None
