"""Pydantic v2 configuration schema with strict validation."""

from pydantic import BaseModel, Field

from dorosee.config.defaults import (
    DEFAULT_LATITUDE,
    DEFAULT_LONGITUDE,
    KMA_BASE_URL,
)


class KmaConfig(BaseModel):
    model_config = {"extra": "forbid"}

    base_url: str = KMA_BASE_URL
    service_key: str = ""
    num_of_rows: int = Field(default=1000, ge=1)
    page_no: int = Field(default=1, ge=1)
    timeout: float = Field(default=30.0, gt=0.0)
    max_retries: int = Field(default=3, ge=0)
    retry_base_delay: float = Field(default=1.0, ge=0.0)
    max_window_attempts: int = Field(default=3, ge=1)


class LocationConfig(BaseModel):
    model_config = {"extra": "forbid"}

    latitude: float = Field(default=DEFAULT_LATITUDE, ge=-90.0, le=90.0)
    longitude: float = Field(default=DEFAULT_LONGITUDE, ge=-180.0, le=180.0)


class FallbackConfig(BaseModel):
    model_config = {"extra": "forbid"}

    enabled: bool = True


class DoroseeConfig(BaseModel):
    model_config = {"extra": "forbid"}

    kma: KmaConfig = KmaConfig()
    location: LocationConfig = LocationConfig()
    fallback: FallbackConfig = FallbackConfig()
