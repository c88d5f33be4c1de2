"""Tests for the fallback weather estimator."""

from datetime import datetime

from dorosee.ingest.fallback import (
    SOURCE_LOCATION_TABLE,
    SOURCE_SEASONAL,
    estimate_weather,
    location_based_weather,
    seasonal_weather,
)
from dorosee.models.common import KST


def _kst(*args) -> datetime:
    return datetime(*args, tzinfo=KST)


class TestLocationBasedWeather:
    def test_keyword_match(self):
        report = location_based_weather("부산광역시 해운대구 우동")
        assert report is not None
        # 부산 is listed before 해운대
        assert report.location == "부산"
        assert report.temperature == 26
        assert report.source == SOURCE_LOCATION_TABLE

    def test_no_match(self):
        assert location_based_weather("제주특별자치도 제주시") is None

    def test_empty(self):
        assert location_based_weather(None) is None
        assert location_based_weather("") is None


class TestSeasonalWeather:
    def test_summer_afternoon_seoul(self):
        report = seasonal_weather(37.5, _kst(2026, 7, 15, 15, 0), "서울")
        assert report.temperature == 20 + 8 + 5
        assert report.condition == "맑음"
        assert report.location == "서울"
        assert report.source == SOURCE_SEASONAL

    def test_winter_night_north(self):
        report = seasonal_weather(38.5, _kst(2026, 1, 10, 2, 0))
        assert report.temperature == 20 - 3 - 10 - 3
        assert report.condition == "흐림"
        assert report.location == "현재 위치"

    def test_autumn_evening_south(self):
        report = seasonal_weather(33.5, _kst(2026, 10, 19, 20, 0))
        assert report.temperature == 20 + 3 - 2 + 1

    def test_spring_morning(self):
        assert seasonal_weather(36.0, _kst(2026, 4, 1, 9, 0)).temperature == 22

    def test_deterministic(self):
        now = _kst(2026, 10, 19, 20, 0)
        assert seasonal_weather(36.0, now).temperature == seasonal_weather(36.0, now).temperature


class TestEstimateWeather:
    def test_prefers_location_table(self):
        report = estimate_weather(37.5, address="서울특별시 중구", now=_kst(2026, 1, 1, 3, 0))
        assert report.source == SOURCE_LOCATION_TABLE

    def test_seasonal_fallback(self):
        report = estimate_weather(
            36.0, address="세종시", now=_kst(2026, 4, 1, 9, 0), location_name="세종"
        )
        assert report.source == SOURCE_SEASONAL
        assert report.location == "세종"
