"""Tests for forecast issuance slot selection."""

from datetime import UTC, datetime

import pytest

from dorosee.grid.base_time import (
    BASE_TIMES,
    get_base_date_time,
    iter_base_windows,
    previous_window,
)
from dorosee.models.common import KST
from dorosee.models.grid import ForecastWindow


def _kst(*args) -> datetime:
    return datetime(*args, tzinfo=KST)


class TestGetBaseDateTime:
    @pytest.mark.parametrize("slot", BASE_TIMES)
    def test_exact_issuance_hour_selects_slot(self, slot):
        now = _kst(2026, 10, 19, int(slot[:2]), 0)
        assert get_base_date_time(now) == ForecastWindow("20261019", slot)

    def test_inclusive_lower_bound(self):
        assert get_base_date_time(_kst(2026, 10, 19, 11, 0)).base_time == "1100"

    def test_one_minute_before_slot(self):
        assert get_base_date_time(_kst(2026, 10, 19, 10, 59)).base_time == "0800"

    def test_late_evening(self):
        assert get_base_date_time(_kst(2026, 10, 19, 23, 59)) == ForecastWindow(
            "20261019", "2300"
        )

    def test_before_two_uses_yesterday_2300(self):
        assert get_base_date_time(_kst(2026, 10, 19, 1, 0)) == ForecastWindow(
            "20261018", "2300"
        )

    def test_midnight_month_rollover(self):
        assert get_base_date_time(_kst(2026, 3, 1, 0, 30)) == ForecastWindow(
            "20260228", "2300"
        )

    def test_leap_day_rollover(self):
        assert get_base_date_time(_kst(2024, 3, 1, 1, 59)).base_date == "20240229"

    def test_year_rollover(self):
        assert get_base_date_time(_kst(2026, 1, 1, 0, 0)) == ForecastWindow(
            "20251231", "2300"
        )

    def test_two_oclock_is_same_day(self):
        assert get_base_date_time(_kst(2026, 1, 1, 2, 0)) == ForecastWindow(
            "20260101", "0200"
        )

    def test_aware_utc_converted_to_kst(self):
        # 02:00 UTC is 11:00 KST
        now = datetime(2026, 10, 19, 2, 0, tzinfo=UTC)
        assert get_base_date_time(now) == ForecastWindow("20261019", "1100")

    def test_utc_evening_is_next_kst_day(self):
        # 17:30 UTC is 02:30 KST the next day
        now = datetime(2026, 10, 19, 17, 30, tzinfo=UTC)
        assert get_base_date_time(now) == ForecastWindow("20261020", "0200")

    def test_naive_taken_as_kst(self):
        assert get_base_date_time(datetime(2026, 10, 19, 14, 5)).base_time == "1400"

    def test_default_now_is_well_formed(self):
        window = get_base_date_time()
        assert len(window.base_date) == 8 and window.base_date.isdigit()
        assert window.base_time in BASE_TIMES


class TestPreviousWindow:
    def test_same_day(self):
        assert previous_window(ForecastWindow("20261019", "0800")) == ForecastWindow(
            "20261019", "0500"
        )

    def test_first_slot_rolls_to_previous_day(self):
        assert previous_window(ForecastWindow("20261001", "0200")) == ForecastWindow(
            "20260930", "2300"
        )

    def test_unknown_slot_raises(self):
        with pytest.raises(ValueError):
            previous_window(ForecastWindow("20261019", "0900"))


class TestIterBaseWindows:
    def test_walks_back_across_midnight(self):
        windows = list(iter_base_windows(_kst(2026, 10, 19, 3, 0), 3))
        assert windows == [
            ForecastWindow("20261019", "0200"),
            ForecastWindow("20261018", "2300"),
            ForecastWindow("20261018", "2000"),
        ]

    def test_count_one(self):
        windows = list(iter_base_windows(_kst(2026, 10, 19, 12, 0), 1))
        assert windows == [ForecastWindow("20261019", "1100")]
