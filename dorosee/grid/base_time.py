"""Forecast issuance slot selection for getVilageFcst queries."""

from collections.abc import Iterator
from datetime import datetime, timedelta

from dorosee.models.common import kst_now, to_kst
from dorosee.models.grid import ForecastWindow

# getVilageFcst is issued eight times a day (published ~10 minutes later).
BASE_TIMES: tuple[str, ...] = (
    "0200", "0500", "0800", "1100", "1400", "1700", "2000", "2300",
)


def get_base_date_time(now: datetime | None = None) -> ForecastWindow:
    """Latest issuance slot at or before now's hour.

    Before 02:00 the latest slot is 23:00 of the previous day.
    """
    now = kst_now() if now is None else to_kst(now)
    hour = now.hour

    if hour < 2:
        yesterday = now.date() - timedelta(days=1)
        return ForecastWindow(base_date=yesterday.strftime("%Y%m%d"), base_time="2300")

    base_time = BASE_TIMES[0]
    for slot in reversed(BASE_TIMES):
        if hour >= int(slot[:2]):
            base_time = slot
            break

    return ForecastWindow(base_date=now.strftime("%Y%m%d"), base_time=base_time)


def previous_window(window: ForecastWindow) -> ForecastWindow:
    """The slot issued immediately before window."""
    idx = BASE_TIMES.index(window.base_time)
    if idx > 0:
        return ForecastWindow(base_date=window.base_date, base_time=BASE_TIMES[idx - 1])
    day = datetime.strptime(window.base_date, "%Y%m%d").date() - timedelta(days=1)
    return ForecastWindow(base_date=day.strftime("%Y%m%d"), base_time=BASE_TIMES[-1])


def iter_base_windows(now: datetime | None = None, count: int = 3) -> Iterator[ForecastWindow]:
    """Yield the current window, then up to count - 1 earlier ones."""
    window = get_base_date_time(now)
    for _ in range(count):
        yield window
        window = previous_window(window)
