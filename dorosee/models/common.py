"""Common types and clock helpers shared across models."""

from datetime import UTC, datetime, timedelta, timezone
from enum import IntEnum

# KMA issues every product on Korea Standard Time.
KST = timezone(timedelta(hours=9), "KST")


class PrecipitationType(IntEnum):
    """KMA PTY codes."""

    NONE = 0
    RAIN = 1
    RAIN_SNOW = 2
    SNOW = 3
    SHOWER = 4


class SkyStatus(IntEnum):
    """KMA SKY codes."""

    CLEAR = 1
    PARTLY_CLOUDY = 3
    CLOUDY = 4


def utc_now() -> datetime:
    return datetime.now(UTC)


def utc_now_iso() -> str:
    return utc_now().isoformat()


def kst_now() -> datetime:
    return datetime.now(KST)


def to_kst(dt: datetime) -> datetime:
    """Return the KST wall-clock view of dt. Naive values are taken as KST."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=KST)
    return dt.astimezone(KST)
