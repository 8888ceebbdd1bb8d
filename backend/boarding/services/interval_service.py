"""Day-granularity helpers over inclusive reservation date ranges.

Every comparison happens on calendar dates: datetimes are truncated to their
date first, so a stay saved at 14:30 still starts on that day.
"""
from __future__ import annotations

from datetime import date, datetime, timedelta, tzinfo
from typing import TYPE_CHECKING
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from boarding.core.config import get_settings

if TYPE_CHECKING:
    from boarding.schemas.reservation import ReservationBase

ONE_DAY = timedelta(days=1)


def clinic_timezone() -> ZoneInfo | None:
    """Zone whose midnight starts a boarding day; ``None`` means the host's local zone."""
    name = get_settings().clinic_timezone
    if not name:
        return None
    try:
        return ZoneInfo(name)
    except ZoneInfoNotFoundError:  # pragma: no cover - depends on system tz database
        return ZoneInfo("UTC")


def normalize_day(value: date | datetime | str, tz: tzinfo | None = None) -> date:
    """Return the calendar date of ``value`` with any time of day removed.

    Timezone-aware values are first converted to ``tz`` (default
    :func:`clinic_timezone`), so a UTC timestamp of local midnight lands on
    the local day it was written for.
    """
    if isinstance(value, str):
        text = value.strip()
        if len(text) <= 10:
            return date.fromisoformat(text)
        value = datetime.fromisoformat(text.replace("Z", "+00:00"))
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(tz or clinic_timezone())
        return value.date()
    return value


def is_same_calendar_day(a: date | datetime, b: date | datetime) -> bool:
    return normalize_day(a) == normalize_day(b)


def occupies_day(reservation: ReservationBase, day: date | datetime) -> bool:
    """True when ``day`` falls inside the stay, both boundary days included."""
    target = normalize_day(day)
    return normalize_day(reservation.start_date) <= target <= normalize_day(
        reservation.end_date
    )


def is_multi_day(reservation: ReservationBase) -> bool:
    return normalize_day(reservation.start_date) != normalize_day(reservation.end_date)


def stay_length(reservation: ReservationBase) -> int:
    """Number of calendar days the stay occupies."""
    start = normalize_day(reservation.start_date)
    end = normalize_day(reservation.end_date)
    return (end - start).days + 1


def occupied_days(reservation: ReservationBase) -> list[date]:
    start = normalize_day(reservation.start_date)
    return [start + ONE_DAY * offset for offset in range(stay_length(reservation))]
