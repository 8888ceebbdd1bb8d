"""Scheduling-related schemas."""

from __future__ import annotations

import datetime as dt

from pydantic import BaseModel

from boarding.models.reservation import AnimalType
from boarding.schemas.reservation import ReservationRead


class TypeCountRead(BaseModel):
    """Number of boarders of one animal type on a day."""

    animal_type: AnimalType
    count: int


class DailyBreakdownRead(BaseModel):
    """Arrivals, departures and overnight stays for a single day."""

    day: dt.date
    query: str = ""
    arriving: list[ReservationRead]
    departing: list[ReservationRead]
    staying_overnight: list[ReservationRead]


class CalendarDayRead(BaseModel):
    """One cell of the month grid."""

    day: dt.date
    in_month: bool
    is_today: bool
    has_match: bool
    type_summary: list[TypeCountRead]


class CalendarMonthRead(BaseModel):
    """Month grid response payload."""

    year: int
    month: int
    query: str = ""
    days: list[CalendarDayRead]
