"""Occupancy queries over the reservation collection."""
from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import date, timedelta

from boarding.models.reservation import AnimalType, ReservationStatus
from boarding.schemas.reservation import ReservationRead
from boarding.services.interval_service import (
    is_same_calendar_day,
    normalize_day,
    occupies_day,
)

# Six calendar rows; the outer years are excluded so padding days stay representable.
GRID_DAYS = 42
MIN_GRID_YEAR = date.min.year + 1
MAX_GRID_YEAR = date.max.year - 1


@dataclass(slots=True)
class DailyBreakdown:
    """Reservations touching a day, bucketed by how they touch it.

    A single-day stay is listed under both ``arriving`` and ``departing``.
    """

    day: date
    arriving: list[ReservationRead] = field(default_factory=list)
    departing: list[ReservationRead] = field(default_factory=list)
    staying_overnight: list[ReservationRead] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not (self.arriving or self.departing or self.staying_overnight)


@dataclass(slots=True, frozen=True)
class TypeCount:
    animal_type: AnimalType
    count: int


@dataclass(slots=True)
class CalendarDay:
    day: date
    in_month: bool
    is_today: bool
    has_match: bool
    type_summary: list[TypeCount]


def matches_query(reservation: ReservationRead, query: str | None) -> bool:
    """Case-insensitive substring match on pet and owner names."""
    needle = (query or "").strip().lower()
    if not needle:
        return True
    haystack = (
        reservation.animal_name,
        reservation.owner_first_name,
        reservation.owner_last_name,
    )
    return any(needle in value.lower() for value in haystack)


def filter_reservations(
    reservations: Iterable[ReservationRead], query: str | None
) -> list[ReservationRead]:
    return [r for r in reservations if matches_query(r, query)]


def daily_breakdown(
    reservations: Iterable[ReservationRead],
    day: date,
    query: str | None = None,
) -> DailyBreakdown:
    """Split the reservations occupying ``day`` into arrivals, departures and stays."""
    target = normalize_day(day)
    occupying = [
        r for r in filter_reservations(reservations, query) if occupies_day(r, target)
    ]
    breakdown = DailyBreakdown(day=target)
    breakdown.arriving = [r for r in occupying if is_same_calendar_day(r.start_date, target)]
    breakdown.departing = [r for r in occupying if is_same_calendar_day(r.end_date, target)]
    breakdown.staying_overnight = [
        r
        for r in occupying
        if not is_same_calendar_day(r.start_date, target)
        and not is_same_calendar_day(r.end_date, target)
    ]
    return breakdown


def boarders_for_day(
    reservations: Iterable[ReservationRead],
    day: date,
    query: str | None = None,
) -> list[ReservationRead]:
    """Every reservation occupying ``day``, checked-out ones included."""
    return [
        r for r in filter_reservations(reservations, query) if occupies_day(r, day)
    ]


def reservations_for_day(
    reservations: Iterable[ReservationRead], day: date
) -> list[ReservationRead]:
    """Reservations still in the building on ``day`` (checked-out stays excluded)."""
    return [
        r
        for r in reservations
        if r.status != ReservationStatus.CHECKED_OUT and occupies_day(r, day)
    ]


def type_summary(
    reservations: Iterable[ReservationRead], day: date
) -> list[TypeCount]:
    counts: dict[AnimalType, int] = {}
    for reservation in reservations_for_day(reservations, day):
        counts[reservation.animal_type] = counts.get(reservation.animal_type, 0) + 1
    return [TypeCount(animal_type=kind, count=count) for kind, count in counts.items()]


def month_grid(year: int, month: int) -> list[date]:
    """Days shown for a month: six Sunday-first weeks starting on or before the 1st."""
    if not 1 <= month <= 12:
        raise ValueError("month must be between 1 and 12")
    if not MIN_GRID_YEAR <= year <= MAX_GRID_YEAR:
        raise ValueError(f"year must be between {MIN_GRID_YEAR} and {MAX_GRID_YEAR}")
    first = date(year, month, 1)
    # date.weekday(): Monday == 0, so Sunday-first offset is (weekday + 1) % 7.
    start = first - timedelta(days=(first.weekday() + 1) % 7)
    return [start + timedelta(days=i) for i in range(GRID_DAYS)]


def calendar_month(
    reservations: Sequence[ReservationRead],
    year: int,
    month: int,
    query: str | None = None,
    *,
    today: date | None = None,
) -> list[CalendarDay]:
    """Build the month grid with a per-day animal-type summary."""
    today = today or date.today()
    searching = bool((query or "").strip())
    cells: list[CalendarDay] = []
    for day in month_grid(year, month):
        present = reservations_for_day(reservations, day)
        cells.append(
            CalendarDay(
                day=day,
                in_month=day.month == month,
                is_today=day == today,
                has_match=searching and any(matches_query(r, query) for r in present),
                type_summary=type_summary(present, day),
            )
        )
    return cells
