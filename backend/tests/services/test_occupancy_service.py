"""Tests for daily breakdowns, search filtering and the month grid."""

from __future__ import annotations

from datetime import date

import pytest

from boarding.models.reservation import AnimalType, ReservationStatus
from boarding.services import occupancy_service


def _ids(reservations) -> set[str]:
    return {r.id for r in reservations}


def test_single_day_stay_is_arriving_and_departing_never_staying(make_reservation) -> None:
    stay = make_reservation(date(2024, 6, 10), reservation_id="solo")

    breakdown = occupancy_service.daily_breakdown([stay], date(2024, 6, 10))

    assert _ids(breakdown.arriving) == {"solo"}
    assert _ids(breakdown.departing) == {"solo"}
    assert breakdown.staying_overnight == []


def test_breakdown_buckets_by_boundary(make_reservation) -> None:
    arriving = make_reservation(date(2024, 6, 3), date(2024, 6, 6), reservation_id="arr")
    departing = make_reservation(date(2024, 6, 1), date(2024, 6, 3), reservation_id="dep")
    staying = make_reservation(date(2024, 6, 1), date(2024, 6, 9), reservation_id="stay")
    elsewhere = make_reservation(date(2024, 6, 20), date(2024, 6, 22), reservation_id="other")

    breakdown = occupancy_service.daily_breakdown(
        [arriving, departing, staying, elsewhere], date(2024, 6, 3)
    )

    assert _ids(breakdown.arriving) == {"arr"}
    assert _ids(breakdown.departing) == {"dep"}
    assert _ids(breakdown.staying_overnight) == {"stay"}
    assert not breakdown.is_empty


def test_breakdown_keeps_checked_out_departures(make_reservation) -> None:
    gone = make_reservation(
        date(2024, 6, 1),
        date(2024, 6, 3),
        status=ReservationStatus.CHECKED_OUT,
        reservation_id="gone",
    )
    breakdown = occupancy_service.daily_breakdown([gone], date(2024, 6, 3))
    assert _ids(breakdown.departing) == {"gone"}


def test_search_matches_pet_and_owner_names_case_insensitively(make_reservation) -> None:
    max_cat = make_reservation(date(2024, 6, 1), animal_name="Max", reservation_id="max")
    maxine = make_reservation(date(2024, 6, 1), animal_name="Maxine", reservation_id="maxine")
    owner = make_reservation(
        date(2024, 6, 1),
        animal_name="Biscuit",
        owner_last_name="Maxwell",
        reservation_id="owner",
    )
    other = make_reservation(date(2024, 6, 1), animal_name="Luna", reservation_id="luna")

    matched = occupancy_service.filter_reservations([max_cat, maxine, owner, other], "max")

    assert _ids(matched) == {"max", "maxine", "owner"}


@pytest.mark.parametrize("query", [None, "", "   "])
def test_blank_query_is_identity(make_reservation, query) -> None:
    stays = [make_reservation(date(2024, 6, 1)), make_reservation(date(2024, 6, 2))]
    assert occupancy_service.filter_reservations(stays, query) == stays


def test_query_filters_every_bucket(make_reservation) -> None:
    luna = make_reservation(date(2024, 6, 3), animal_name="Luna")
    max_cat = make_reservation(date(2024, 6, 3), animal_name="Max", reservation_id="max")

    breakdown = occupancy_service.daily_breakdown([luna, max_cat], date(2024, 6, 3), "MAX")

    assert _ids(breakdown.arriving) == {"max"}
    assert _ids(breakdown.departing) == {"max"}


def test_type_summary_counts_present_animals_in_first_seen_order(make_reservation) -> None:
    day = date(2024, 6, 3)
    stays = [
        make_reservation(day, animal_type=AnimalType.RABBIT),
        make_reservation(date(2024, 6, 1), date(2024, 6, 4), animal_type=AnimalType.CAT),
        make_reservation(day, animal_type=AnimalType.RABBIT),
        make_reservation(
            day, animal_type=AnimalType.FERRET, status=ReservationStatus.CHECKED_OUT
        ),
        make_reservation(date(2024, 6, 4), animal_type=AnimalType.RAT),
    ]

    summary = occupancy_service.type_summary(stays, day)

    assert [(item.animal_type, item.count) for item in summary] == [
        (AnimalType.RABBIT, 2),
        (AnimalType.CAT, 1),
    ]


def test_month_grid_covers_whole_weeks_sunday_first() -> None:
    grid = occupancy_service.month_grid(2024, 6)

    assert grid[0] == date(2024, 5, 26)
    assert grid[-1] == date(2024, 7, 6)
    assert len(grid) == 42
    assert grid[0].weekday() == 6


def test_month_grid_always_has_six_weeks() -> None:
    grid = occupancy_service.month_grid(2026, 2)
    assert grid[0] == date(2026, 2, 1)
    assert grid[-1] == date(2026, 3, 14)
    assert len(grid) == 42


def test_month_grid_rejects_invalid_month() -> None:
    with pytest.raises(ValueError):
        occupancy_service.month_grid(2024, 13)


@pytest.mark.parametrize(("year", "month"), [(1, 1), (9999, 12)])
def test_month_grid_rejects_years_whose_padding_leaves_the_date_range(year, month) -> None:
    with pytest.raises(ValueError):
        occupancy_service.month_grid(year, month)


def test_month_grid_at_the_supported_year_limits() -> None:
    assert occupancy_service.month_grid(2, 1)[0] == date(1, 12, 30)
    assert occupancy_service.month_grid(9998, 12)[-1] == date(9999, 1, 9)


def test_calendar_month_marks_matches_and_summaries(make_reservation) -> None:
    stays = [
        make_reservation(date(2024, 6, 1), date(2024, 6, 2), animal_name="Max"),
        make_reservation(date(2024, 6, 2), animal_name="Luna", animal_type=AnimalType.RAT),
    ]

    cells = occupancy_service.calendar_month(
        stays, 2024, 6, "max", today=date(2024, 6, 2)
    )
    by_day = {cell.day: cell for cell in cells}

    assert by_day[date(2024, 5, 31)].in_month is False
    assert by_day[date(2024, 6, 1)].has_match is True
    assert by_day[date(2024, 6, 2)].is_today is True
    assert [(t.animal_type, t.count) for t in by_day[date(2024, 6, 2)].type_summary] == [
        (AnimalType.CAT, 1),
        (AnimalType.RAT, 1),
    ]
    assert by_day[date(2024, 6, 3)].has_match is False
    assert by_day[date(2024, 6, 3)].type_summary == []


def test_calendar_month_without_query_has_no_matches(make_reservation) -> None:
    cells = occupancy_service.calendar_month(
        [make_reservation(date(2024, 6, 1))], 2024, 6, today=date(2024, 6, 1)
    )
    assert not any(cell.has_match for cell in cells)
