"""Month grid endpoint."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query

from boarding.api import deps
from boarding.schemas.scheduling import CalendarDayRead, CalendarMonthRead, TypeCountRead
from boarding.services import occupancy_service
from boarding.services.reservation_store import ReservationStore

router = APIRouter()


@router.get("/{year}/{month}", response_model=CalendarMonthRead, summary="Month grid")
async def calendar_month(
    year: Annotated[
        int,
        Path(ge=occupancy_service.MIN_GRID_YEAR, le=occupancy_service.MAX_GRID_YEAR),
    ],
    month: Annotated[int, Path(ge=1, le=12)],
    store: Annotated[ReservationStore, Depends(deps.get_reservation_store)],
    q: Annotated[str | None, Query(max_length=120)] = None,
) -> CalendarMonthRead:
    reservations = await store.list()
    cells = occupancy_service.calendar_month(reservations, year, month, q)
    return CalendarMonthRead(
        year=year,
        month=month,
        query=q or "",
        days=[
            CalendarDayRead(
                day=cell.day,
                in_month=cell.in_month,
                is_today=cell.is_today,
                has_match=cell.has_match,
                type_summary=[
                    TypeCountRead(animal_type=item.animal_type, count=item.count)
                    for item in cell.type_summary
                ],
            )
            for cell in cells
        ],
    )
