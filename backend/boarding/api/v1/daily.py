"""Day panel: arrivals, departures and overnight stays."""

from __future__ import annotations

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, Query

from boarding.api import deps
from boarding.schemas.scheduling import DailyBreakdownRead
from boarding.services import occupancy_service
from boarding.services.reservation_store import ReservationStore

router = APIRouter()


@router.get("/{day}", response_model=DailyBreakdownRead, summary="Daily breakdown")
async def daily_breakdown(
    day: date,
    store: Annotated[ReservationStore, Depends(deps.get_reservation_store)],
    q: Annotated[str | None, Query(max_length=120)] = None,
) -> DailyBreakdownRead:
    reservations = await store.list()
    breakdown = occupancy_service.daily_breakdown(reservations, day, q)
    return DailyBreakdownRead(
        day=breakdown.day,
        query=q or "",
        arriving=breakdown.arriving,
        departing=breakdown.departing,
        staying_overnight=breakdown.staying_overnight,
    )
