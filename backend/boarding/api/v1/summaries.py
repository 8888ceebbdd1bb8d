"""AI daily handover endpoints."""

from __future__ import annotations

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import HTMLResponse

from boarding.api import deps
from boarding.integrations.gemini_client import SummaryClient
from boarding.schemas.summary import HandoverSummaryRead
from boarding.services import occupancy_service, summary_service
from boarding.services.reservation_store import ReservationStore

router = APIRouter()

StoreDep = Annotated[ReservationStore, Depends(deps.get_reservation_store)]
ClientDep = Annotated[SummaryClient, Depends(deps.get_summary_client)]


async def _summarize(
    store: ReservationStore,
    client: SummaryClient,
    day: date,
    query: str | None,
) -> tuple[int, str]:
    reservations = await store.list()
    boarders = occupancy_service.boarders_for_day(reservations, day, query)
    try:
        text = await summary_service.generate_summary(client, boarders, day, reservations)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc
    return len(boarders), text


@router.post("/{day}", response_model=HandoverSummaryRead, summary="Generate handover summary")
async def generate_summary(
    day: date,
    store: StoreDep,
    client: ClientDep,
    q: Annotated[str | None, Query(max_length=120)] = None,
) -> HandoverSummaryRead:
    count, text = await _summarize(store, client, day, q)
    return HandoverSummaryRead(day=day, boarder_count=count, summary=text)


@router.get("/{day}/report", response_class=HTMLResponse, summary="Printable handover report")
async def handover_report(
    day: date,
    store: StoreDep,
    client: ClientDep,
    q: Annotated[str | None, Query(max_length=120)] = None,
) -> HTMLResponse:
    _, text = await _summarize(store, client, day, q)
    return HTMLResponse(summary_service.render_report_html(text, day))
