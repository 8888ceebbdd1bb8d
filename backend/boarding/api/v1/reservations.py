"""Reservation management API."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from boarding.api import deps
from boarding.schemas.reservation import (
    DayRemovalRequest,
    DayRemovalResponse,
    MedicationTemplateRequest,
    MedicationTemplateResponse,
    PetSuggestion,
    ReservationRead,
    ReservationUpdate,
    ReservationWrite,
)
from boarding.services import reservation_service
from boarding.services.reservation_store import ReservationStore

router = APIRouter()

StoreDep = Annotated[ReservationStore, Depends(deps.get_reservation_store)]


async def _get_or_404(store: ReservationStore, reservation_id: str) -> ReservationRead:
    reservation = await reservation_service.get_reservation(
        store, reservation_id=reservation_id
    )
    if reservation is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Reservation not found"
        )
    return reservation


@router.get("", response_model=list[ReservationRead], summary="List reservations")
async def list_reservations(
    store: StoreDep,
    q: Annotated[str | None, Query(max_length=120)] = None,
) -> list[ReservationRead]:
    return await reservation_service.list_reservations(store, query=q)


@router.post(
    "",
    response_model=ReservationRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create or update reservation",
)
async def save_reservation(
    payload: ReservationWrite,
    store: StoreDep,
    response: Response,
) -> ReservationRead:
    try:
        saved, created = await reservation_service.save_reservation(store, payload=payload)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc
    if not created:
        response.status_code = status.HTTP_200_OK
    return saved


@router.get(
    "/suggestions",
    response_model=list[PetSuggestion],
    summary="Previously boarded pets matching a name",
)
async def pet_suggestions(
    store: StoreDep,
    name: Annotated[str, Query(min_length=1, max_length=120)],
    limit: Annotated[int, Query(ge=1, le=50)] = 10,
) -> list[PetSuggestion]:
    reservations = await reservation_service.list_reservations(store)
    return reservation_service.suggest_pets(reservations, name, limit=limit)


@router.post(
    "/medication-template",
    response_model=MedicationTemplateResponse,
    summary="Append a medication line to notes",
)
async def medication_template(
    payload: MedicationTemplateRequest,
) -> MedicationTemplateResponse:
    return MedicationTemplateResponse(
        notes=reservation_service.append_medication_template(payload.notes)
    )


@router.get(
    "/{reservation_id}", response_model=ReservationRead, summary="Get reservation"
)
async def get_reservation(reservation_id: str, store: StoreDep) -> ReservationRead:
    return await _get_or_404(store, reservation_id)


@router.patch(
    "/{reservation_id}", response_model=ReservationRead, summary="Update reservation"
)
async def update_reservation(
    reservation_id: str,
    payload: ReservationUpdate,
    store: StoreDep,
) -> ReservationRead:
    reservation = await _get_or_404(store, reservation_id)
    try:
        return await reservation_service.update_reservation(
            store,
            reservation=reservation,
            **payload.model_dump(exclude_unset=True),
        )
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc


@router.delete(
    "/{reservation_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete reservation",
)
async def delete_reservation(reservation_id: str, store: StoreDep) -> Response:
    await _get_or_404(store, reservation_id)
    await reservation_service.delete_reservation(store, reservation_id=reservation_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{reservation_id}/check-out",
    response_model=ReservationRead,
    summary="Check out reservation",
)
async def check_out_reservation(reservation_id: str, store: StoreDep) -> ReservationRead:
    reservation = await _get_or_404(store, reservation_id)
    try:
        return await reservation_service.check_out_reservation(
            store, reservation=reservation
        )
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc


@router.post(
    "/{reservation_id}/remove-day",
    response_model=DayRemovalResponse,
    summary="Remove a single day from a stay",
)
async def remove_day(
    reservation_id: str,
    payload: DayRemovalRequest,
    store: StoreDep,
) -> DayRemovalResponse:
    reservation = await _get_or_404(store, reservation_id)
    plan, reservations = await reservation_service.remove_day(
        store, reservation=reservation, day=payload.day
    )
    return DayRemovalResponse(outcome=plan.outcome.value, reservations=reservations)
