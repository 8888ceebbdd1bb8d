"""Reservation management service helpers."""
from __future__ import annotations

from collections.abc import Iterable
from datetime import date
from typing import Any

from boarding.models.reservation import ReservationStatus
from boarding.schemas.reservation import (
    PetSuggestion,
    ReservationRead,
    ReservationWrite,
)
from boarding.services import occupancy_service, split_delete_service
from boarding.services.reservation_store import ReservationStore
from boarding.services.split_delete_service import DayRemovalPlan

MEDICATION_TEMPLATE = "- MEDICATION: [Name], [Dosage], [Frequency]"

_ALLOWED_STATUS_TRANSITIONS: dict[ReservationStatus, set[ReservationStatus]] = {
    ReservationStatus.ACTIVE: {ReservationStatus.CHECKED_OUT},
    ReservationStatus.CHECKED_OUT: set(),
}


def _validate_status_transition(current: ReservationStatus, target: ReservationStatus) -> None:
    if target == current:
        return
    allowed = _ALLOWED_STATUS_TRANSITIONS.get(current, set())
    if target not in allowed:
        raise ValueError(f"Invalid status transition from {current.value} to {target.value}")


def _validate_dates(start_date: date, end_date: date) -> None:
    if start_date > end_date:
        raise ValueError("Reservation end date must not be before start date")


async def list_reservations(
    store: ReservationStore,
    *,
    query: str | None = None,
) -> list[ReservationRead]:
    reservations = await store.list()
    return occupancy_service.filter_reservations(reservations, query)


async def get_reservation(
    store: ReservationStore,
    *,
    reservation_id: str,
) -> ReservationRead | None:
    return await store.get(reservation_id)


async def save_reservation(
    store: ReservationStore,
    *,
    payload: ReservationWrite,
) -> tuple[ReservationRead, bool]:
    """Upsert ``payload``; returns the stored reservation and whether it is new."""
    existing = await store.get(payload.id) if payload.id else None
    if existing is not None:
        _validate_status_transition(existing.status, payload.status)
    saved = await store.upsert(payload)
    return saved, existing is None


async def update_reservation(
    store: ReservationStore,
    *,
    reservation: ReservationRead,
    **changes: Any,
) -> ReservationRead:
    """Apply a partial update on top of ``reservation``."""
    if changes.get("status") is not None:
        _validate_status_transition(reservation.status, changes["status"])
    _validate_dates(
        changes.get("start_date") or reservation.start_date,
        changes.get("end_date") or reservation.end_date,
    )
    return await store.upsert(reservation.to_write(**changes))


async def delete_reservation(
    store: ReservationStore,
    *,
    reservation_id: str,
) -> None:
    await store.delete(reservation_id)


async def check_out_reservation(
    store: ReservationStore,
    *,
    reservation: ReservationRead,
) -> ReservationRead:
    """Mark the animal as departed; the record is kept."""
    return await update_reservation(
        store, reservation=reservation, status=ReservationStatus.CHECKED_OUT
    )


async def remove_day(
    store: ReservationStore,
    *,
    reservation: ReservationRead,
    day: date,
) -> tuple[DayRemovalPlan, list[ReservationRead]]:
    """Drop ``day`` from ``reservation`` and return the refreshed collection."""
    plan = await split_delete_service.remove_day(store, reservation, day)
    return plan, await store.list()


def suggest_pets(
    reservations: Iterable[ReservationRead],
    name: str,
    *,
    limit: int = 10,
) -> list[PetSuggestion]:
    """Previously boarded pets whose name contains ``name``, newest stay first.

    Pets are told apart by animal name and owner last name, case-insensitively.
    """
    needle = name.strip().lower()
    if not needle:
        return []
    newest_first = sorted(reservations, key=lambda r: r.start_date, reverse=True)
    unique: dict[tuple[str, str], ReservationRead] = {}
    for reservation in newest_first:
        key = (reservation.animal_name.lower(), reservation.owner_last_name.lower())
        unique.setdefault(key, reservation)
    return [
        PetSuggestion(
            animal_name=r.animal_name,
            animal_type=r.animal_type,
            owner_first_name=r.owner_first_name,
            owner_last_name=r.owner_last_name,
            last_start_date=r.start_date,
        )
        for r in unique.values()
        if needle in r.animal_name.lower()
    ][:limit]


def append_medication_template(notes: str | None) -> str:
    existing = (notes or "").strip()
    if existing:
        return f"{existing}\n{MEDICATION_TEMPLATE}"
    return MEDICATION_TEMPLATE
