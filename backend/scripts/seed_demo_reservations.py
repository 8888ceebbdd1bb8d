"""Seed a handful of demo reservations into the configured store."""
from __future__ import annotations

import asyncio
from datetime import date, timedelta

from boarding.core.config import get_settings
from boarding.models.reservation import AnimalType
from boarding.schemas.reservation import ReservationWrite
from boarding.services.reservation_store import (
    DatabaseReservationStore,
    build_reservation_store,
)

DEMO_STAYS = [
    ("Max", AnimalType.CAT, "Jordan", "Maxwell", 0, 4, "Feed twice daily, wet food only."),
    ("Maxine", AnimalType.FERRET, "Riley", "Stone", 1, 1, None),
    ("Clover", AnimalType.RABBIT, "Sam", "Hughes", -2, 2, "- MEDICATION: Metacam, 0.2ml, once daily"),
    ("Pip", AnimalType.GUINEA_PIG, "Alex", "Moreno", 3, 9, "Bonded pair with Squeak."),
    ("Squeak", AnimalType.GUINEA_PIG, "Alex", "Moreno", 3, 9, None),
    ("Dusty", AnimalType.CHINCHILLA, "Casey", "Nguyen", -1, 0, "Dust bath every other day."),
]


async def seed_demo(start: date | None = None) -> None:
    settings = get_settings()
    store = build_reservation_store(settings)
    if isinstance(store, DatabaseReservationStore):
        await store.create_schema()
    anchor = start or date.today()
    created = 0
    try:
        for name, kind, first, last, offset, nights, notes in DEMO_STAYS:
            await store.upsert(
                ReservationWrite(
                    animal_name=name,
                    animal_type=kind,
                    owner_first_name=first,
                    owner_last_name=last,
                    start_date=anchor + timedelta(days=offset),
                    end_date=anchor + timedelta(days=offset + nights),
                    notes=notes,
                )
            )
            created += 1
    finally:
        await store.close()
    print(f"Seeded {created} reservation(s) into the {store.name} store.")


def main() -> None:
    asyncio.run(seed_demo())


if __name__ == "__main__":
    main()
