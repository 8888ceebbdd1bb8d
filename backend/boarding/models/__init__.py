"""ORM models package export."""

from boarding.models.reservation import AnimalType, Reservation, ReservationStatus

__all__ = [
    "AnimalType",
    "Reservation",
    "ReservationStatus",
]
