"""Reservation models."""
from __future__ import annotations

import enum
import uuid
from datetime import date

from sqlalchemy import CheckConstraint, Date, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from boarding.db.base import Base
from boarding.models.mixins import CreatedAtMixin


class ReservationStatus(str, enum.Enum):
    """Lifecycle states for reservations."""

    ACTIVE = "active"
    CHECKED_OUT = "checked-out"


class AnimalType(str, enum.Enum):
    """Animals the clinic boards."""

    CAT = "Cat"
    FERRET = "Ferret"
    RABBIT = "Rabbit"
    GUINEA_PIG = "Guinea Pig"
    CHINCHILLA = "Chinchilla"
    RAT = "Rat"
    OTHER = "Other"

    @classmethod
    def parse(cls, value: object) -> AnimalType:
        """Map a stored value onto a member, falling back to ``OTHER``."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            cleaned = value.strip()
            for member in cls:
                if cleaned.lower() in (member.value.lower(), member.name.lower()):
                    return member
            if cleaned.replace(" ", "").lower() == "guineapig":
                return cls.GUINEA_PIG
        return cls.OTHER


def _new_reservation_id() -> str:
    return uuid.uuid4().hex


class Reservation(CreatedAtMixin, Base):
    """A boarding stay for one animal over an inclusive date range."""

    __tablename__ = "reservations"

    id: Mapped[str] = mapped_column(
        String(64), primary_key=True, default=_new_reservation_id
    )
    animal_name: Mapped[str] = mapped_column(String(120), nullable=False)
    # Stored as free text; converted with AnimalType.parse at the store boundary.
    animal_type: Mapped[str] = mapped_column(
        String(32), nullable=False, default=AnimalType.OTHER.value
    )
    owner_first_name: Mapped[str] = mapped_column(String(120), nullable=False)
    owner_last_name: Mapped[str] = mapped_column(String(120), nullable=False)
    start_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    notes: Mapped[str | None] = mapped_column(Text)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=ReservationStatus.ACTIVE.value
    )

    __table_args__ = (
        CheckConstraint("end_date >= start_date", name="ck_reservation_end_not_before_start"),
    )
