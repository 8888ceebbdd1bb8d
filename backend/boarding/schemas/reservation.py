"""Pydantic schemas for reservations."""
from __future__ import annotations

import datetime as dt
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from boarding.models.reservation import AnimalType, ReservationStatus
from boarding.services.interval_service import normalize_day


def _coerce_day(value: Any) -> Any:
    if isinstance(value, (dt.date, str)):
        return normalize_day(value)
    return value


class ReservationBase(BaseModel):
    """Shared reservation fields."""

    animal_name: str = Field(min_length=1, max_length=120)
    animal_type: AnimalType = AnimalType.OTHER
    owner_first_name: str = Field(min_length=1, max_length=120)
    owner_last_name: str = Field(min_length=1, max_length=120)
    start_date: dt.date
    end_date: dt.date
    notes: str | None = None
    status: ReservationStatus = ReservationStatus.ACTIVE

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def _strip_time(cls, value: Any) -> Any:
        return _coerce_day(value)

    @field_validator("animal_name", "owner_first_name", "owner_last_name")
    @classmethod
    def _strip_names(cls, value: str) -> str:
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("must not be blank")
        return cleaned

    @model_validator(mode="after")
    def _check_range(self) -> ReservationBase:
        if self.start_date > self.end_date:
            raise ValueError("Reservation end date must not be before start date")
        return self


class ReservationWrite(ReservationBase):
    """Upsert payload: inserts without ``id``, updates with one."""

    id: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _default_end_to_start(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("end_date") is None and "start_date" in data:
            data = {**data, "end_date": data["start_date"]}
        return data


class ReservationUpdate(BaseModel):
    """Mutable reservation fields."""

    animal_name: str | None = Field(default=None, min_length=1, max_length=120)
    animal_type: AnimalType | None = None
    owner_first_name: str | None = Field(default=None, min_length=1, max_length=120)
    owner_last_name: str | None = Field(default=None, min_length=1, max_length=120)
    start_date: dt.date | None = None
    end_date: dt.date | None = None
    notes: str | None = None
    status: ReservationStatus | None = None

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def _strip_time(cls, value: Any) -> Any:
        return _coerce_day(value)


class ReservationRead(ReservationBase):
    """Persisted reservation as returned by a store."""

    id: str
    created_at: dt.datetime

    model_config = ConfigDict(from_attributes=True)

    def to_write(self, **changes: Any) -> ReservationWrite:
        """Return an upsert payload carrying this reservation's fields."""
        payload = self.model_dump(exclude={"created_at"})
        payload.update(changes)
        return ReservationWrite.model_validate(payload)


class DayRemovalRequest(BaseModel):
    """Payload naming the single day to drop from a stay."""

    day: dt.date = Field(alias="date")

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("day", mode="before")
    @classmethod
    def _strip_time(cls, value: Any) -> Any:
        return _coerce_day(value)


class DayRemovalResponse(BaseModel):
    """Outcome of a day removal plus the refreshed collection."""

    outcome: str
    reservations: list[ReservationRead]


class PetSuggestion(BaseModel):
    """Previously boarded pet offered while typing a new reservation."""

    animal_name: str
    animal_type: AnimalType
    owner_first_name: str
    owner_last_name: str
    last_start_date: dt.date


class MedicationTemplateRequest(BaseModel):
    notes: str | None = None


class MedicationTemplateResponse(BaseModel):
    notes: str
