"""Persistence backends for reservations.

Both backends honour the same three-call contract: ``list`` everything,
``upsert`` one reservation (insert without ``id``, update with it) and
``delete`` by id. Which backend is used is decided once at startup by
:func:`build_reservation_store` and the instance is injected wherever it is
needed.
"""
from __future__ import annotations

import abc
import asyncio
import json
import logging
import uuid
from datetime import UTC, datetime, tzinfo
from pathlib import Path
from typing import Any

from pydantic import ValidationError
from sqlalchemy import func, select, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from boarding.core.config import Settings
from boarding.core.errors import StoreOperationFailed, StoreUnavailable
from boarding.db.base import Base
from boarding.db.session import get_engine, get_sessionmaker
from boarding.models.reservation import AnimalType, Reservation, ReservationStatus
from boarding.schemas.health import DiagnosticCheck, DiagnosticsRead
from boarding.schemas.reservation import ReservationRead, ReservationWrite
from boarding.services.interval_service import clinic_timezone, normalize_day

logger = logging.getLogger(__name__)

# Keys written by older browser-side builds of the calendar.
_LEGACY_KEYS = {
    "animalName": "animal_name",
    "animalType": "animal_type",
    "ownerFirstName": "owner_first_name",
    "ownerLastName": "owner_last_name",
    "startDate": "start_date",
    "endDate": "end_date",
    "createdAt": "created_at",
}


def _parse_status(value: object) -> ReservationStatus:
    if isinstance(value, ReservationStatus):
        return value
    if isinstance(value, str) and value.strip().lower().replace("_", "-") == "checked-out":
        return ReservationStatus.CHECKED_OUT
    return ReservationStatus.ACTIVE


def _column_values(payload: ReservationWrite) -> dict[str, Any]:
    return {
        "animal_name": payload.animal_name,
        "animal_type": payload.animal_type.value,
        "owner_first_name": payload.owner_first_name,
        "owner_last_name": payload.owner_last_name,
        "start_date": payload.start_date,
        "end_date": payload.end_date,
        "notes": payload.notes,
        "status": payload.status.value,
    }


def _row_to_read(row: Reservation) -> ReservationRead:
    return ReservationRead(
        id=row.id,
        animal_name=row.animal_name,
        animal_type=AnimalType.parse(row.animal_type),
        owner_first_name=row.owner_first_name,
        owner_last_name=row.owner_last_name,
        start_date=row.start_date,
        end_date=row.end_date,
        notes=row.notes,
        status=_parse_status(row.status),
        created_at=row.created_at,
    )


def _blob_to_read(
    item: dict[str, Any], tz: tzinfo | None = None
) -> tuple[ReservationRead, bool]:
    """Parse one stored record; the flag is set when ``created_at`` was assigned here."""
    record = {_LEGACY_KEYS.get(key, key): value for key, value in item.items()}
    # Browser builds stored local midnight as a UTC timestamp.
    for key in ("start_date", "end_date"):
        if isinstance(record.get(key), str):
            record[key] = normalize_day(record[key], tz)
    record["animal_type"] = AnimalType.parse(record.get("animal_type"))
    record["status"] = _parse_status(record.get("status"))
    assigned = record.get("created_at") is None
    if assigned:
        record["created_at"] = datetime.now(UTC)
    return ReservationRead.model_validate(record), assigned


def _sorted(reservations: list[ReservationRead]) -> list[ReservationRead]:
    return sorted(reservations, key=lambda r: r.start_date)


class ReservationStore(abc.ABC):
    """Contract every reservation backend implements."""

    name: str = "abstract"

    @abc.abstractmethod
    async def list(self) -> list[ReservationRead]:
        """Return all reservations ordered by start date."""

    @abc.abstractmethod
    async def upsert(self, payload: ReservationWrite) -> ReservationRead:
        """Insert or update a reservation and return the stored version."""

    @abc.abstractmethod
    async def delete(self, reservation_id: str) -> None:
        """Remove a reservation; unknown ids are ignored."""

    @abc.abstractmethod
    async def diagnose(self) -> DiagnosticsRead:
        """Report whether the backend is configured, reachable and queryable."""

    async def get(self, reservation_id: str) -> ReservationRead | None:
        for reservation in await self.list():
            if reservation.id == reservation_id:
                return reservation
        return None

    async def close(self) -> None:
        return None


class DatabaseReservationStore(ReservationStore):
    """Reservations kept in the ``reservations`` table of a relational database."""

    name = "database"

    def __init__(
        self,
        sessionmaker: async_sessionmaker[AsyncSession],
        *,
        engine: AsyncEngine | None = None,
    ) -> None:
        self._sessionmaker = sessionmaker
        self._engine = engine

    @classmethod
    def from_url(cls, database_url: str) -> DatabaseReservationStore:
        return cls(get_sessionmaker(database_url), engine=get_engine(database_url))

    async def close(self) -> None:
        if self._engine is not None:
            await self._engine.dispose()

    async def create_schema(self) -> None:
        if self._engine is None:
            raise StoreUnavailable("No engine bound to the database store")
        async with self._engine.begin() as connection:
            await connection.run_sync(Base.metadata.create_all)

    async def list(self) -> list[ReservationRead]:
        logger.info("Fetching all reservations from the database...")
        stmt = select(Reservation).order_by(
            Reservation.start_date.asc(), Reservation.created_at.asc()
        )
        try:
            async with self._sessionmaker() as session:
                rows = (await session.execute(stmt)).scalars().all()
        except SQLAlchemyError as exc:
            logger.exception("Error fetching reservations")
            raise StoreOperationFailed("Unable to load reservations") from exc
        return [_row_to_read(row) for row in rows]

    async def get(self, reservation_id: str) -> ReservationRead | None:
        try:
            async with self._sessionmaker() as session:
                row = await session.get(Reservation, reservation_id)
        except SQLAlchemyError as exc:
            logger.exception("Error fetching reservation %s", reservation_id)
            raise StoreOperationFailed("Unable to load reservation") from exc
        return _row_to_read(row) if row is not None else None

    async def upsert(self, payload: ReservationWrite) -> ReservationRead:
        values = _column_values(payload)
        async with self._sessionmaker() as session:
            try:
                row = None
                if payload.id:
                    row = await session.get(Reservation, payload.id)
                if row is None:
                    logger.info("Creating new reservation in the database...")
                    row = Reservation(**values)
                    if payload.id:
                        row.id = payload.id
                    session.add(row)
                else:
                    logger.info("Updating reservation %s in the database...", row.id)
                    for key, value in values.items():
                        setattr(row, key, value)
                await session.commit()
                await session.refresh(row)
            except SQLAlchemyError as exc:
                await session.rollback()
                logger.exception("Error saving reservation")
                raise StoreOperationFailed("Unable to save reservation") from exc
            return _row_to_read(row)

    async def delete(self, reservation_id: str) -> None:
        logger.info("Deleting reservation %s from the database...", reservation_id)
        async with self._sessionmaker() as session:
            try:
                row = await session.get(Reservation, reservation_id)
                if row is None:
                    return
                await session.delete(row)
                await session.commit()
            except SQLAlchemyError as exc:
                await session.rollback()
                logger.exception("Error deleting reservation %s", reservation_id)
                raise StoreOperationFailed("Unable to delete reservation") from exc

    async def diagnose(self) -> DiagnosticsRead:
        report = DiagnosticsRead(
            backend=self.name,
            configuration=DiagnosticCheck(
                status="success", message="Database URL found."
            ),
            connection=DiagnosticCheck(
                status="pending", message="Waiting for configuration check..."
            ),
            query=DiagnosticCheck(
                status="pending", message="Waiting for connection check..."
            ),
        )
        if self._engine is None:
            report.configuration = DiagnosticCheck(
                status="error", message="Database engine could not be initialised."
            )
            return report

        try:
            async with self._engine.connect() as connection:
                await connection.execute(text("SELECT 1"))
        except (SQLAlchemyError, OSError) as exc:
            logger.warning("Database connection check failed: %s", exc)
            report.connection = DiagnosticCheck(
                status="error",
                message="Failed to reach the database. It may be paused or unreachable.",
            )
            report.query = DiagnosticCheck(
                status="pending",
                message="Could not be tested due to connection failure.",
            )
            return report
        report.connection = DiagnosticCheck(
            status="success", message="Successfully connected to the database."
        )

        try:
            async with self._sessionmaker() as session:
                await session.execute(select(func.count(Reservation.id)))
        except SQLAlchemyError as exc:
            logger.warning("Reservation table check failed: %s", exc)
            lowered = str(exc).lower()
            if "no such table" in lowered or "does not exist" in lowered:
                message = 'The "reservations" table was not found. Run the migrations.'
            else:
                message = f'The database returned an error: "{exc.__class__.__name__}"'
            report.query = DiagnosticCheck(status="error", message=message)
            return report
        report.query = DiagnosticCheck(
            status="success", message='Successfully accessed the "reservations" table.'
        )
        return report


class LocalReservationStore(ReservationStore):
    """Whole collection serialized into one JSON file, rewritten on every change."""

    name = "local"

    def __init__(self, path: Path | str, *, timezone: tzinfo | None = None) -> None:
        self._path = Path(path)
        self._timezone = timezone
        self._lock = asyncio.Lock()

    @property
    def path(self) -> Path:
        return self._path

    def _read(self) -> tuple[list[ReservationRead], bool]:
        try:
            raw = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return [], False
        except OSError as exc:
            raise StoreOperationFailed(f"Unable to read {self._path}") from exc
        if not raw.strip():
            return [], False
        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Local reservation file %s is unreadable; treating as empty", self._path)
            return [], False
        if not isinstance(data, list):
            logger.warning("Local reservation file %s does not hold a list; treating as empty", self._path)
            return [], False

        reservations: list[ReservationRead] = []
        backfilled = False
        for item in data:
            if not isinstance(item, dict):
                continue
            try:
                reservation, assigned = _blob_to_read(item, self._timezone)
            except (ValidationError, ValueError, TypeError):
                logger.warning("Skipping malformed local reservation %r", item.get("id"))
                continue
            reservations.append(reservation)
            backfilled = backfilled or assigned
        return reservations, backfilled

    def _write(self, reservations: list[ReservationRead]) -> None:
        blob = [r.model_dump(mode="json") for r in reservations]
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path = self._path.with_suffix(self._path.suffix + ".tmp")
            tmp_path.write_text(json.dumps(blob, indent=2), encoding="utf-8")
            tmp_path.replace(self._path)
        except OSError as exc:
            logger.exception("Error writing local reservations to %s", self._path)
            raise StoreOperationFailed(f"Unable to write {self._path}") from exc

    async def _load(self) -> list[ReservationRead]:
        """Read the file; records that lacked ``created_at`` are persisted with it at once."""
        reservations, backfilled = await asyncio.to_thread(self._read)
        if backfilled:
            logger.info("Recording creation time for legacy reservations in %s", self._path)
            await asyncio.to_thread(self._write, reservations)
        return reservations

    async def list(self) -> list[ReservationRead]:
        logger.info("Fetching reservations from local storage...")
        async with self._lock:
            reservations = await self._load()
        return _sorted(reservations)

    async def upsert(self, payload: ReservationWrite) -> ReservationRead:
        async with self._lock:
            reservations = await self._load()
            fields = payload.model_dump(exclude={"id"})
            saved: ReservationRead | None = None
            if payload.id:
                for index, existing in enumerate(reservations):
                    if existing.id == payload.id:
                        logger.info("Updating reservation %s in local storage...", payload.id)
                        saved = existing.model_copy(update=fields)
                        reservations[index] = saved
                        break
            if saved is None:
                logger.info("Saving new reservation to local storage...")
                saved = ReservationRead(
                    **fields,
                    id=payload.id or uuid.uuid4().hex,
                    created_at=datetime.now(UTC),
                )
                reservations.append(saved)
            await asyncio.to_thread(self._write, reservations)
        return saved

    async def delete(self, reservation_id: str) -> None:
        logger.info("Deleting reservation %s from local storage...", reservation_id)
        async with self._lock:
            reservations = await self._load()
            remaining = [r for r in reservations if r.id != reservation_id]
            if len(remaining) != len(reservations):
                await asyncio.to_thread(self._write, remaining)

    async def diagnose(self) -> DiagnosticsRead:
        report = DiagnosticsRead(
            backend=self.name,
            configuration=DiagnosticCheck(
                status="success", message=f"Local store file: {self._path}"
            ),
            connection=DiagnosticCheck(status="pending", message="Checking storage directory..."),
            query=DiagnosticCheck(status="pending", message="Waiting for storage check..."),
        )
        directory = self._path.parent
        if directory.exists() and not directory.is_dir():
            report.connection = DiagnosticCheck(
                status="error", message=f"{directory} is not a directory."
            )
            return report
        report.connection = DiagnosticCheck(
            status="success", message="Local storage directory is available."
        )
        try:
            count = len(await self.list())
        except StoreOperationFailed as exc:
            report.query = DiagnosticCheck(status="error", message=str(exc))
            return report
        report.query = DiagnosticCheck(
            status="success", message=f"Read {count} reservations from local storage."
        )
        return report


def build_reservation_store(settings: Settings) -> ReservationStore:
    """Construct the backend selected by ``STORE_BACKEND``."""
    backend = settings.store_backend
    if backend == "auto":
        backend = "database" if settings.database_configured else "local"

    if backend == "database":
        if not settings.database_url:
            raise StoreUnavailable("STORE_BACKEND=database but DATABASE_URL is not set")
        return DatabaseReservationStore.from_url(settings.database_url)
    return LocalReservationStore(settings.local_store_path, timezone=clinic_timezone())


__all__ = [
    "DatabaseReservationStore",
    "LocalReservationStore",
    "ReservationStore",
    "build_reservation_store",
]
