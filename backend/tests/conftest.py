"""Test fixtures for the boarding calendar backend."""
from __future__ import annotations

import os
import uuid
from collections.abc import AsyncIterator, Callable
from datetime import UTC, date, datetime
from pathlib import Path

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

os.environ.setdefault("STORE_BACKEND", "local")
os.environ.pop("DATABASE_URL", None)

from boarding.db.session import dispose_engine
from boarding.main import app
from boarding.models.reservation import AnimalType, ReservationStatus
from boarding.schemas.reservation import ReservationRead
from boarding.services.reservation_store import (
    DatabaseReservationStore,
    LocalReservationStore,
)


class FakeSummaryClient:
    """Records prompts and returns canned handover text."""

    def __init__(self, text: str = "Good morning team.", error: Exception | None = None) -> None:
        self.text = text
        self.error = error
        self.prompts: list[str] = []

    async def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.text


@pytest.fixture()
def make_reservation() -> Callable[..., ReservationRead]:
    """Build persisted-looking reservations without touching a store."""

    def _make(
        start: date,
        end: date | None = None,
        *,
        animal_name: str = "Max",
        animal_type: AnimalType = AnimalType.CAT,
        owner_first_name: str = "Jordan",
        owner_last_name: str = "Rivers",
        notes: str | None = None,
        status: ReservationStatus = ReservationStatus.ACTIVE,
        reservation_id: str | None = None,
    ) -> ReservationRead:
        return ReservationRead(
            id=reservation_id or uuid.uuid4().hex,
            animal_name=animal_name,
            animal_type=animal_type,
            owner_first_name=owner_first_name,
            owner_last_name=owner_last_name,
            start_date=start,
            end_date=end or start,
            notes=notes,
            status=status,
            created_at=datetime(2024, 5, 1, 9, 30, tzinfo=UTC),
        )

    return _make


@pytest.fixture()
def local_store_path(tmp_path: Path) -> Path:
    return tmp_path / "vet-boarding-reservations.json"


@pytest.fixture()
def local_store(local_store_path: Path) -> LocalReservationStore:
    return LocalReservationStore(local_store_path)


@pytest_asyncio.fixture()
async def db_store(tmp_path: Path) -> AsyncIterator[DatabaseReservationStore]:
    """A database store on a throwaway SQLite file."""
    db_url = f"sqlite+aiosqlite:///{tmp_path / 'test.db'}"
    store = DatabaseReservationStore.from_url(db_url)
    await store.create_schema()
    yield store
    await dispose_engine(db_url)


@pytest.fixture()
def summary_client() -> FakeSummaryClient:
    return FakeSummaryClient()


@pytest_asyncio.fixture()
async def client(
    local_store: LocalReservationStore,
    summary_client: FakeSummaryClient,
) -> AsyncIterator[AsyncClient]:
    """Async API client wired to a temporary local store and a fake AI client."""
    app.state.reservation_store = local_store
    app.state.summary_client = summary_client
    app.state.store_error = None
    transport = ASGITransport(app=app)
    try:
        async with AsyncClient(transport=transport, base_url="http://test") as http:
            yield http
    finally:
        app.state.reservation_store = None
        app.state.summary_client = None
        app.state.store_error = None
