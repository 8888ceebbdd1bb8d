"""Reservation API integration tests."""

from __future__ import annotations

from typing import Any

import pytest
from httpx import AsyncClient

from boarding.main import app

pytestmark = pytest.mark.asyncio


def _payload(**overrides: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "animal_name": "Max",
        "animal_type": "Cat",
        "owner_first_name": "Jordan",
        "owner_last_name": "Rivers",
        "start_date": "2024-06-10",
        "end_date": "2024-06-14",
        "notes": "Shy around dogs",
    }
    payload.update(overrides)
    return payload


async def _create(client: AsyncClient, **overrides: Any) -> dict[str, Any]:
    response = await client.post("/api/v1/reservations", json=_payload(**overrides))
    assert response.status_code == 201, response.text
    return response.json()


async def test_reservation_lifecycle(client: AsyncClient) -> None:
    created = await _create(client)
    reservation_id = created["id"]
    assert created["status"] == "active"
    assert created["animal_type"] == "Cat"

    fetched = await client.get(f"/api/v1/reservations/{reservation_id}")
    assert fetched.status_code == 200
    assert fetched.json()["notes"] == "Shy around dogs"

    upsert = await client.post(
        "/api/v1/reservations",
        json=_payload(id=reservation_id, animal_name="Maximus"),
    )
    assert upsert.status_code == 200
    assert upsert.json()["id"] == reservation_id
    assert upsert.json()["animal_name"] == "Maximus"

    patched = await client.patch(
        f"/api/v1/reservations/{reservation_id}", json={"notes": None}
    )
    assert patched.status_code == 200
    assert patched.json()["notes"] is None
    assert patched.json()["animal_name"] == "Maximus"

    listing = await client.get("/api/v1/reservations")
    assert [r["id"] for r in listing.json()] == [reservation_id]

    deleted = await client.delete(f"/api/v1/reservations/{reservation_id}")
    assert deleted.status_code == 204

    missing = await client.get(f"/api/v1/reservations/{reservation_id}")
    assert missing.status_code == 404


async def test_end_date_defaults_to_start_date(client: AsyncClient) -> None:
    created = await _create(client, end_date=None)
    assert created["end_date"] == created["start_date"] == "2024-06-10"


async def test_time_of_day_is_dropped_from_dates(client: AsyncClient) -> None:
    created = await _create(
        client, start_date="2024-06-10T14:30:00", end_date="2024-06-11T09:00:00"
    )
    assert created["start_date"] == "2024-06-10"
    assert created["end_date"] == "2024-06-11"


async def test_end_before_start_is_rejected(client: AsyncClient) -> None:
    response = await client.post(
        "/api/v1/reservations",
        json=_payload(start_date="2024-06-14", end_date="2024-06-10"),
    )
    assert response.status_code == 422


async def test_patch_with_inverted_range_is_rejected(client: AsyncClient) -> None:
    created = await _create(client)
    response = await client.patch(
        f"/api/v1/reservations/{created['id']}", json={"end_date": "2024-06-01"}
    )
    assert response.status_code == 400


async def test_unknown_animal_type_is_rejected_on_write(client: AsyncClient) -> None:
    response = await client.post(
        "/api/v1/reservations", json=_payload(animal_type="Hamster")
    )
    assert response.status_code == 422


async def test_list_filters_by_search_query(client: AsyncClient) -> None:
    await _create(client, animal_name="Max")
    await _create(client, animal_name="Luna", owner_last_name="Maxwell")
    await _create(client, animal_name="Pip", owner_last_name="Byrne")

    response = await client.get("/api/v1/reservations", params={"q": "MAX"})

    assert sorted(r["animal_name"] for r in response.json()) == ["Luna", "Max"]


async def test_check_out_keeps_record_and_cannot_be_undone(client: AsyncClient) -> None:
    created = await _create(client)

    checked_out = await client.post(f"/api/v1/reservations/{created['id']}/check-out")
    assert checked_out.status_code == 200
    assert checked_out.json()["status"] == "checked-out"

    reactivate = await client.patch(
        f"/api/v1/reservations/{created['id']}", json={"status": "active"}
    )
    assert reactivate.status_code == 400

    listing = await client.get("/api/v1/reservations")
    assert [r["status"] for r in listing.json()] == ["checked-out"]


async def test_remove_middle_day_splits_reservation(client: AsyncClient) -> None:
    created = await _create(client)

    response = await client.post(
        f"/api/v1/reservations/{created['id']}/remove-day",
        json={"date": "2024-06-12"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["outcome"] == "split"
    ranges = [(r["start_date"], r["end_date"]) for r in body["reservations"]]
    assert ranges == [("2024-06-10", "2024-06-11"), ("2024-06-13", "2024-06-14")]
    assert body["reservations"][0]["id"] == created["id"]
    assert body["reservations"][1]["notes"] == "Shy around dogs"


async def test_remove_only_day_deletes_reservation(client: AsyncClient) -> None:
    created = await _create(client, start_date="2024-06-10", end_date="2024-06-10")

    response = await client.post(
        f"/api/v1/reservations/{created['id']}/remove-day",
        json={"date": "2024-06-10"},
    )

    assert response.json() == {"outcome": "full-delete", "reservations": []}


async def test_remove_day_outside_stay_is_noop(client: AsyncClient) -> None:
    created = await _create(client)

    response = await client.post(
        f"/api/v1/reservations/{created['id']}/remove-day",
        json={"date": "2024-07-01"},
    )

    body = response.json()
    assert body["outcome"] == "no-op"
    assert body["reservations"][0]["end_date"] == "2024-06-14"


async def test_remove_day_unknown_reservation_returns_404(client: AsyncClient) -> None:
    response = await client.post(
        "/api/v1/reservations/missing/remove-day", json={"date": "2024-06-12"}
    )
    assert response.status_code == 404


async def test_pet_suggestions_are_unique_and_newest_first(client: AsyncClient) -> None:
    await _create(client, animal_name="Max", start_date="2024-01-05", end_date="2024-01-06")
    await _create(client, animal_name="max", start_date="2024-05-05", end_date="2024-05-06", animal_type="Ferret")
    await _create(client, animal_name="Maxine", start_date="2024-03-01", end_date="2024-03-02")
    await _create(client, animal_name="Luna")

    response = await client.get("/api/v1/reservations/suggestions", params={"name": "ma"})

    assert response.status_code == 200
    suggestions = response.json()
    assert [(s["animal_name"], s["animal_type"]) for s in suggestions] == [
        ("max", "Ferret"),
        ("Maxine", "Cat"),
    ]
    assert suggestions[0]["last_start_date"] == "2024-05-05"


async def test_medication_template_appends_line(client: AsyncClient) -> None:
    response = await client.post(
        "/api/v1/reservations/medication-template", json={"notes": "Eats wet food"}
    )
    assert response.json()["notes"] == (
        "Eats wet food\n- MEDICATION: [Name], [Dosage], [Frequency]"
    )

    empty = await client.post("/api/v1/reservations/medication-template", json={})
    assert empty.json()["notes"] == "- MEDICATION: [Name], [Dosage], [Frequency]"


async def test_unconfigured_store_returns_503(client: AsyncClient) -> None:
    app.state.reservation_store = None
    app.state.store_error = "STORE_BACKEND=database but DATABASE_URL is not set"

    response = await client.get("/api/v1/reservations")

    assert response.status_code == 503
    assert "DATABASE_URL" in response.json()["detail"]
