"""Tests for handover prompt construction and report rendering."""

from __future__ import annotations

from datetime import date

import pytest

from boarding.core.errors import SummaryGenerationFailed
from boarding.integrations.gemini_client import GeminiSummaryClient
from boarding.models.reservation import AnimalType
from boarding.services import summary_service

def test_format_long_date() -> None:
    assert summary_service.format_long_date(date(2024, 6, 1)) == "Saturday, June 1, 2024"


def test_prompt_lists_arrivals_departures_and_boarders(make_reservation) -> None:
    day = date(2024, 6, 3)
    arriving = make_reservation(day, date(2024, 6, 5), animal_name="Luna", animal_type=AnimalType.RABBIT)
    departing = make_reservation(
        date(2024, 6, 1), day, animal_name="Max", notes="- MEDICATION: Metacam, 0.5ml, daily"
    )
    staying = make_reservation(date(2024, 6, 1), date(2024, 6, 9), animal_name="Biscuit")
    boarders = [arriving, departing, staying]

    prompt = summary_service.build_handover_prompt(boarders, day, boarders)

    assert "Today is: Monday, June 3, 2024" in prompt
    check_ins = prompt.split("**Animals Checking In Today:**")[1].split("**")[0]
    check_outs = prompt.split("**Animals Checking Out Today:**")[1].split("**")[0]
    assert "- Luna (Rabbit). Notes: None" in check_ins
    assert "Max" not in check_ins
    assert "- Max (Cat). Notes: - MEDICATION: Metacam, 0.5ml, daily" in check_outs
    assert "Biscuit" in prompt.split("**Full List of Boarders Present Today:**")[1]


def test_prompt_marks_empty_arrival_and_departure_blocks(make_reservation) -> None:
    day = date(2024, 6, 3)
    staying = make_reservation(date(2024, 6, 1), date(2024, 6, 9), animal_name="Biscuit")

    prompt = summary_service.build_handover_prompt([staying], day, [staying])

    assert "**Animals Checking In Today:**\nNone." in prompt
    assert "**Animals Checking Out Today:**\nNone." in prompt


def test_prompt_departures_come_from_full_collection(make_reservation) -> None:
    day = date(2024, 6, 3)
    staying = make_reservation(date(2024, 6, 1), date(2024, 6, 9), animal_name="Biscuit")
    leaving = make_reservation(date(2024, 6, 1), day, animal_name="Pip")

    prompt = summary_service.build_handover_prompt([staying], day, [staying, leaving])

    assert "- Pip (Cat)" in prompt.split("**Animals Checking Out Today:**")[1]


@pytest.mark.asyncio
async def test_generate_summary_requires_boarders(summary_client) -> None:
    with pytest.raises(ValueError):
        await summary_service.generate_summary(summary_client, [], date(2024, 6, 3), [])
    assert summary_client.prompts == []


@pytest.mark.asyncio
async def test_generate_summary_returns_client_text(summary_client, make_reservation) -> None:
    stay = make_reservation(date(2024, 6, 3))

    text = await summary_service.generate_summary(summary_client, [stay], date(2024, 6, 3), [stay])

    assert text == "Good morning team."
    assert len(summary_client.prompts) == 1


@pytest.mark.asyncio
async def test_generate_summary_wraps_client_errors(summary_client, make_reservation) -> None:
    summary_client.error = ConnectionError("boom")
    stay = make_reservation(date(2024, 6, 3))

    with pytest.raises(SummaryGenerationFailed):
        await summary_service.generate_summary(summary_client, [stay], date(2024, 6, 3), [stay])


@pytest.mark.asyncio
async def test_unconfigured_gemini_client_fails_cleanly() -> None:
    client = GeminiSummaryClient(None)
    assert not client.configured
    with pytest.raises(SummaryGenerationFailed):
        await client.generate("prompt")


def test_report_html_escapes_text_and_keeps_line_breaks() -> None:
    html = summary_service.render_report_html(
        "Good morning!\n<script>alert(1)</script>", date(2024, 6, 1)
    )

    assert "Saturday, June 1, 2024" in html
    assert "Good morning!<br>" in html
    assert "<script>" not in html
    assert "&lt;script&gt;" in html
