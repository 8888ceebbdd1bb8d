"""Daily handover summaries generated by the AI collaborator."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import date
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from boarding.core.errors import SummaryGenerationFailed
from boarding.integrations.gemini_client import SummaryClient
from boarding.schemas.reservation import ReservationRead
from boarding.services.interval_service import is_same_calendar_day

logger = logging.getLogger(__name__)

__all__ = [
    "build_handover_prompt",
    "format_long_date",
    "generate_summary",
    "render_report_html",
]

_TEMPLATE_DIR = Path(__file__).resolve().parents[1] / "templates"
_ENV = Environment(
    loader=FileSystemLoader(_TEMPLATE_DIR),
    autoescape=select_autoescape(["html", "xml"]),
)

_PROMPT_TEMPLATE = """\
You are an assistant at a veterinary clinic. Your task is to generate a concise and professional daily handover summary for the next shift.
The summary should be easy to read and highlight any important information. Start with arrivals and departures, then provide the full summary for all animals present today.

Today is: {today}

**Animals Checking In Today:**
{check_ins}

**Animals Checking Out Today:**
{check_outs}

**Full List of Boarders Present Today:**
{boarders}

Please generate the handover summary based on the information above.
- Start with a clear, friendly opening.
- List any animals arriving today.
- List any animals departing today.
- Then, provide a brief but comprehensive summary for all animals that are staying, paying special attention to any notes (medication, diet, behavior).
- IMPORTANT: Stick strictly to the information provided. Do not make any statements about how a pet is feeling or doing (e.g., "is happy," "is settling in well"), as you do not have this information. Only report the facts from the notes.
- Conclude with a friendly closing.
"""


def format_long_date(day: date) -> str:
    """Render ``day`` like ``Saturday, June 1, 2024``."""
    return f"{day:%A}, {day:%B} {day.day}, {day.year}"


def _format_line(reservation: ReservationRead) -> str:
    return (
        f"- {reservation.animal_name} ({reservation.animal_type.value}). "
        f"Notes: {reservation.notes or 'None'}"
    )


def _format_block(reservations: Sequence[ReservationRead]) -> str:
    if not reservations:
        return "None."
    return "\n".join(_format_line(r) for r in reservations)


def build_handover_prompt(
    day_boarders: Sequence[ReservationRead],
    day: date,
    all_reservations: Sequence[ReservationRead],
) -> str:
    """Compose the prompt; arrivals and departures come from the full collection."""
    check_ins = [r for r in all_reservations if is_same_calendar_day(r.start_date, day)]
    check_outs = [r for r in all_reservations if is_same_calendar_day(r.end_date, day)]
    return _PROMPT_TEMPLATE.format(
        today=format_long_date(day),
        check_ins=_format_block(check_ins),
        check_outs=_format_block(check_outs),
        boarders="\n".join(_format_line(r) for r in day_boarders),
    )


async def generate_summary(
    client: SummaryClient,
    day_boarders: Sequence[ReservationRead],
    day: date,
    all_reservations: Sequence[ReservationRead],
) -> str:
    """Ask the AI collaborator for the handover text of ``day``."""
    if not day_boarders:
        raise ValueError("No reservations for this day to generate a summary.")
    prompt = build_handover_prompt(day_boarders, day, all_reservations)
    logger.info("Generating handover summary for %s (%d boarders)", day, len(day_boarders))
    try:
        return await client.generate(prompt)
    except SummaryGenerationFailed:
        raise
    except Exception as exc:
        logger.exception("Summary collaborator failed")
        raise SummaryGenerationFailed("Failed to generate summary.") from exc


def render_report_html(summary_text: str, day: date) -> str:
    """Printable HTML page wrapping a generated summary."""
    template = _ENV.get_template("handover_report.html")
    return template.render(
        formatted_date=format_long_date(day),
        paragraphs=summary_text.split("\n"),
    )
