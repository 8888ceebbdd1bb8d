"""Schema exports."""

from boarding.schemas.health import DiagnosticCheck, DiagnosticsRead
from boarding.schemas.reservation import (
    DayRemovalRequest,
    DayRemovalResponse,
    MedicationTemplateRequest,
    MedicationTemplateResponse,
    PetSuggestion,
    ReservationBase,
    ReservationRead,
    ReservationUpdate,
    ReservationWrite,
)
from boarding.schemas.scheduling import (
    CalendarDayRead,
    CalendarMonthRead,
    DailyBreakdownRead,
    TypeCountRead,
)
from boarding.schemas.summary import HandoverSummaryRead

__all__ = [
    "CalendarDayRead",
    "CalendarMonthRead",
    "DailyBreakdownRead",
    "DayRemovalRequest",
    "DayRemovalResponse",
    "DiagnosticCheck",
    "DiagnosticsRead",
    "HandoverSummaryRead",
    "MedicationTemplateRequest",
    "MedicationTemplateResponse",
    "PetSuggestion",
    "ReservationBase",
    "ReservationRead",
    "ReservationUpdate",
    "ReservationWrite",
    "TypeCountRead",
]
