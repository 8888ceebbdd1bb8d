"""Common API dependencies."""

from __future__ import annotations

from fastapi import HTTPException, Request, status

from boarding.integrations.gemini_client import SummaryClient
from boarding.services.reservation_store import ReservationStore


def get_reservation_store(request: Request) -> ReservationStore:
    """Return the store constructed for this application at startup."""
    store: ReservationStore | None = getattr(request.app.state, "reservation_store", None)
    if store is None:
        reason = getattr(request.app.state, "store_error", None) or "Reservation store is not configured"
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=reason)
    return store


def get_summary_client(request: Request) -> SummaryClient:
    client: SummaryClient | None = getattr(request.app.state, "summary_client", None)
    if client is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="AI summary service is not configured",
        )
    return client
