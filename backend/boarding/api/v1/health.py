"""Health check endpoints."""

from datetime import UTC, datetime

from fastapi import APIRouter, Request

from boarding.core.config import get_settings
from boarding.schemas.health import DiagnosticCheck, DiagnosticsRead

router = APIRouter()


@router.get("", summary="Service health status")
async def healthcheck(request: Request) -> dict[str, str]:
    """Return application health metadata."""
    settings = get_settings()
    store = getattr(request.app.state, "reservation_store", None)
    return {
        "status": "ok",
        "service": settings.app_name,
        "timestamp": datetime.now(UTC).isoformat(),
        "environment": settings.app_env,
        "store": store.name if store is not None else "unavailable",
    }


@router.get("/diagnostics", response_model=DiagnosticsRead, summary="Store connectivity checks")
async def diagnostics(request: Request) -> DiagnosticsRead:
    store = getattr(request.app.state, "reservation_store", None)
    if store is None:
        reason = getattr(request.app.state, "store_error", None)
        return DiagnosticsRead(
            backend="unavailable",
            configuration=DiagnosticCheck(
                status="error",
                message=reason or "No reservation store is configured.",
            ),
            connection=DiagnosticCheck(
                status="pending", message="Waiting for configuration check..."
            ),
            query=DiagnosticCheck(status="pending", message="Waiting for connection check..."),
        )
    return await store.diagnose()
