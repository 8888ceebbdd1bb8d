"""FastAPI application entrypoint."""

import logging
from contextlib import asynccontextmanager

from asgi_correlation_id import CorrelationIdMiddleware
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from secure import Secure

from boarding.api import api_router
from boarding.api.errors import register_exception_handlers
from boarding.core.config import get_settings
from boarding.core.errors import StoreUnavailable
from boarding.integrations.gemini_client import build_summary_client
from boarding.security.logging_filters import SensitiveFilter
from boarding.services.reservation_store import build_reservation_store

logger = logging.getLogger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    if not settings.database_configured:
        logger.warning(
            "DATABASE_URL not found; reservations fall back to the local store at %s",
            settings.local_store_path,
        )
    if not settings.summary_configured:
        logger.warning(
            "Gemini API key not found. AI summaries are disabled until API_KEY "
            "(or GEMINI_API_KEY) is provided."
        )

    if getattr(app.state, "reservation_store", None) is None:
        try:
            app.state.reservation_store = build_reservation_store(settings)
        except StoreUnavailable as exc:
            logger.error("Reservation store unavailable: %s", exc)
            app.state.reservation_store = None
            app.state.store_error = str(exc)
    if getattr(app.state, "summary_client", None) is None:
        app.state.summary_client = build_summary_client(settings)

    store = app.state.reservation_store
    if store is not None:
        logger.info("Using %s reservation store", store.name)
    try:
        yield
    finally:
        if store is not None:
            try:
                await store.close()
            except Exception:
                logger.exception("Failed to close reservation store")


app = FastAPI(title=settings.app_name, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "X-Request-ID"],
    expose_headers=["X-Request-ID"],
)
app.add_middleware(CorrelationIdMiddleware, header_name="X-Request-ID")

_secure_headers = Secure()


@app.middleware("http")
async def _apply_security_headers(request, call_next):
    response = await call_next(request)
    _secure_headers.set_headers(response)
    return response


for _logger_name in ("uvicorn", "uvicorn.access", "uvicorn.error", ""):
    _logger = logging.getLogger(_logger_name)
    if not any(isinstance(flt, SensitiveFilter) for flt in _logger.filters):
        _logger.addFilter(SensitiveFilter())

register_exception_handlers(app)
app.include_router(api_router)


@app.get("/", include_in_schema=False)
async def root() -> dict[str, str]:
    """Return a simple welcome message."""
    return {"message": settings.app_name}
