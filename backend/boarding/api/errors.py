"""Translate domain errors into HTTP responses."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from boarding.core.errors import (
    BoardingError,
    StoreOperationFailed,
    StoreUnavailable,
    SummaryGenerationFailed,
)

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR: dict[type[BoardingError], int] = {
    StoreUnavailable: status.HTTP_503_SERVICE_UNAVAILABLE,
    StoreOperationFailed: status.HTTP_502_BAD_GATEWAY,
    SummaryGenerationFailed: status.HTTP_502_BAD_GATEWAY,
}


def status_for(exc: BoardingError) -> int:
    for kind, code in _STATUS_BY_ERROR.items():
        if isinstance(exc, kind):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def _boarding_error_handler(request: Request, exc: BoardingError) -> JSONResponse:
    logger.warning("%s on %s %s: %s", type(exc).__name__, request.method, request.url.path, exc)
    return JSONResponse(
        status_code=status_for(exc),
        content={"detail": str(exc), "error": type(exc).__name__},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BoardingError, _boarding_error_handler)  # type: ignore[arg-type]
