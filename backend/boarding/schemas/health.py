"""Health and diagnostics schemas."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel

CheckStatus = Literal["pending", "success", "error"]


class DiagnosticCheck(BaseModel):
    status: CheckStatus
    message: str


class DiagnosticsRead(BaseModel):
    """Step-by-step connectivity report for the reservation store."""

    backend: str
    configuration: DiagnosticCheck
    connection: DiagnosticCheck
    query: DiagnosticCheck
