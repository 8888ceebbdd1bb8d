"""Error kinds surfaced by the boarding backend."""

from __future__ import annotations


class BoardingError(RuntimeError):
    """Base class for non-fatal errors reported back to staff."""


class StoreUnavailable(BoardingError):
    """Raised when the reservation backend is not configured or reachable."""


class StoreOperationFailed(BoardingError):
    """Raised when a single list/upsert/delete call against a store fails."""


class SummaryGenerationFailed(BoardingError):
    """Raised when the AI handover summary could not be produced."""


__all__ = [
    "BoardingError",
    "StoreOperationFailed",
    "StoreUnavailable",
    "SummaryGenerationFailed",
]
