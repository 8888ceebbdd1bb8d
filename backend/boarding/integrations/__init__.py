"""Integration shortcuts."""

from .gemini_client import GeminiSummaryClient, SummaryClient, build_summary_client

__all__ = [
    "GeminiSummaryClient",
    "SummaryClient",
    "build_summary_client",
]
