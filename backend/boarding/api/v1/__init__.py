"""Versioned API router."""

from fastapi import APIRouter

from . import calendar, daily, health, reservations, summaries

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(reservations.router, prefix="/reservations", tags=["reservations"])
router.include_router(daily.router, prefix="/daily", tags=["daily"])
router.include_router(calendar.router, prefix="/calendar", tags=["calendar"])
router.include_router(summaries.router, prefix="/summaries", tags=["summaries"])
