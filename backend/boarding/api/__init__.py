"""HTTP surface of the boarding calendar."""

from fastapi import APIRouter

from boarding.core.config import get_settings

from .v1 import router as v1_router

api_router = APIRouter(prefix=get_settings().api_v1_prefix)
api_router.include_router(v1_router)

__all__ = ["api_router"]
