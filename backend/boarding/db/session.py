"""Async engines for the database reservation store."""

from __future__ import annotations

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from boarding.core.config import get_settings
from boarding.core.errors import StoreUnavailable

_engines: dict[str, tuple[AsyncEngine, async_sessionmaker[AsyncSession]]] = {}


def _resolve_database_url(override: str | None = None) -> str:
    url = override or get_settings().database_url
    if not url:
        raise StoreUnavailable("DATABASE_URL is not configured")
    return url


def _connect(url: str) -> tuple[AsyncEngine, async_sessionmaker[AsyncSession]]:
    cached = _engines.get(url)
    if cached is not None:
        return cached
    options: dict[str, object] = {"echo": False}
    if make_url(url).get_backend_name() != "sqlite":
        # Hosted databases may be paused between uses; recycle dead connections.
        options["pool_pre_ping"] = True
    engine = create_async_engine(url, **options)
    sessionmaker = async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)
    _engines[url] = (engine, sessionmaker)
    return engine, sessionmaker


def get_sessionmaker(database_url: str | None = None) -> async_sessionmaker[AsyncSession]:
    """Return the cached sessionmaker for ``database_url`` (or ``DATABASE_URL``)."""
    return _connect(_resolve_database_url(database_url))[1]


def get_engine(database_url: str | None = None) -> AsyncEngine:
    return _connect(_resolve_database_url(database_url))[0]


async def dispose_engine(database_url: str | None = None) -> None:
    """Dispose and forget the engine for the given database URL."""
    cached = _engines.pop(_resolve_database_url(database_url), None)
    if cached is not None:
        await cached[0].dispose()
