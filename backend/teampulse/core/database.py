# core/database.py
"""
Engine et sessions SQLAlchemy asyncio.

Initialisation paresseuse : l'engine n'est créé qu'à la première requête,
jamais à l'import (les tests remplacent get_db sans toucher au driver).
"""
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from teampulse.core.config import get_settings
from teampulse.core.lazy import Lazy

Base = declarative_base()


def _create_engine() -> AsyncEngine:
    settings = get_settings()
    return create_async_engine(settings.DATABASE_URL, echo=settings.DB_ECHO, pool_pre_ping=True)


_engine = Lazy(_create_engine)
_session_factory = Lazy(
    lambda: async_sessionmaker(bind=_engine.get(), expire_on_commit=False, class_=AsyncSession)
)


def get_engine() -> AsyncEngine:
    return _engine.get()


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Dépendance FastAPI, une session par requête."""
    async with _session_factory.get()() as session:
        yield session
