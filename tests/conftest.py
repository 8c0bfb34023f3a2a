"""Pytest bootstrap configuration.

Set environment defaults before any module that reads application settings
is imported, then provide a fresh, bootstrapped in-memory store per test.
"""
import os

os.environ.setdefault("DATABASE__URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("GRPC__STRICT_VALIDATION", "false")

import functools

import pytest
from sqlalchemy.ext.asyncio import async_sessionmaker

from application.services.person_service import PersonApplicationService
from infrastructure.database import bootstrap_database, build_engine
from infrastructure.unit_of_work import SQLAlchemyUnitOfWork


@pytest.fixture
async def db_engine():
    """Independent in-memory database, schema recreated and seeded (ids 1-4)."""
    engine = build_engine("sqlite+aiosqlite:///:memory:")
    await bootstrap_database(engine)
    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture
def uow_factory(db_engine):
    session_factory = async_sessionmaker(bind=db_engine, expire_on_commit=False)
    return functools.partial(SQLAlchemyUnitOfWork, session_factory)


@pytest.fixture
def person_service(uow_factory) -> PersonApplicationService:
    return PersonApplicationService(uow_factory=uow_factory)
