"""Shared fixtures: operator registry, demo dataset, SQLite session, HTTP client."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from fastapi.testclient import TestClient

from person_service.api import create_app
from person_service.config import Settings
from person_service.filtering import PERSON_SCHEMA, PredicateBuilder
from person_service.persistence import (
    SEED_PERSONS,
    InMemoryPersonRepository,
    SQLAlchemyPersonRepository,
    build_engine,
    build_session_factory,
    create_tables,
    seed_database,
)
from person_service.service import PersonService
from person_service.specifications import build_default_registry

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, Iterator

    from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

    from person_service.domain import Person
    from person_service.specifications import MemoryOperatorRegistry

MEMORY_DB = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
def registry() -> MemoryOperatorRegistry:
    """Default in-memory operator registry for building specs."""
    return build_default_registry()


@pytest.fixture
def builder(registry: MemoryOperatorRegistry) -> PredicateBuilder:
    return PredicateBuilder(PERSON_SCHEMA, registry=registry)


@pytest.fixture
def persons() -> list[Person]:
    return list(SEED_PERSONS)


@pytest.fixture
def settings() -> Settings:
    return Settings(database_url=MEMORY_DB, seed_data=True, _env_file=None)


@pytest.fixture
def memory_repo(persons: list[Person]) -> InMemoryPersonRepository:
    return InMemoryPersonRepository(persons)


@pytest.fixture
def memory_service(
    memory_repo: InMemoryPersonRepository,
    builder: PredicateBuilder,
    settings: Settings,
) -> PersonService:
    return PersonService(memory_repo, builder, settings)


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    eng = build_engine(MEMORY_DB)
    await create_tables(eng)
    yield eng
    await eng.dispose()


@pytest.fixture
async def session(engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    factory = build_session_factory(engine)
    async with factory() as sess:
        await seed_database(sess)
        await sess.commit()
        yield sess


@pytest.fixture
def sql_repo(session: AsyncSession) -> SQLAlchemyPersonRepository:
    return SQLAlchemyPersonRepository(session)


@pytest.fixture
def client(settings: Settings) -> Iterator[TestClient]:
    with TestClient(create_app(settings)) as test_client:
        yield test_client
