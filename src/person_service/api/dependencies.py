"""FastAPI dependencies.

Each request gets its own ``AsyncSession`` (committed when the handler
returns, rolled back on error) and a :class:`PersonService` bound to it.
"""

from collections.abc import AsyncIterator
from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from ..config import Settings
from ..filtering import PERSON_SCHEMA, PredicateBuilder
from ..persistence import SQLAlchemyPersonRepository, session_scope
from ..service import PersonService


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


async def get_session(request: Request) -> AsyncIterator[AsyncSession]:
    async with session_scope(request.app.state.session_factory) as session:
        yield session


def get_builder(
    request: Request, settings: Annotated[Settings, Depends(get_settings)]
) -> PredicateBuilder:
    return PredicateBuilder(
        PERSON_SCHEMA,
        registry=request.app.state.registry,
        strict=settings.strict_filters,
    )


def get_service(
    session: Annotated[AsyncSession, Depends(get_session)],
    builder: Annotated[PredicateBuilder, Depends(get_builder)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> PersonService:
    return PersonService(SQLAlchemyPersonRepository(session), builder, settings)


ServiceDep = Annotated[PersonService, Depends(get_service)]
