from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from sqlalchemy import delete, exists, func, select

from ..filtering.ordinal import ranking_for
from ..filtering.pagination import Page, PageRequest
from .compiler import apply_page_request, build_sqla_filter, ranked
from .models import PersonModel, resolve_column

if TYPE_CHECKING:
    from enum import Enum

    from sqlalchemy.ext.asyncio import AsyncSession

    from ..domain.enums import Color, Country
    from ..domain.person import Person
    from ..specifications import ISpecification
    from .strategy import SQLAlchemyOperatorRegistry

logger = logging.getLogger(__name__)


class SQLAlchemyPersonRepository:
    """
    Person storage over an ``AsyncSession``.

    The caller owns the session and its transaction; the repository only
    flushes so that generated ids are visible.

    ``find_page`` compiles the specification tree into a ``WHERE`` clause::

        page = await repo.find_page(spec, PageRequest(page=0, size=10))
    """

    def __init__(
        self,
        session: AsyncSession,
        *,
        registry: SQLAlchemyOperatorRegistry | None = None,
    ) -> None:
        self.session = session
        self._registry = registry

    # -- CRUD ---------------------------------------------------------------

    async def add(self, person: Person) -> Person:
        model = PersonModel.from_domain(person)
        self.session.add(model)
        await self.session.flush()
        return model.to_domain()

    async def get(self, person_id: int) -> Person | None:
        model = await self.session.get(PersonModel, person_id)
        if model is None:
            return None
        return model.to_domain()

    async def update(self, person: Person) -> Person | None:
        model = await self.session.get(PersonModel, person.id)
        if model is None:
            return None
        model.apply(person)
        await self.session.flush()
        return model.to_domain()

    async def delete(self, person_id: int) -> bool:
        result = await self.session.execute(
            delete(PersonModel).where(PersonModel.id == person_id)
        )
        return bool(result.rowcount)

    async def exists(self, person_id: int) -> bool:
        stmt = select(exists().where(PersonModel.id == person_id))
        return bool(await self.session.scalar(stmt))

    async def count(self) -> int:
        return int(await self.session.scalar(select(func.count(PersonModel.id))) or 0)

    # -- search -------------------------------------------------------------

    def _where(self, spec: ISpecification[Person] | None) -> Any:
        return build_sqla_filter(
            spec.to_dict() if spec is not None else {},
            resolve_column,
            registry=self._registry,
        )

    async def find_page(
        self,
        spec: ISpecification[Person] | None,
        page_request: PageRequest,
    ) -> Page[Person]:
        """Run the filtered query and return one page plus the total count."""
        where_clause = self._where(spec)

        total = await self.session.scalar(
            select(func.count(PersonModel.id)).where(where_clause)
        )
        stmt = apply_page_request(
            select(PersonModel).where(where_clause), page_request, resolve_column
        )
        # id breaks ties so pages never overlap
        stmt = stmt.order_by(PersonModel.id)
        models = (await self.session.scalars(stmt)).all()
        logger.debug(
            "find_page matched %s rows, returning %s", total, len(models)
        )
        return Page(
            items=[m.to_domain() for m in models],
            total_elements=int(total or 0),
            page=page_request.page,
            size=page_request.size,
        )

    async def find_all(self, spec: ISpecification[Person] | None = None) -> list[Person]:
        stmt = select(PersonModel).where(self._where(spec)).order_by(PersonModel.id)
        return [m.to_domain() for m in (await self.session.scalars(stmt)).all()]

    # -- queries behind the statistics endpoints ---------------------------

    async def first_by_hair_color(self, color: Color) -> Person | None:
        stmt = (
            select(PersonModel)
            .where(PersonModel.hair_color == color)
            .order_by(PersonModel.id)
            .limit(1)
        )
        model = await self.session.scalar(stmt)
        return model.to_domain() if model is not None else None

    async def max_name(self) -> Person | None:
        """Person with the longest name; ties go to the lowest id."""
        stmt = (
            select(PersonModel)
            .order_by(func.length(PersonModel.name).desc(), PersonModel.id)
            .limit(1)
        )
        model = await self.session.scalar(stmt)
        return model.to_domain() if model is not None else None

    async def find_by_nationality_less_than(self, country: Country) -> list[Person]:
        ranking = ranking_for(type(country))
        stmt = (
            select(PersonModel)
            .where(ranked(PersonModel.nationality, ranking) < ranking[country.name])
            .order_by(PersonModel.id)
        )
        return [m.to_domain() for m in (await self.session.scalars(stmt)).all()]

    async def count_by_hair_color(self, color: Color) -> int:
        stmt = select(func.count(PersonModel.id)).where(PersonModel.hair_color == color)
        return int(await self.session.scalar(stmt) or 0)

    async def count_by_eye_color_and_nationality(
        self, eye_color: Color, nationality: Country
    ) -> int:
        stmt = select(func.count(PersonModel.id)).where(
            PersonModel.eye_color == eye_color,
            PersonModel.nationality == nationality,
        )
        return int(await self.session.scalar(stmt) or 0)

    async def count_grouped(self, attr: str) -> dict[Enum, int]:
        """Row count per distinct value of an enum column."""
        column = resolve_column(attr)
        stmt = select(column, func.count(PersonModel.id)).group_by(column)
        rows: Sequence[Any] = (await self.session.execute(stmt)).all()
        return {value: int(count) for value, count in rows}
