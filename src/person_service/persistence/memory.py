"""InMemoryPersonRepository: dict-backed store evaluating specifications in memory."""

from __future__ import annotations

import itertools
from collections import Counter
from enum import Enum
from typing import TYPE_CHECKING, Any

from ..filtering.ordinal import ranking_for
from ..filtering.pagination import Page, PageRequest, SortDirection
from ..specifications import resolve_path

if TYPE_CHECKING:
    import builtins
    from collections.abc import Iterable

    from ..domain.enums import Color, Country
    from ..domain.person import Person
    from ..specifications import ISpecification


def _sort_key(value: Any) -> tuple[bool, Any]:
    # NULLs sort first, as in SQLite; enums order by stored name
    if isinstance(value, Enum):
        value = value.name
    return (value is not None, value)


class InMemoryPersonRepository:
    """Same interface as :class:`SQLAlchemyPersonRepository`, backed by a dict."""

    def __init__(self, persons: Iterable[Person] = ()) -> None:
        self._store: dict[int, Person] = {}
        self._ids = itertools.count(1)
        for person in persons:
            if person.id is None:
                person = person.model_copy(update={"id": next(self._ids)})
            self._store[person.id] = person  # type: ignore[index]
        if self._store:
            self._ids = itertools.count(max(self._store) + 1)

    async def add(self, person: Person) -> Person:
        stored = person.model_copy(update={"id": next(self._ids)})
        self._store[stored.id] = stored  # type: ignore[index]
        return stored

    async def get(self, person_id: int) -> Person | None:
        return self._store.get(person_id)

    async def update(self, person: Person) -> Person | None:
        if person.id not in self._store:
            return None
        self._store[person.id] = person
        return person

    async def delete(self, person_id: int) -> bool:
        return self._store.pop(person_id, None) is not None

    async def exists(self, person_id: int) -> bool:
        return person_id in self._store

    async def count(self) -> int:
        return len(self._store)

    def _matching(self, spec: ISpecification[Person] | None) -> builtins.list[Person]:
        persons = [self._store[k] for k in sorted(self._store)]
        if spec is None:
            return persons
        return [p for p in persons if spec.is_satisfied_by(p)]

    async def find_page(
        self,
        spec: ISpecification[Person] | None,
        page_request: PageRequest,
    ) -> Page[Person]:
        matches = self._matching(spec)
        if page_request.sort_by:
            attr = page_request.sort_by
            matches.sort(
                key=lambda p: _sort_key(resolve_path(p, attr)),
                reverse=page_request.sort_direction is SortDirection.DESC,
            )
        start = page_request.offset
        return Page(
            items=matches[start : start + page_request.size],
            total_elements=len(matches),
            page=page_request.page,
            size=page_request.size,
        )

    async def find_all(
        self, spec: ISpecification[Person] | None = None
    ) -> builtins.list[Person]:
        return self._matching(spec)

    async def first_by_hair_color(self, color: Color) -> Person | None:
        return next((p for p in self._matching(None) if p.hair_color is color), None)

    async def max_name(self) -> Person | None:
        persons = self._matching(None)
        if not persons:
            return None
        return max(persons, key=lambda p: len(p.name))

    async def find_by_nationality_less_than(
        self, country: Country
    ) -> builtins.list[Person]:
        ranking = ranking_for(type(country))
        limit = ranking[country.name]
        return [p for p in self._matching(None) if ranking[p.nationality.name] < limit]

    async def count_by_hair_color(self, color: Color) -> int:
        return sum(1 for p in self._store.values() if p.hair_color is color)

    async def count_by_eye_color_and_nationality(
        self, eye_color: Color, nationality: Country
    ) -> int:
        return sum(
            1
            for p in self._store.values()
            if p.eye_color is eye_color and p.nationality is nationality
        )

    async def count_grouped(self, attr: str) -> dict[Enum, int]:
        return dict(Counter(resolve_path(p, attr) for p in self._store.values()))

    # -- test helpers --------------------------------------------------------

    def clear(self) -> None:
        self._store.clear()

    def __len__(self) -> int:
        return len(self._store)
