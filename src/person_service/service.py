"""
Person use cases.

:class:`PersonService` validates input, builds filter specifications from
query parameters and delegates storage to any :class:`PersonRepository`
(SQLAlchemy or in-memory).
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import TYPE_CHECKING, Protocol

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from .config import Settings, get_settings
from .domain.enums import Color, Country
from .domain.exceptions import (
    InvalidPersonDataError,
    PersonNotFoundError,
    PersonValidationError,
    ValidationSource,
)
from .domain.person import Person, PersonData
from .filtering.pagination import PaginationParser

if TYPE_CHECKING:
    from collections.abc import Mapping
    from enum import Enum

    from .filtering import Page, PageRequest, PredicateBuilder
    from .specifications import ISpecification

logger = logging.getLogger(__name__)


class PersonRepository(Protocol):
    async def add(self, person: Person) -> Person: ...

    async def get(self, person_id: int) -> Person | None: ...

    async def update(self, person: Person) -> Person | None: ...

    async def delete(self, person_id: int) -> bool: ...

    async def exists(self, person_id: int) -> bool: ...

    async def count(self) -> int: ...

    async def find_page(
        self, spec: ISpecification[Person] | None, page_request: PageRequest
    ) -> Page[Person]: ...

    async def first_by_hair_color(self, color: Color) -> Person | None: ...

    async def max_name(self) -> Person | None: ...

    async def find_by_nationality_less_than(self, country: Country) -> list[Person]: ...

    async def count_by_hair_color(self, color: Color) -> int: ...

    async def count_by_eye_color_and_nationality(
        self, eye_color: Color, nationality: Country
    ) -> int: ...

    async def count_grouped(self, attr: str) -> dict[Enum, int]: ...


def validate_id(person_id: int | None) -> int:
    if person_id is None or person_id <= 0:
        raise PersonValidationError(
            {"id": ["ID must be a positive number"]},
            source=ValidationSource.URL_PARAMETER,
        )
    return person_id


class PersonService:
    def __init__(
        self,
        repository: PersonRepository,
        builder: PredicateBuilder,
        settings: Settings | None = None,
    ) -> None:
        self.repository = repository
        self.builder = builder
        self.settings = settings or get_settings()
        self.paginator = PaginationParser(builder.schema)

    def page_request(self, params: Mapping[str, str]) -> PageRequest:
        """Read ``page``, ``size``, ``sortBy``, ``sortDirection`` from query params."""
        return self.paginator.parse(
            params,
            default_size=self.settings.default_page_size,
            max_size=self.settings.max_page_size,
        )

    # -- queries ------------------------------------------------------------

    async def find_all_with_filters(
        self, params: Mapping[str, str], page_request: PageRequest
    ) -> Page[Person]:
        """Filter with ``field`` / ``field[op]`` params and return one page."""
        spec = self.builder.build(params)
        logger.debug("Filter specification: %s", spec.to_dict())
        return await self.repository.find_page(spec, page_request)

    async def find_by_id(self, person_id: int) -> Person:
        validate_id(person_id)
        person = await self.repository.get(person_id)
        if person is None:
            raise PersonNotFoundError(person_id)
        return person

    async def exists_by_id(self, person_id: int | None) -> bool:
        return (
            person_id is not None
            and person_id > 0
            and await self.repository.exists(person_id)
        )

    async def count(self) -> int:
        return await self.repository.count()

    # -- mutations ----------------------------------------------------------

    async def save(self, data: PersonData | None) -> Person:
        if data is None:
            raise InvalidPersonDataError("Person cannot be null")
        person = data.to_person(creation_date=datetime.now())
        logger.info("Saving person: %s", person.name)
        try:
            return await self.repository.add(person)
        except IntegrityError:
            logger.error("Data integrity violation while saving person %s", person.name)
            raise
        except SQLAlchemyError as e:
            logger.exception("Unexpected error while saving person")
            raise InvalidPersonDataError(f"Unable to save person: {e}") from e

    async def update(self, person_id: int, data: PersonData | None) -> Person:
        existing = await self.find_by_id(person_id)
        if data is None:
            raise InvalidPersonDataError("Person cannot be null")
        person = data.to_person(
            person_id=person_id, creation_date=existing.creation_date
        )
        logger.info("Updating person with ID %s: %s", person_id, person.name)
        try:
            updated = await self.repository.update(person)
        except IntegrityError:
            logger.error("Data integrity violation while updating person %s", person_id)
            raise
        except SQLAlchemyError as e:
            logger.exception("Unexpected error while updating person %s", person_id)
            raise InvalidPersonDataError(f"Unable to update person: {e}") from e
        if updated is None:
            raise PersonNotFoundError(person_id)
        return updated

    async def delete_by_id(self, person_id: int) -> None:
        validate_id(person_id)
        if not await self.repository.exists(person_id):
            raise PersonNotFoundError(person_id)
        logger.info("Deleting person with ID: %s", person_id)
        await self.repository.delete(person_id)

    async def delete_by_hair_color(self, hair_color: Color | None) -> Person:
        """Delete the first person (lowest id) with ``hair_color``."""
        if hair_color is None:
            raise InvalidPersonDataError("Hair color cannot be null")
        person = await self.repository.first_by_hair_color(hair_color)
        if person is None:
            logger.info("No person found with hair color: %s", hair_color.name)
            raise PersonNotFoundError(
                message=f"Person with hair color {hair_color.name} not found"
            )
        logger.info(
            "Deleting person with hair color %s: %s", hair_color.name, person.name
        )
        await self.repository.delete(person.id)  # type: ignore[arg-type]
        return person

    # -- statistics ---------------------------------------------------------

    async def find_person_with_max_name(self) -> Person | None:
        person = await self.repository.max_name()
        if person is None:
            logger.info("No persons found with non-null names")
        else:
            logger.info(
                "Found person with max name length: %s (length: %s)",
                person.name,
                len(person.name),
            )
        return person

    async def find_by_nationality_less_than(
        self, nationality: Country | None
    ) -> list[Person]:
        if nationality is None:
            raise InvalidPersonDataError("Nationality cannot be null")
        result = await self.repository.find_by_nationality_less_than(nationality)
        logger.info(
            "Found %s persons with nationality less than %s",
            len(result),
            nationality.name,
        )
        return result

    async def calculate_hair_color_percentage(self, hair_color: Color | None) -> float:
        if hair_color is None:
            raise InvalidPersonDataError("Hair color cannot be null")
        total = await self.repository.count()
        if total == 0:
            logger.info("No persons found in database")
            return 0.0
        matching = await self.repository.count_by_hair_color(hair_color)
        percentage = matching / total * 100
        logger.info(
            "Hair color %s statistics: %s out of %s persons (%.2f%%)",
            hair_color.name,
            matching,
            total,
            percentage,
        )
        return percentage

    async def calculate_nationality_eye_color_count(
        self, nationality: Country | None, eye_color: Color | None
    ) -> int:
        if nationality is None:
            raise InvalidPersonDataError("Nationality cannot be null")
        if eye_color is None:
            raise InvalidPersonDataError("Eye color cannot be null")
        count = await self.repository.count_by_eye_color_and_nationality(
            eye_color, nationality
        )
        logger.info(
            "Found %s persons with nationality %s and eye color %s",
            count,
            nationality.name,
            eye_color.name,
        )
        return count

    async def get_hair_color_statistics(self) -> dict[Color, int]:
        counts = await self.repository.count_grouped("hair_color")
        return {color: counts.get(color, 0) for color in Color}

    async def get_nationality_statistics(self) -> dict[Country, int]:
        counts = await self.repository.count_grouped("nationality")
        return {country: counts.get(country, 0) for country in Country}
