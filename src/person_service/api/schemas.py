"""Request / response bodies (camelCase on the wire)."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from ..domain.enums import Color, Country
from ..domain.person import Coordinates, Location, Person, PersonData


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CoordinatesDTO(CamelModel):
    x: int
    y: int

    def to_domain(self) -> Coordinates:
        return Coordinates(x=self.x, y=self.y)


class LocationDTO(CamelModel):
    x: int | None = None
    y: float | None = None
    z: float | None = None
    name: str

    def to_domain(self) -> Location:
        return Location(x=self.x, y=self.y, z=self.z, name=self.name)


class PersonRequest(CamelModel):
    """
    Create / update body.

    Fields are optional here so that missing values are reported together by
    the domain validation rather than one at a time.
    """

    name: str | None = None
    coordinates: CoordinatesDTO | None = None
    height: int | None = None
    weight: float | None = None
    hair_color: Color | None = None
    eye_color: Color | None = None
    nationality: Country | None = None
    location: LocationDTO | None = None

    def to_data(self) -> PersonData:
        return PersonData(
            name=self.name,
            coordinates=self.coordinates.to_domain() if self.coordinates else None,
            height=self.height,
            weight=self.weight,
            hair_color=self.hair_color,
            eye_color=self.eye_color,
            nationality=self.nationality,
            location=self.location.to_domain() if self.location else None,
        )


class PersonResponse(CamelModel):
    id: int
    name: str
    coordinates: CoordinatesDTO
    creation_date: datetime
    height: int | None = None
    weight: float
    hair_color: Color
    eye_color: Color
    nationality: Country
    location: LocationDTO

    @classmethod
    def from_person(cls, person: Person) -> PersonResponse:
        return cls.model_validate(person.model_dump())


class ErrorResponse(CamelModel):
    error: str
    message: str
    timestamp: datetime
    path: str
    errors: dict[str, Any] | None = None
