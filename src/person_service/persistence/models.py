from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, Enum, Float, Integer, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from ..domain.enums import Color, Country
from ..domain.person import Coordinates, Location, Person


class Base(DeclarativeBase):
    """Declarative base for the person service tables."""


class PersonModel(Base):
    """
    Row model for :class:`~person_service.domain.person.Person`.

    The embedded ``coordinates`` and ``location`` values are flattened into
    prefixed columns. Enums are stored by member name.
    """

    __tablename__ = "persons"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    coordinates_x: Mapped[int] = mapped_column(Integer, nullable=False)
    coordinates_y: Mapped[int] = mapped_column(Integer, nullable=False)
    creation_date: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    height: Mapped[int | None] = mapped_column(Integer, nullable=True)
    weight: Mapped[float] = mapped_column(Float, nullable=False)
    hair_color: Mapped[Color] = mapped_column(
        Enum(Color, native_enum=False, length=32), nullable=False
    )
    eye_color: Mapped[Color] = mapped_column(
        Enum(Color, native_enum=False, length=32), nullable=False
    )
    nationality: Mapped[Country] = mapped_column(
        Enum(Country, native_enum=False, length=32), nullable=False
    )
    location_x: Mapped[int | None] = mapped_column(Integer, nullable=True)
    location_y: Mapped[float | None] = mapped_column(Float, nullable=True)
    location_z: Mapped[float | None] = mapped_column(Float, nullable=True)
    location_name: Mapped[str] = mapped_column(String(255), nullable=False)

    @classmethod
    def from_domain(cls, person: Person) -> PersonModel:
        model = cls(creation_date=person.creation_date)
        if person.id is not None:
            model.id = person.id
        model.apply(person)
        return model

    def apply(self, person: Person) -> None:
        """Copy every mutable field of ``person`` onto this row."""
        self.name = person.name
        self.coordinates_x = person.coordinates.x
        self.coordinates_y = person.coordinates.y
        self.height = person.height
        self.weight = person.weight
        self.hair_color = person.hair_color
        self.eye_color = person.eye_color
        self.nationality = person.nationality
        self.location_x = person.location.x
        self.location_y = person.location.y
        self.location_z = person.location.z
        self.location_name = person.location.name

    def to_domain(self) -> Person:
        return Person(
            id=self.id,
            name=self.name,
            coordinates=Coordinates(x=self.coordinates_x, y=self.coordinates_y),
            creation_date=self.creation_date,
            height=self.height,
            weight=self.weight,
            hair_color=self.hair_color,
            eye_color=self.eye_color,
            nationality=self.nationality,
            location=Location(
                x=self.location_x,
                y=self.location_y,
                z=self.location_z,
                name=self.location_name,
            ),
        )


# Domain attribute path -> column attribute name
COLUMN_FOR_ATTR: dict[str, str] = {
    "coordinates.x": "coordinates_x",
    "coordinates.y": "coordinates_y",
    "location.x": "location_x",
    "location.y": "location_y",
    "location.z": "location_z",
    "location.name": "location_name",
}


def resolve_column(attr: str) -> object:
    """Map a domain attribute path (``coordinates.x``) to its column."""
    name = COLUMN_FOR_ATTR.get(attr, attr)
    if name not in PersonModel.__mapper__.column_attrs:
        raise AttributeError(f"PersonModel has no column for '{attr}'")
    return getattr(PersonModel, name)
