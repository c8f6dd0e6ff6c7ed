"""Person aggregate and its embedded values."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from .enums import Color, Country
from .exceptions import PersonValidationError

MAX_NAME_LENGTH = 255
MAX_COORDINATE_Y = 626
MAX_WEIGHT = 1000
MAX_HEIGHT = 300


class Coordinates(BaseModel):
    model_config = ConfigDict(frozen=True)

    x: int
    y: int = Field(le=MAX_COORDINATE_Y)


class Location(BaseModel):
    model_config = ConfigDict(frozen=True)

    x: int | None = None
    y: float | None = None
    z: float | None = None
    name: str


class Person(BaseModel):
    """A stored person record."""

    model_config = ConfigDict(from_attributes=True)

    id: int | None = None
    name: str
    coordinates: Coordinates
    creation_date: datetime
    height: int | None = None
    weight: float
    hair_color: Color
    eye_color: Color
    nationality: Country
    location: Location


class PersonData(BaseModel):
    """Create / update payload; every field is checked by ``validate_person_data``."""

    name: str | None = None
    coordinates: Coordinates | None = None
    height: int | None = None
    weight: float | None = None
    hair_color: Color | None = None
    eye_color: Color | None = None
    nationality: Country | None = None
    location: Location | None = None

    def to_person(
        self, *, person_id: int | None = None, creation_date: datetime
    ) -> Person:
        validate_person_data(self)
        return Person(
            id=person_id,
            name=self.name.strip() if self.name else self.name,
            coordinates=self.coordinates,
            creation_date=creation_date,
            height=self.height,
            weight=self.weight,
            hair_color=self.hair_color,
            eye_color=self.eye_color,
            nationality=self.nationality,
            location=self.location,
        )


def validate_person_data(data: PersonData | None) -> None:
    """Raise :class:`PersonValidationError` listing every invalid field."""
    if data is None:
        raise PersonValidationError("Person cannot be null")

    errors: dict[str, list[str]] = {}

    def add(field: str, message: str) -> None:
        errors.setdefault(field, []).append(message)

    if data.name is None or not data.name.strip():
        add("name", "Name is required and cannot be empty")
    elif len(data.name.strip()) > MAX_NAME_LENGTH:
        add("name", f"Name cannot exceed {MAX_NAME_LENGTH} characters")

    if data.coordinates is None:
        add("coordinates", "Coordinates are required")

    if data.weight is None:
        add("weight", "Weight is required")
    elif data.weight <= 0:
        add("weight", "Weight must be greater than 0")
    elif data.weight > MAX_WEIGHT:
        add("weight", f"Weight cannot exceed {MAX_WEIGHT} kg")

    if data.height is not None:
        if data.height <= 0:
            add("height", "Height must be greater than 0")
        elif data.height > MAX_HEIGHT:
            add("height", f"Height cannot exceed {MAX_HEIGHT} cm")

    if data.hair_color is None:
        add("hairColor", "Hair color is required")
    if data.eye_color is None:
        add("eyeColor", "Eye color is required")
    if data.nationality is None:
        add("nationality", "Nationality is required")

    if data.location is None:
        add("location", "Location is required")
    elif len(data.location.name.strip()) > MAX_NAME_LENGTH:
        add("location.name", f"Location name cannot exceed {MAX_NAME_LENGTH} characters")

    if errors:
        raise PersonValidationError(errors)
