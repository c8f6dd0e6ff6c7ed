from .enums import Color, Country
from .exceptions import (
    InvalidPersonDataError,
    NotFoundError,
    PersonNotFoundError,
    PersonServiceError,
    PersonValidationError,
    ValidationError,
    ValidationSource,
)
from .person import Coordinates, Location, Person, PersonData, validate_person_data

__all__ = [
    "Color",
    "Country",
    "Coordinates",
    "Location",
    "Person",
    "PersonData",
    "validate_person_data",
    "PersonServiceError",
    "NotFoundError",
    "PersonNotFoundError",
    "ValidationError",
    "ValidationSource",
    "PersonValidationError",
    "InvalidPersonDataError",
]
