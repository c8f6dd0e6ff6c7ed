"""Domain exceptions for the person service."""

from __future__ import annotations

from enum import Enum


class PersonServiceError(Exception):
    """Root exception for the person service."""


class NotFoundError(PersonServiceError):
    """Raised when a resource is not found."""


class PersonNotFoundError(NotFoundError):
    """Raised when no person matches an id or a lookup criterion."""

    def __init__(self, person_id: int | None = None, *, message: str | None = None):
        self.person_id = person_id
        if message is None:
            message = f"Person with ID {person_id} not found"
        super().__init__(message)


class ValidationError(PersonServiceError):
    """Raised when input validation fails.

    Carries structured errors: ``{field: [messages]}``.
    """

    def __init__(self, errors: dict[str, list[str]] | str | None = None) -> None:
        if isinstance(errors, str):
            self.errors: dict[str, list[str]] = {"__root__": [errors]}
        elif errors is None:
            self.errors = {}
        else:
            self.errors = errors
        super().__init__(str(self.errors))

    @property
    def message(self) -> str:
        return "; ".join(
            f"{field}: {msg}" if field != "__root__" else msg
            for field, messages in self.errors.items()
            for msg in messages
        )


class ValidationSource(str, Enum):
    BODY = "BODY"
    URL_PARAMETER = "URL_PARAMETER"


class PersonValidationError(ValidationError):
    """Person payload or path parameter failed validation."""

    def __init__(
        self,
        errors: dict[str, list[str]] | str | None = None,
        *,
        source: ValidationSource = ValidationSource.BODY,
    ) -> None:
        self.source = source
        super().__init__(errors)


class InvalidPersonDataError(PersonServiceError):
    """Input is structurally valid but cannot be processed."""
