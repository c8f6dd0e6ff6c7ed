"""Filtering exceptions.

The predicate builder raises these internally for a single filter entry and
absorbs them (the entry is dropped). Only :class:`FilterValidationError`
escapes, and only from a builder running in strict mode.
"""

from __future__ import annotations

from enum import Enum

from ..domain.exceptions import ValidationError


class FilterError(ValidationError):
    """Base class for problems with one filter entry."""

    def __init__(self, message: str) -> None:
        self.detail = message
        super().__init__(message)

    def __str__(self) -> str:
        return self.detail


class UnresolvedFieldError(FilterError):
    """Field path does not exist on the entity schema."""

    def __init__(self, field_path: str) -> None:
        self.field_path = field_path
        super().__init__(f"Field '{field_path}' not found")


class UnsupportedOperatorError(FilterError):
    """Bracketed operator token is not recognized."""

    def __init__(self, token: str) -> None:
        self.token = token
        super().__init__(f"Unsupported filter operator: {token}")


class CoercionFailure(str, Enum):
    NUMBER_FORMAT = "NUMBER_FORMAT"
    INVALID_ENUM_VALUE = "INVALID_ENUM_VALUE"
    INVALID_TIMESTAMP = "INVALID_TIMESTAMP"


class CoercionError(FilterError):
    """Raw value cannot be converted to the field's declared type."""

    def __init__(self, raw: str, type_name: str, reason: CoercionFailure) -> None:
        self.raw = raw
        self.type_name = type_name
        self.reason = reason
        super().__init__(
            f"Failed to convert value '{raw}' to type {type_name}: {reason.value}"
        )


class UnsupportedOrderingError(FilterError):
    """Ordering operator requested on a type without a defined ordering."""

    def __init__(self, operator: str, type_name: str) -> None:
        self.operator = operator
        self.type_name = type_name
        super().__init__(
            f"Cannot apply '{operator}' operator to field type: {type_name}"
        )


class FilterValidationError(ValidationError):
    """Aggregate of every rejected filter entry (strict mode only)."""
