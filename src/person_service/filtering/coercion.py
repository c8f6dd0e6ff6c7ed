"""Raw query-string value -> typed value for a resolved field."""

from __future__ import annotations

import re
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Any

from .exceptions import CoercionError, CoercionFailure
from .schema import TypeTag

if TYPE_CHECKING:
    from .schema import FieldDescriptor

# ISO-8601 local date-time: date, "T", hours and minutes required; no offset
_LOCAL_DATE_TIME = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}(:\d{2}(\.\d{1,9})?)?$")

# 32-bit signed decimal integers, ASCII digits only
_INTEGER = re.compile(r"^[+-]?[0-9]+\Z")
INT_MIN = -(2**31)
INT_MAX = 2**31 - 1


def parse_int(raw: str) -> int:
    """Strict decimal integer in the 32-bit signed range; ``ValueError`` otherwise."""
    if not _INTEGER.match(raw):
        raise ValueError(f"not a decimal integer: {raw!r}")
    value = int(raw)
    if not INT_MIN <= value <= INT_MAX:
        raise ValueError(f"integer out of range: {raw}")
    return value


def coerce(raw: str, descriptor: FieldDescriptor) -> Any:
    """
    Convert ``raw`` to the type declared by ``descriptor``.

    Raises:
        CoercionError: With reason ``NUMBER_FORMAT``, ``INVALID_ENUM_VALUE``
            or ``INVALID_TIMESTAMP``.
    """
    tag = descriptor.type
    if tag is TypeTag.INTEGER:
        try:
            return parse_int(raw)
        except ValueError as e:
            raise CoercionError(
                raw, descriptor.type_name, CoercionFailure.NUMBER_FORMAT
            ) from e
    if tag is TypeTag.FLOAT:
        try:
            return float(raw)
        except ValueError as e:
            raise CoercionError(
                raw, descriptor.type_name, CoercionFailure.NUMBER_FORMAT
            ) from e
    if tag is TypeTag.BOOLEAN:
        return raw.lower() == "true"
    if tag is TypeTag.ENUM:
        if descriptor.enum_type is None:
            raise ValueError(f"Enum field {descriptor.field_path} has no enum type")
        return coerce_enum(raw, descriptor.enum_type)
    if tag is TypeTag.TIMESTAMP:
        return parse_local_date_time(raw)
    # STRING and UNSUPPORTED keep the raw text
    return raw


def coerce_enum(raw: str, enum_type: type[Enum]) -> Enum:
    """Case-insensitive lookup of a member by name."""
    try:
        return enum_type[raw.upper()]
    except KeyError as e:
        raise CoercionError(
            raw, enum_type.__name__, CoercionFailure.INVALID_ENUM_VALUE
        ) from e


def parse_local_date_time(raw: str) -> datetime:
    if not _LOCAL_DATE_TIME.match(raw):
        raise CoercionError(raw, "Timestamp", CoercionFailure.INVALID_TIMESTAMP)
    # Python parses at most microseconds
    head, dot, fraction = raw.partition(".")
    if dot:
        raw = f"{head}.{fraction[:6].ljust(6, '0')}"
    try:
        return datetime.fromisoformat(raw)
    except ValueError as e:
        raise CoercionError(
            raw, "Timestamp", CoercionFailure.INVALID_TIMESTAMP
        ) from e
