"""
Ordering comparisons on enum fields by declared position.

``hairColor[lt]=ORANGE`` keeps rows whose hair colour is declared before
``ORANGE`` in :class:`~person_service.domain.enums.Color`. The target may also
be given as a raw ordinal (``hairColor[lt]=2``).
"""

from __future__ import annotations

import logging
from enum import Enum
from functools import lru_cache
from types import MappingProxyType
from typing import TYPE_CHECKING

from ..specifications import AttributeSpecification
from .coercion import coerce_enum, parse_int
from .exceptions import CoercionError
from .syntax import FILTER_OPERATORS, ORDERING_KINDS, OperatorKind

if TYPE_CHECKING:
    from collections.abc import Mapping

    from ..specifications import MemoryOperatorRegistry
    from .schema import FieldDescriptor

logger = logging.getLogger(__name__)


@lru_cache(maxsize=None)
def ranking_for(enum_type: type[Enum]) -> Mapping[str, int]:
    """Member name -> declared position, built once per enum type."""
    return MappingProxyType(
        {member.name: index for index, member in enumerate(enum_type)}
    )


def target_ordinal(raw: str, enum_type: type[Enum]) -> int | None:
    try:
        return parse_int(raw)
    except ValueError:
        pass
    try:
        member = coerce_enum(raw, enum_type)
    except CoercionError:
        logger.warning(
            "Invalid enum value '%s' for ordinal comparison on %s",
            raw,
            enum_type.__name__,
        )
        return None
    return ranking_for(enum_type)[member.name]


def compare_by_ordinal(
    descriptor: FieldDescriptor,
    operator: OperatorKind,
    raw: str,
    *,
    registry: MemoryOperatorRegistry,
) -> AttributeSpecification | None:
    """
    Build an ordinal comparison for an enum field.

    Returns ``None`` when ``raw`` is neither an integer nor a member name.
    """
    if descriptor.enum_type is None:
        raise ValueError(f"Field '{descriptor.field_path}' is not an enum")
    if operator not in ORDERING_KINDS:
        raise ValueError(f"'{operator.value}' is not an ordering operator")

    ordinal = target_ordinal(raw, descriptor.enum_type)
    if ordinal is None:
        return None

    return AttributeSpecification(
        descriptor.attr,
        FILTER_OPERATORS[operator],
        ordinal,
        registry=registry,
        ranking=ranking_for(descriptor.enum_type),
    )
