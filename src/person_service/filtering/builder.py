"""
Query parameters -> specification.

:class:`PredicateBuilder` turns a raw parameter map such as::

    {"weight[gte]": "60", "hairColor": "brown", "name[like]": "an", "page": "0"}

into an AND of :class:`~person_service.specifications.AttributeSpecification`
leaves. Bad entries are logged and dropped one at a time; the remaining
filters still apply.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from ..specifications import (
    AndSpecification,
    AttributeSpecification,
    MatchAllSpecification,
)
from .coercion import coerce
from .exceptions import (
    FilterError,
    FilterValidationError,
    UnresolvedFieldError,
    UnsupportedOperatorError,
    UnsupportedOrderingError,
)
from .ordinal import compare_by_ordinal
from .schema import ORDERED_TYPES, TypeTag, resolve
from .syntax import FILTER_OPERATORS, ORDERING_KINDS, FilterExpression, OperatorKind

if TYPE_CHECKING:
    from collections.abc import Mapping

    from ..specifications import BaseSpecification, MemoryOperatorRegistry
    from .schema import EntitySchema, FieldDescriptor

logger = logging.getLogger(__name__)

# Pagination and sorting keys, never treated as filters
SYSTEM_PARAMS: frozenset[str] = frozenset({"page", "size", "sortBy", "sortDirection"})


def strip_system_params(params: Mapping[str, str]) -> dict[str, str]:
    return {k: v for k, v in params.items() if k not in SYSTEM_PARAMS}


class PredicateBuilder:
    """
    Builds a specification from loosely typed query parameters.

    Args:
        schema: Entity schema used to resolve field paths.
        registry: In-memory operator registry attached to every leaf.
        strict: Raise :class:`FilterValidationError` listing every rejected
            entry instead of silently dropping them.
    """

    def __init__(
        self,
        schema: EntitySchema,
        *,
        registry: MemoryOperatorRegistry,
        strict: bool = False,
    ) -> None:
        self.schema = schema
        self.registry = registry
        self.strict = strict

    def build(self, params: Mapping[str, str]) -> BaseSpecification[Any]:
        specs: list[BaseSpecification[Any]] = []
        errors: dict[str, list[str]] = {}

        for key, value in strip_system_params(params).items():
            if value is None or not value.strip():
                continue
            try:
                spec = self.build_one(FilterExpression.from_param(key, value))
            except FilterError as e:
                logger.warning("Dropping filter %s=%s: %s", key, value, e)
                errors.setdefault(key, []).append(e.detail)
                continue
            except Exception as e:  # noqa: BLE001
                logger.warning(
                    "Error creating predicate for %s=%s: %s", key, value, e
                )
                errors.setdefault(key, []).append(str(e))
                continue
            if spec is None:
                errors.setdefault(key, []).append(f"Invalid value '{value}'")
                continue
            specs.append(spec)

        if self.strict and errors:
            raise FilterValidationError(errors)

        if not specs:
            return MatchAllSpecification()
        if len(specs) == 1:
            return specs[0]
        return AndSpecification(*specs)

    def build_one(self, expr: FilterExpression) -> AttributeSpecification | None:
        """
        Build the specification for a single entry.

        Raises:
            FilterError: The entry cannot be turned into a predicate.
        """
        descriptor = resolve(self.schema, expr.field_path)
        if descriptor is None:
            if "[" in expr.field_path:
                token = expr.field_path[expr.field_path.find("[") + 1 :]
                raise UnsupportedOperatorError(token.rstrip("]"))
            raise UnresolvedFieldError(expr.field_path)

        if descriptor.type is TypeTag.ENUM and expr.operator in ORDERING_KINDS:
            return compare_by_ordinal(
                descriptor, expr.operator, expr.raw_value, registry=self.registry
            )

        if expr.operator is OperatorKind.LIKE:
            return self._like(descriptor, expr.raw_value)

        if expr.operator in ORDERING_KINDS and descriptor.type not in ORDERED_TYPES:
            raise UnsupportedOrderingError(expr.operator.value, descriptor.type_name)

        return AttributeSpecification(
            descriptor.attr,
            FILTER_OPERATORS[expr.operator],
            coerce(expr.raw_value, descriptor),
            registry=self.registry,
        )

    def _like(
        self, descriptor: FieldDescriptor, raw: str
    ) -> AttributeSpecification:
        op = FILTER_OPERATORS[OperatorKind.LIKE]
        if descriptor.type is TypeTag.STRING:
            return AttributeSpecification(
                descriptor.attr, op, raw, registry=self.registry
            )
        if descriptor.type is TypeTag.ENUM:
            # stored enum names are upper case
            raw = raw.upper()
        return AttributeSpecification(
            descriptor.attr, op, raw, registry=self.registry, as_text=True
        )
