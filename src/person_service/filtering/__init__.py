"""Dynamic filtering: query parameters -> specifications."""

from .builder import SYSTEM_PARAMS, PredicateBuilder, strip_system_params
from .coercion import coerce, coerce_enum, parse_int, parse_local_date_time
from .exceptions import (
    CoercionError,
    CoercionFailure,
    FilterError,
    FilterValidationError,
    UnresolvedFieldError,
    UnsupportedOperatorError,
    UnsupportedOrderingError,
)
from .ordinal import compare_by_ordinal, ranking_for, target_ordinal
from .pagination import Page, PageRequest, PaginationParser, SortDirection
from .schema import (
    ORDERED_TYPES,
    PERSON_SCHEMA,
    EntitySchema,
    FieldDescriptor,
    FieldSpec,
    TypeTag,
    resolve,
)
from .syntax import (
    FILTER_OPERATORS,
    ORDERING_KINDS,
    FilterExpression,
    FilterKey,
    OperatorKind,
    parse_filter_key,
)

__all__ = [
    "OperatorKind",
    "FILTER_OPERATORS",
    "ORDERING_KINDS",
    "FilterKey",
    "FilterExpression",
    "parse_filter_key",
    "TypeTag",
    "ORDERED_TYPES",
    "FieldSpec",
    "EntitySchema",
    "FieldDescriptor",
    "PERSON_SCHEMA",
    "resolve",
    "coerce",
    "coerce_enum",
    "parse_int",
    "parse_local_date_time",
    "ranking_for",
    "target_ordinal",
    "compare_by_ordinal",
    "SYSTEM_PARAMS",
    "strip_system_params",
    "PredicateBuilder",
    "PageRequest",
    "PaginationParser",
    "SortDirection",
    "Page",
    "FilterError",
    "UnresolvedFieldError",
    "UnsupportedOperatorError",
    "CoercionFailure",
    "CoercionError",
    "UnsupportedOrderingError",
    "FilterValidationError",
]
