"""Filter key parsing: ``field`` or ``field[op]`` -> (field path, operator)."""

from __future__ import annotations

import logging
from enum import Enum
from types import MappingProxyType
from typing import NamedTuple

from ..specifications.operators import SpecificationOperator

logger = logging.getLogger(__name__)


class OperatorKind(str, Enum):
    EQ = "eq"
    NE = "ne"
    GT = "gt"
    GTE = "gte"
    LT = "lt"
    LTE = "lte"
    LIKE = "like"


# Query-string operator token -> specification operator
FILTER_OPERATORS: MappingProxyType[OperatorKind, SpecificationOperator] = (
    MappingProxyType(
        {
            OperatorKind.EQ: SpecificationOperator.EQ,
            OperatorKind.NE: SpecificationOperator.NE,
            OperatorKind.GT: SpecificationOperator.GT,
            OperatorKind.GTE: SpecificationOperator.GE,
            OperatorKind.LT: SpecificationOperator.LT,
            OperatorKind.LTE: SpecificationOperator.LE,
            OperatorKind.LIKE: SpecificationOperator.ICONTAINS,
        }
    )
)

ORDERING_KINDS: frozenset[OperatorKind] = frozenset(
    {OperatorKind.GT, OperatorKind.GTE, OperatorKind.LT, OperatorKind.LTE}
)

_TOKENS: MappingProxyType[str, OperatorKind] = MappingProxyType(
    {kind.value: kind for kind in OperatorKind}
)


class FilterKey(NamedTuple):
    field_path: str
    operator: OperatorKind


class FilterExpression(NamedTuple):
    """One query-string entry: parsed key plus its untouched raw value."""

    field_path: str
    operator: OperatorKind
    raw_value: str

    @classmethod
    def from_param(cls, raw_key: str, raw_value: str) -> FilterExpression:
        key = parse_filter_key(raw_key)
        return cls(key.field_path, key.operator, raw_value)


def parse_filter_key(raw_key: str) -> FilterKey:
    """
    Split ``field[op]`` into field path and operator.

    - ``weight`` -> ``("weight", eq)``
    - ``weight[gte]`` -> ``("weight", gte)``
    - malformed brackets (``weight[gte``, ``weight]gte[``) -> ``(raw_key, eq)``
    - unknown operator (``weight[xyz]``) -> ``("weight[xyz]", eq)``; the key
      is kept whole, so field resolution fails and the filter is dropped.

    Never raises.
    """
    start = raw_key.find("[")
    if start == -1:
        return FilterKey(raw_key, OperatorKind.EQ)

    end = raw_key.find("]")
    if end == -1 or end <= start:
        logger.warning("Malformed filter key: %s", raw_key)
        return FilterKey(raw_key, OperatorKind.EQ)

    token = raw_key[start + 1 : end]
    kind = _TOKENS.get(token)
    if kind is None:
        logger.warning("Unsupported filter operator: %s", token)
        return FilterKey(raw_key, OperatorKind.EQ)

    return FilterKey(raw_key[:start], kind)
