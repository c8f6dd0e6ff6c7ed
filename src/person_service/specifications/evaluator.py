"""
In-memory evaluation of leaf operators.

A :class:`MemoryOperator` pairs a :class:`SpecificationOperator` with a
two-argument predicate; :class:`MemoryOperatorRegistry` dispatches on the
operator carried by an :class:`~person_service.specifications.ast.AttributeSpecification`.
"""

from __future__ import annotations

import operator
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from .operators import SpecificationOperator


def as_text(value: Any) -> str:
    """Textual rendering used by substring matching (enum -> its value)."""
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


def _icontains(stored: Any, needle: Any) -> bool:
    return as_text(needle).lower() in as_text(stored).lower()


@dataclass(frozen=True)
class MemoryOperator:
    """
    One leaf operator.

    A ``None`` stored value never matches unless ``compares_null`` is set,
    in which case it is passed to ``test`` like any other value.
    """

    op: SpecificationOperator
    test: Callable[[Any, Any], Any]
    compares_null: bool = False

    def evaluate(self, stored: Any, expected: Any) -> bool:
        if stored is None and not self.compares_null:
            return False
        return bool(self.test(stored, expected))


class MemoryOperatorRegistry:
    """
    Operators available to in-memory specifications.

    Usage::

        registry = build_default_registry()
        registry.evaluate(SpecificationOperator.EQ, actual, expected)
    """

    def __init__(self, operators: Iterable[MemoryOperator] = ()) -> None:
        self._by_op: dict[SpecificationOperator, MemoryOperator] = {}
        for memory_op in operators:
            self.add(memory_op)

    def add(self, memory_op: MemoryOperator) -> None:
        self._by_op[memory_op.op] = memory_op

    def __contains__(self, op: object) -> bool:
        return op in self._by_op

    @property
    def operators(self) -> frozenset[SpecificationOperator]:
        return frozenset(self._by_op)

    def evaluate(self, op: SpecificationOperator, stored: Any, expected: Any) -> bool:
        try:
            memory_op = self._by_op[op]
        except KeyError:
            raise ValueError(f"Unsupported operator for in-memory evaluation: {op}") from None
        return memory_op.evaluate(stored, expected)


def build_default_registry() -> MemoryOperatorRegistry:
    """Registry with the comparison operators and case-insensitive ``icontains``."""
    return MemoryOperatorRegistry(
        [
            MemoryOperator(SpecificationOperator.EQ, operator.eq, compares_null=True),
            # NULL never satisfies "<>", same as SQL
            MemoryOperator(SpecificationOperator.NE, operator.ne),
            MemoryOperator(SpecificationOperator.GT, operator.gt),
            MemoryOperator(SpecificationOperator.LT, operator.lt),
            MemoryOperator(SpecificationOperator.GE, operator.ge),
            MemoryOperator(SpecificationOperator.LE, operator.le),
            MemoryOperator(SpecificationOperator.ICONTAINS, _icontains),
        ]
    )
