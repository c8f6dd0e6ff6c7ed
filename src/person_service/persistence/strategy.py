"""
Leaf operators compiled to SQLAlchemy clauses.

Mirrors :mod:`person_service.specifications.evaluator`: each
:class:`SQLAlchemyOperator` turns ``(column, value)`` into a
``ColumnElement[bool]`` and the registry dispatches on the leaf's operator.
"""

from __future__ import annotations

import operator
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, cast

from ..specifications.operators import SpecificationOperator

if TYPE_CHECKING:
    from sqlalchemy import ColumnElement


def _icontains(column: Any, value: Any) -> Any:
    # "%" and "_" in the value match literally
    return column.icontains(value, autoescape=True)


@dataclass(frozen=True)
class SQLAlchemyOperator:
    op: SpecificationOperator
    clause: Callable[[Any, Any], Any]

    def apply(self, column: Any, value: Any) -> ColumnElement[bool]:
        return cast("ColumnElement[bool]", self.clause(column, value))


class SQLAlchemyOperatorRegistry:
    """Operators the SQL compiler can emit, keyed by :class:`SpecificationOperator`."""

    def __init__(self, operators: Iterable[SQLAlchemyOperator] = ()) -> None:
        self._by_op: dict[SpecificationOperator, SQLAlchemyOperator] = {}
        for sql_op in operators:
            self.add(sql_op)

    def add(self, sql_op: SQLAlchemyOperator) -> None:
        self._by_op[sql_op.op] = sql_op

    def __contains__(self, op: object) -> bool:
        return op in self._by_op

    @property
    def operators(self) -> frozenset[SpecificationOperator]:
        return frozenset(self._by_op)

    def apply(
        self, op: SpecificationOperator, column: Any, value: Any
    ) -> ColumnElement[bool]:
        try:
            sql_op = self._by_op[op]
        except KeyError:
            raise ValueError(f"Unsupported operator for SQLAlchemy: {op}") from None
        return sql_op.apply(column, value)


def build_default_sqla_registry() -> SQLAlchemyOperatorRegistry:
    # column operators: "<>" drops NULL rows and ilike is case-insensitive
    return SQLAlchemyOperatorRegistry(
        [
            SQLAlchemyOperator(SpecificationOperator.EQ, operator.eq),
            SQLAlchemyOperator(SpecificationOperator.NE, operator.ne),
            SQLAlchemyOperator(SpecificationOperator.GT, operator.gt),
            SQLAlchemyOperator(SpecificationOperator.LT, operator.lt),
            SQLAlchemyOperator(SpecificationOperator.GE, operator.ge),
            SQLAlchemyOperator(SpecificationOperator.LE, operator.le),
            SQLAlchemyOperator(SpecificationOperator.ICONTAINS, _icontains),
        ]
    )


DEFAULT_SQLA_REGISTRY: SQLAlchemyOperatorRegistry = build_default_sqla_registry()
