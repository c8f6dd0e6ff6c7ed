"""
Compile a specification dictionary (AST) into a SQLAlchemy filter expression.

``build_sqla_filter`` walks the tree produced by ``spec.to_dict()`` and
delegates leaf compilation to a :class:`SQLAlchemyOperatorRegistry`. Columns
are looked up through a ``resolve_column`` callable, which maps the domain
attribute path carried by each leaf onto the mapped table.

Leaf transforms
---------------
- ``ranking``: the column is replaced by
  ``CASE column WHEN 'GREEN' THEN 0 ... ELSE -1 END`` before comparing.
- ``as_text``: the column is cast to a string before comparing.

``apply_page_request`` adds ordering, limit and offset to a ``Select``.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from sqlalchemy import (
    ColumnElement,
    String,
    and_,
    case,
    cast,
    not_,
    or_,
    true,
    type_coerce,
)

from ..specifications.ast import UNRANKED
from ..specifications.operators import LOGICAL_OPERATORS, SpecificationOperator
from .strategy import DEFAULT_SQLA_REGISTRY

if TYPE_CHECKING:
    from collections.abc import Mapping

    from sqlalchemy import Select

    from ..filtering.pagination import PageRequest
    from .strategy import SQLAlchemyOperatorRegistry

ColumnResolver = Callable[[str], Any]


def build_sqla_filter(
    data: dict[str, Any],
    resolve_column: ColumnResolver,
    *,
    registry: SQLAlchemyOperatorRegistry | None = None,
) -> ColumnElement[bool]:
    """
    Build a SQLAlchemy filter expression from a specification dictionary.

    Args:
        data: Specification dictionary (``spec.to_dict()``). An empty dict is
            the unrestricted predicate and compiles to ``true()``.
        resolve_column: Maps a leaf's ``attr`` to a column expression.
        registry: Optional custom operator registry. Falls back to
            ``DEFAULT_SQLA_REGISTRY``.
    """
    if not data:
        return true()
    reg = registry or DEFAULT_SQLA_REGISTRY
    return _compile_node(data, resolve_column, reg)


def apply_page_request(
    stmt: Select[Any],
    page_request: PageRequest,
    resolve_column: ColumnResolver,
) -> Select[Any]:
    """Apply ordering, then limit and offset."""
    if page_request.sort_by:
        column = resolve_column(page_request.sort_by)
        if page_request.sort_direction.value == "desc":
            stmt = stmt.order_by(column.desc())
        else:
            stmt = stmt.order_by(column.asc())
    return stmt.limit(page_request.size).offset(page_request.offset)


def ranked(column: Any, ranking: Mapping[str, int]) -> ColumnElement[int]:
    """Map stored enum names to their ordinals; anything else ranks ``-1``."""
    return case(dict(ranking), value=type_coerce(column, String), else_=UNRANKED)


def _compile_node(
    data: dict[str, Any],
    resolve_column: ColumnResolver,
    registry: SQLAlchemyOperatorRegistry,
) -> ColumnElement[bool]:
    if not data:
        return true()
    op = SpecificationOperator(str(data.get("op", "")).lower())
    if op in LOGICAL_OPERATORS:
        children = [
            _compile_node(child, resolve_column, registry)
            for child in data.get("conditions", [])
        ]
        if op is SpecificationOperator.AND:
            return and_(true(), *children)
        if op is SpecificationOperator.OR:
            return or_(*children)
        return not_(and_(true(), *children))

    attr = data.get("attr")
    if not attr:
        raise ValueError(f"Specification missing 'attr': {data}")
    column = resolve_column(attr)
    if data.get("ranking") is not None:
        column = ranked(column, data["ranking"])
    elif data.get("as_text"):
        column = cast(column, String)
    return registry.apply(op, column, data.get("val"))
