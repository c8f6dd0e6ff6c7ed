from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import TYPE_CHECKING, Any, TypeVar

from .base import BaseSpecification
from .evaluator import as_text as render_text
from .operators import SpecificationOperator

if TYPE_CHECKING:
    from .evaluator import MemoryOperatorRegistry

T = TypeVar("T", contravariant=True)

UNRANKED = -1


def resolve_path(obj: Any, path: str) -> Any:
    """Follow a dotted path (``coordinates.x``) through attributes or dict keys."""
    for step in path.split("."):
        if obj is None:
            break
        obj = obj.get(step) if isinstance(obj, Mapping) else getattr(obj, step, None)
    return obj


def _rank(value: Any, ranking: Mapping[str, int]) -> int:
    if isinstance(value, Enum):
        value = value.name
    return ranking.get(str(value), UNRANKED)


class AttributeSpecification(BaseSpecification[T]):
    """
    Leaf predicate: ``<attr> <op> <val>``.

    ``attr`` is a dotted path (``coordinates.x``) followed through attributes
    or dict keys; a missing step yields ``None``. The comparison itself is
    looked up in ``registry``.

    Before comparing, the stored value may be transformed:

    - ``ranking``: enum member name -> declared position; names missing from
      the table rank as ``-1``.
    - ``as_text``: rendered with :func:`~.evaluator.as_text`.

    Both transforms are part of ``to_dict()`` so the SQL compiler applies
    the same ones.
    """

    def __init__(
        self,
        attr: str,
        op: SpecificationOperator | str,
        val: Any,
        *,
        registry: MemoryOperatorRegistry,
        ranking: Mapping[str, int] | None = None,
        as_text: bool = False,
    ) -> None:
        if registry is None:
            raise ValueError("registry is required; see build_default_registry()")
        self.attr = attr
        self.op = SpecificationOperator(op)
        self.val = val
        self.ranking = ranking
        self.as_text = as_text
        self._registry = registry

    def is_satisfied_by(self, candidate: T) -> bool:
        stored = resolve_path(candidate, self.attr)
        if self.ranking is not None:
            stored = _rank(stored, self.ranking)
        elif self.as_text and stored is not None:
            stored = render_text(stored)
        return self._registry.evaluate(self.op, stored, self.val)

    def to_dict(self) -> dict[str, Any]:
        node: dict[str, Any] = {"op": self.op.value, "attr": self.attr, "val": self.val}
        if self.ranking is not None:
            node["ranking"] = dict(self.ranking)
        if self.as_text:
            node["as_text"] = True
        return node

    def __repr__(self) -> str:
        return (
            f"AttributeSpecification({self.attr!r}, {self.op.value!r}, {self.val!r})"
        )
