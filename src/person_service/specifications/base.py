"""
Composable predicates over domain records.

Every specification answers ``is_satisfied_by(candidate)`` in memory and
serialises to a plain ``dict`` tree (``{"op": "and", "conditions": [...]}``)
that storage backends compile into their own query language.
"""

from __future__ import annotations

from typing import Any, ClassVar, Generic, Protocol, TypeVar, runtime_checkable

T = TypeVar("T", contravariant=True)


@runtime_checkable
class ISpecification(Protocol, Generic[T]):
    def is_satisfied_by(self, candidate: T) -> bool: ...

    def to_dict(self) -> dict[str, Any]: ...


class BaseSpecification(Generic[T]):
    """Adds ``&``, ``|`` and ``~`` on top of the two protocol methods."""

    def is_satisfied_by(self, candidate: T) -> bool:
        raise NotImplementedError

    def to_dict(self) -> dict[str, Any]:
        raise NotImplementedError

    def __and__(self, other: ISpecification[T]) -> BaseSpecification[T]:
        return AndSpecification(self, other)

    def __or__(self, other: ISpecification[T]) -> BaseSpecification[T]:
        return OrSpecification(self, other)

    def __invert__(self) -> BaseSpecification[T]:
        return NotSpecification(self)


class MatchAllSpecification(BaseSpecification[T]):
    """Satisfied by every candidate; serialises to ``{}``."""

    def is_satisfied_by(self, candidate: T) -> bool:  # noqa: ARG002
        return True

    def to_dict(self) -> dict[str, Any]:
        return {}

    def __and__(self, other: ISpecification[T]) -> Any:
        return other

    def __repr__(self) -> str:
        return "MatchAllSpecification()"


class _Junction(BaseSpecification[T]):
    op: ClassVar[str]

    def __init__(self, *operands: ISpecification[T]) -> None:
        self.operands = operands

    def _results(self, candidate: T) -> Any:
        return (operand.is_satisfied_by(candidate) for operand in self.operands)

    def to_dict(self) -> dict[str, Any]:
        return {"op": self.op, "conditions": [o.to_dict() for o in self.operands]}

    def __repr__(self) -> str:
        return f"{type(self).__name__}{self.operands!r}"


class AndSpecification(_Junction[T]):
    """All operands hold (vacuously true when empty)."""

    op = "and"

    def is_satisfied_by(self, candidate: T) -> bool:
        return all(self._results(candidate))


class OrSpecification(_Junction[T]):
    """At least one operand holds."""

    op = "or"

    def is_satisfied_by(self, candidate: T) -> bool:
        return any(self._results(candidate))


class NotSpecification(BaseSpecification[T]):
    def __init__(self, operand: ISpecification[T]) -> None:
        self.operand = operand

    def is_satisfied_by(self, candidate: T) -> bool:
        return not self.operand.is_satisfied_by(candidate)

    def to_dict(self) -> dict[str, Any]:
        return {"op": "not", "conditions": [self.operand.to_dict()]}
