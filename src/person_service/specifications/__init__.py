"""Specification tree: composable predicates evaluable in memory or in SQL."""

from .ast import UNRANKED, AttributeSpecification, resolve_path
from .base import (
    AndSpecification,
    BaseSpecification,
    ISpecification,
    MatchAllSpecification,
    NotSpecification,
    OrSpecification,
)
from .evaluator import MemoryOperator, MemoryOperatorRegistry, build_default_registry
from .operators import LOGICAL_OPERATORS, SpecificationOperator

__all__ = [
    "SpecificationOperator",
    "LOGICAL_OPERATORS",
    "ISpecification",
    "BaseSpecification",
    "AndSpecification",
    "OrSpecification",
    "NotSpecification",
    "MatchAllSpecification",
    "AttributeSpecification",
    "UNRANKED",
    "resolve_path",
    "MemoryOperator",
    "MemoryOperatorRegistry",
    "build_default_registry",
]
