from enum import Enum


class SpecificationOperator(str, Enum):
    """Operators understood by the specification tree and its compilers."""

    # Comparison
    EQ = "="
    NE = "!="
    GT = ">"
    LT = "<"
    GE = ">="
    LE = "<="

    # Case-insensitive substring match
    ICONTAINS = "icontains"

    # Logical operators
    AND = "and"
    OR = "or"
    NOT = "not"


LOGICAL_OPERATORS: frozenset[SpecificationOperator] = frozenset(
    {SpecificationOperator.AND, SpecificationOperator.OR, SpecificationOperator.NOT}
)
