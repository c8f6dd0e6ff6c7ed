"""
Static entity schemas and field-path resolution.

A schema maps each public field name to its declared type and to the
attribute path on the domain object. Embedded values (``coordinates``,
``location``) are nested schemas; exactly one level of nesting is resolved.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING

from ..domain.enums import Color, Country

if TYPE_CHECKING:
    from collections.abc import Mapping

logger = logging.getLogger(__name__)


class TypeTag(str, Enum):
    STRING = "String"
    INTEGER = "Integer"
    FLOAT = "Float"
    BOOLEAN = "Boolean"
    ENUM = "Enum"
    TIMESTAMP = "Timestamp"
    UNSUPPORTED = "Unsupported"


# Types with a natural ordering usable by gt/gte/lt/lte (enum has its own path)
ORDERED_TYPES: frozenset[TypeTag] = frozenset(
    {TypeTag.STRING, TypeTag.INTEGER, TypeTag.FLOAT, TypeTag.TIMESTAMP}
)


@dataclass(frozen=True)
class FieldSpec:
    type: TypeTag
    attr: str
    enum_type: type[Enum] | None = None

    def __post_init__(self) -> None:
        if (self.type is TypeTag.ENUM) != (self.enum_type is not None):
            raise ValueError("enum_type is required for, and only for, ENUM fields")


@dataclass(frozen=True)
class EntitySchema:
    name: str
    fields: Mapping[str, FieldSpec | EntitySchema] = field(
        default_factory=dict
    )
    attr: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    def field_names(self) -> list[str]:
        """Every resolvable public field path, nested ones dotted."""
        names: list[str] = []
        for name, value in self.fields.items():
            if isinstance(value, EntitySchema):
                names.extend(f"{name}.{child}" for child in value.fields)
            else:
                names.append(name)
        return names


@dataclass(frozen=True)
class FieldDescriptor:
    field_path: str
    type: TypeTag
    attr: str
    enum_type: type[Enum] | None = None

    @property
    def type_name(self) -> str:
        if self.enum_type is not None:
            return self.enum_type.__name__
        return self.type.value


def resolve(schema: EntitySchema, field_path: str) -> FieldDescriptor | None:
    """
    Resolve ``field_path`` against ``schema``.

    Returns ``None`` (not an error) for unknown segments, paths deeper than
    one level of nesting, and paths that stop at an embedded object.
    """
    parts = field_path.split(".")
    if len(parts) > 2:
        logger.debug("Nested path too deep: %s", field_path)
        return None

    node = schema.fields.get(parts[0])
    if node is None:
        return None

    if len(parts) == 2:
        if not isinstance(node, EntitySchema):
            return None
        embedded = node
        node = embedded.fields.get(parts[1])
        if not isinstance(node, FieldSpec):
            return None
        attr = f"{embedded.attr}.{node.attr}"
    else:
        if not isinstance(node, FieldSpec):
            return None
        attr = node.attr

    return FieldDescriptor(
        field_path=field_path,
        type=node.type,
        attr=attr,
        enum_type=node.enum_type,
    )


PERSON_SCHEMA = EntitySchema(
    name="Person",
    fields={
        "id": FieldSpec(TypeTag.INTEGER, "id"),
        "name": FieldSpec(TypeTag.STRING, "name"),
        "coordinates": EntitySchema(
            name="Coordinates",
            attr="coordinates",
            fields={
                "x": FieldSpec(TypeTag.INTEGER, "x"),
                "y": FieldSpec(TypeTag.INTEGER, "y"),
            },
        ),
        "creationDate": FieldSpec(TypeTag.TIMESTAMP, "creation_date"),
        "height": FieldSpec(TypeTag.INTEGER, "height"),
        "weight": FieldSpec(TypeTag.FLOAT, "weight"),
        "hairColor": FieldSpec(TypeTag.ENUM, "hair_color", Color),
        "eyeColor": FieldSpec(TypeTag.ENUM, "eye_color", Color),
        "nationality": FieldSpec(TypeTag.ENUM, "nationality", Country),
        "location": EntitySchema(
            name="Location",
            attr="location",
            fields={
                "x": FieldSpec(TypeTag.INTEGER, "x"),
                "y": FieldSpec(TypeTag.FLOAT, "y"),
                "z": FieldSpec(TypeTag.FLOAT, "z"),
                "name": FieldSpec(TypeTag.STRING, "name"),
            },
        ),
    },
)
