"""Core model description types consumed by the schema engine.

The host ORM (or a hand-written definition) describes each model as a
``ModelDef`` holding ordered ``AttributeDef`` columns and ``AssociationDef``
relationships. The engine only reads these objects.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional, Union

from .exceptions import SchemaConfigurationError


class ColumnType(Enum):
    """Column type tags understood by the attribute dispatcher."""

    BOOLEAN = "boolean"
    TINYINT = "tinyint"
    SMALLINT = "smallint"
    MEDIUMINT = "mediumint"
    INTEGER = "integer"
    BIGINT = "bigint"
    FLOAT = "float"
    DOUBLE = "double"
    REAL = "real"
    DECIMAL = "decimal"
    NUMERIC = "numeric"
    CHAR = "char"
    STRING = "string"
    TEXT = "text"
    CITEXT = "citext"
    BLOB = "blob"
    DATE = "date"
    DATEONLY = "dateonly"
    TIME = "time"
    ENUM = "enum"
    UUID = "uuid"
    UUIDV1 = "uuidv1"
    UUIDV4 = "uuidv4"
    INET = "inet"
    CIDR = "cidr"
    MACADDR = "macaddr"
    JSON = "json"
    JSONB = "jsonb"
    ARRAY = "array"
    VIRTUAL = "virtual"


class AssociationKind(Enum):
    """Relationship kinds. ``has_one``/``belongs_to`` are singular."""

    HAS_ONE = "has_one"
    BELONGS_TO = "belongs_to"
    HAS_MANY = "has_many"
    BELONGS_TO_MANY = "belongs_to_many"

    @property
    def is_plural(self) -> bool:
        return self in (AssociationKind.HAS_MANY, AssociationKind.BELONGS_TO_MANY)


def _coerce_enum(enum_cls: Any, value: Any) -> Any:
    """Map a tag string onto ``enum_cls``; unknown tags stay raw strings."""
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        try:
            return enum_cls(value.strip().lower())
        except ValueError:
            return value
    return value


@dataclass
class AttributeDef:
    """Definition of a single model attribute (column or computed value)."""

    name: str
    column_type: Union[ColumnType, str]
    allow_null: bool = True
    length: Optional[Union[int, str]] = None
    enum_values: Optional[List[Any]] = None
    inner_type: Optional[AttributeDef] = None
    return_type: Optional[AttributeDef] = None
    description: str = ""
    example: Any = None
    default: Any = None

    def __post_init__(self) -> None:
        self.column_type = _coerce_enum(ColumnType, self.column_type)
        # Only an explicit False makes an attribute non-nullable
        self.allow_null = self.allow_null is not False

    @property
    def type_label(self) -> str:
        if isinstance(self.column_type, ColumnType):
            return self.column_type.value
        return str(self.column_type)


@dataclass
class AssociationDef:
    """Definition of a relationship from the owning model to ``target``."""

    kind: Union[AssociationKind, str]
    target: str
    accessor: str
    foreign_key: Optional[str] = None

    def __post_init__(self) -> None:
        self.kind = _coerce_enum(AssociationKind, self.kind)


@dataclass
class ModelDef:
    """Complete description of one model."""

    name: str
    attributes: List[AttributeDef] = field(default_factory=list)
    associations: List[AssociationDef] = field(default_factory=list)

    def __post_init__(self) -> None:
        seen = set()
        for attribute in self.attributes:
            if attribute.name in seen:
                raise SchemaConfigurationError(
                    "Duplicate attribute name", model=self.name, attribute=attribute.name
                )
            seen.add(attribute.name)
        accessors = set()
        for association in self.associations:
            if association.accessor in accessors:
                raise SchemaConfigurationError(
                    "Duplicate association accessor",
                    model=self.name,
                    attribute=association.accessor,
                )
            accessors.add(association.accessor)

    def attribute_names(self) -> List[str]:
        return [a.name for a in self.attributes]

    def association_accessors(self) -> List[str]:
        return [a.accessor for a in self.associations]

    def backing_keys(self) -> List[str]:
        """Attribute names that hold a foreign key of a declared association."""
        return [a.foreign_key for a in self.associations if a.foreign_key]


__all__ = [
    "ColumnType",
    "AssociationKind",
    "AttributeDef",
    "AssociationDef",
    "ModelDef",
]
