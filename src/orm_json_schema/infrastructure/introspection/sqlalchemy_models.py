"""
Read SQLAlchemy declarative models into ``ModelDef`` descriptions.

Columns become attributes, hybrid properties and expression-based column
properties become virtual attributes, and relationships become associations.
Types with no mapping are passed through as raw tags so the dispatcher logs
them and falls back to the permissive fragment.
"""

from __future__ import annotations

import datetime
import decimal
import enum
import types
import typing
import uuid
from typing import Any, List, Optional, Sequence, Tuple, Type

from sqlalchemy import Column
from sqlalchemy import inspect as sa_inspect
from sqlalchemy import types as sqltypes
from sqlalchemy.dialects import mysql, postgresql
from sqlalchemy.ext.hybrid import hybrid_property
from sqlalchemy.orm import Mapper

from orm_json_schema.infrastructure.schema import (
    AssociationDef,
    AssociationKind,
    AttributeDef,
    ColumnType,
    ModelDef,
    ModelRegistry,
    SchemaConfigurationError,
)
from orm_json_schema.utils.logging import get_logger

logger = get_logger(__name__)

# Checked in order: subclasses before their bases
_SQL_TYPES: Sequence[Tuple[Type[Any], ColumnType]] = (
    (sqltypes.Boolean, ColumnType.BOOLEAN),
    (mysql.TINYINT, ColumnType.TINYINT),
    (mysql.MEDIUMINT, ColumnType.MEDIUMINT),
    (sqltypes.BigInteger, ColumnType.BIGINT),
    (sqltypes.SmallInteger, ColumnType.SMALLINT),
    (sqltypes.Integer, ColumnType.INTEGER),
    (sqltypes.Double, ColumnType.DOUBLE),
    (sqltypes.REAL, ColumnType.REAL),
    (sqltypes.Float, ColumnType.FLOAT),
    (sqltypes.Numeric, ColumnType.DECIMAL),
    (sqltypes.Enum, ColumnType.ENUM),
    (sqltypes.Text, ColumnType.TEXT),
    (sqltypes.CHAR, ColumnType.CHAR),
    (sqltypes.String, ColumnType.STRING),
    (sqltypes.LargeBinary, ColumnType.BLOB),
    (sqltypes.DateTime, ColumnType.DATE),
    (sqltypes.Date, ColumnType.DATEONLY),
    (sqltypes.Time, ColumnType.TIME),
    (sqltypes.Uuid, ColumnType.UUID),
    (postgresql.INET, ColumnType.INET),
    (postgresql.CIDR, ColumnType.CIDR),
    (postgresql.MACADDR, ColumnType.MACADDR),
    (postgresql.JSONB, ColumnType.JSONB),
    (sqltypes.JSON, ColumnType.JSON),
    (sqltypes.ARRAY, ColumnType.ARRAY),
)

_MYSQL_TEXT_SIZES: Sequence[Tuple[Type[Any], str]] = (
    (mysql.TINYTEXT, "tiny"),
    (mysql.MEDIUMTEXT, "medium"),
    (mysql.LONGTEXT, "long"),
)

# Checked in order: bool is an int, datetime is a date
_PYTHON_TYPES: Sequence[Tuple[type, ColumnType]] = (
    (bool, ColumnType.BOOLEAN),
    (int, ColumnType.INTEGER),
    (float, ColumnType.DOUBLE),
    (decimal.Decimal, ColumnType.DECIMAL),
    (str, ColumnType.STRING),
    (bytes, ColumnType.BLOB),
    (datetime.datetime, ColumnType.DATE),
    (datetime.date, ColumnType.DATEONLY),
    (datetime.time, ColumnType.TIME),
    (uuid.UUID, ColumnType.UUID),
    (dict, ColumnType.JSON),
)


def _raw_tag(obj: Any) -> str:
    return type(obj).__name__.lower()


def attribute_from_sql_type(
    name: str, type_: sqltypes.TypeEngine, allow_null: bool = True
) -> AttributeDef:
    """Describe a SQLAlchemy type instance as an ``AttributeDef``."""
    for sql_cls, size in _MYSQL_TEXT_SIZES:
        if isinstance(type_, sql_cls):
            return AttributeDef(name, ColumnType.TEXT, allow_null=allow_null, length=size)

    if isinstance(type_, sqltypes.Interval):
        return AttributeDef(name, _raw_tag(type_), allow_null=allow_null)

    for sql_cls, column_type in _SQL_TYPES:
        if not isinstance(type_, sql_cls):
            continue
        attribute = AttributeDef(name, column_type, allow_null=allow_null)
        if column_type is ColumnType.ENUM:
            attribute.enum_values = list(type_.enums)
        elif column_type is ColumnType.ARRAY:
            attribute.inner_type = attribute_from_sql_type(name, type_.item_type, False)
        elif isinstance(type_, sqltypes.String):
            attribute.length = type_.length
        return attribute

    if isinstance(type_, sqltypes.TypeDecorator):
        return attribute_from_sql_type(name, type_.impl_instance, allow_null)

    return AttributeDef(name, _raw_tag(type_), allow_null=allow_null)


def attribute_from_annotation(name: str, hint: Any) -> AttributeDef:
    """Describe a Python return annotation as an ``AttributeDef``.

    ``Optional[X]`` (or ``X | None``) makes the attribute nullable.
    """
    allow_null = False
    origin = typing.get_origin(hint)
    if origin in (typing.Union, types.UnionType):
        args = [a for a in typing.get_args(hint) if a is not type(None)]
        allow_null = len(args) < len(typing.get_args(hint))
        if len(args) != 1:
            return AttributeDef(name, ColumnType.JSON, allow_null=allow_null)
        hint = args[0]
        origin = typing.get_origin(hint)

    if origin in (list, tuple, set, frozenset):
        args = typing.get_args(hint)
        inner = attribute_from_annotation(name, args[0]) if args else None
        if inner is None:
            return AttributeDef(name, ColumnType.ARRAY, allow_null=allow_null)
        inner.allow_null = False
        return AttributeDef(name, ColumnType.ARRAY, allow_null=allow_null, inner_type=inner)
    if origin is dict:
        return AttributeDef(name, ColumnType.JSON, allow_null=allow_null)

    if isinstance(hint, type):
        if issubclass(hint, enum.Enum):
            return AttributeDef(
                name,
                ColumnType.ENUM,
                allow_null=allow_null,
                enum_values=[member.value for member in hint],
            )
        for py_type, column_type in _PYTHON_TYPES:
            if issubclass(hint, py_type):
                return AttributeDef(name, column_type, allow_null=allow_null)
        return AttributeDef(name, hint.__name__.lower(), allow_null=allow_null)

    return AttributeDef(name, str(hint).lower(), allow_null=allow_null)


def _hybrid_attribute(name: str, hybrid: hybrid_property) -> AttributeDef:
    try:
        hints = typing.get_type_hints(hybrid.fget)
    except NameError as e:
        logger.info("hybrid_annotation_unresolved", attribute=name, error=str(e))
        hints = {}

    if "return" not in hints:
        return AttributeDef(name, ColumnType.VIRTUAL, allow_null=True)

    returned = attribute_from_annotation(name, hints["return"])
    return AttributeDef(
        name,
        ColumnType.VIRTUAL,
        allow_null=returned.allow_null,
        return_type=returned,
        description=(hybrid.fget.__doc__ or "").strip(),
    )


def _scalar_default(column: Column) -> Any:
    default = column.default
    if default is None or not getattr(default, "is_scalar", False):
        return None
    value = default.arg
    if isinstance(value, enum.Enum):
        return value.name
    if isinstance(value, (str, int, float, bool)):
        return value
    return None


def _column_attribute(name: str, column: Column) -> AttributeDef:
    attribute = attribute_from_sql_type(name, column.type, allow_null=bool(column.nullable))
    attribute.description = column.comment or column.doc or ""
    attribute.example = column.info.get("example")
    attribute.default = _scalar_default(column)
    return attribute


_DIRECTIONS = {
    "MANYTOONE": AssociationKind.BELONGS_TO,
    "MANYTOMANY": AssociationKind.BELONGS_TO_MANY,
}


def _associations(mapper: Mapper) -> List[AssociationDef]:
    associations: List[AssociationDef] = []
    for relationship in mapper.relationships:
        direction = relationship.direction.name
        if direction == "ONETOMANY":
            kind = AssociationKind.HAS_MANY if relationship.uselist else AssociationKind.HAS_ONE
        else:
            kind = _DIRECTIONS.get(direction, direction.lower())

        foreign_key: Optional[str] = None
        if kind is AssociationKind.BELONGS_TO:
            keys = [mapper.get_property_by_column(c).key for c in relationship.local_columns]
            if len(keys) == 1:
                foreign_key = keys[0]

        associations.append(
            AssociationDef(
                kind=kind,
                target=relationship.mapper.class_.__name__,
                accessor=relationship.key,
                foreign_key=foreign_key,
            )
        )
    return associations


def model_from_sqlalchemy(model_cls: type) -> ModelDef:
    """Build a ``ModelDef`` from a mapped SQLAlchemy class.

    Raises:
        SchemaConfigurationError: If ``model_cls`` is not mapped
    """
    mapper = sa_inspect(model_cls, raiseerr=False)
    if not isinstance(mapper, Mapper):
        raise SchemaConfigurationError(
            f"{model_cls!r} is not a mapped SQLAlchemy class"
        )

    attributes: List[AttributeDef] = []
    for prop in mapper.column_attrs:
        column = prop.columns[0]
        if isinstance(column, Column):
            attributes.append(_column_attribute(prop.key, column))
        else:
            attributes.append(
                AttributeDef(
                    prop.key,
                    ColumnType.VIRTUAL,
                    return_type=attribute_from_sql_type(prop.key, column.type),
                )
            )

    for key, descriptor in mapper.all_orm_descriptors.items():
        if isinstance(descriptor, hybrid_property):
            attributes.append(_hybrid_attribute(key, descriptor))

    model = ModelDef(
        name=model_cls.__name__,
        attributes=attributes,
        associations=_associations(mapper),
    )
    logger.debug(
        "model_introspected",
        model=model.name,
        attributes=len(model.attributes),
        associations=len(model.associations),
    )
    return model


def registry_from_sqlalchemy(base: Any) -> ModelRegistry:
    """Build a registry of every class mapped by a declarative ``base``.

    Models are sorted by class name so output does not depend on import order.
    """
    mapped = sorted(
        (mapper.class_ for mapper in base.registry.mappers),
        key=lambda cls: cls.__name__,
    )
    return ModelRegistry(model_from_sqlalchemy(cls) for cls in mapped)


__all__ = [
    "attribute_from_sql_type",
    "attribute_from_annotation",
    "model_from_sqlalchemy",
    "registry_from_sqlalchemy",
]
