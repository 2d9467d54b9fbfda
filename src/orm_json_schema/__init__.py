"""
orm-json-schema - JSON Schema derivation for ORM models.

Turns typed model descriptions (columns, nullability, lengths, enums,
computed attributes and relationships) into draft-07 JSON Schema documents.

Usage:
    >>> from orm_json_schema import AttributeDef, ColumnType, ModelDef, model_schema
    >>> user = ModelDef("User", [AttributeDef("id", ColumnType.INTEGER, allow_null=False)])
    >>> model_schema(user)["required"]
    ['id']
"""

from orm_json_schema.infrastructure.schema import (
    AssociationDef,
    AssociationKind,
    AttributeDef,
    ColumnType,
    LegacyOptionError,
    MalformedSchemaError,
    ModelDef,
    ModelOptions,
    ModelRegistry,
    SchemaConfigurationError,
    SchemaDerivationError,
    SchemaSetOptions,
    UnknownFilterEntryError,
    UnrecognizedAssociationError,
    attribute_schema,
    load_schema_set_options,
    model_schema,
    schema_set,
    with_null,
)

__version__ = "0.1.0"

__all__ = [
    "AssociationDef",
    "AssociationKind",
    "AttributeDef",
    "ColumnType",
    "ModelDef",
    "ModelRegistry",
    "ModelOptions",
    "SchemaSetOptions",
    "load_schema_set_options",
    "attribute_schema",
    "model_schema",
    "schema_set",
    "with_null",
    "SchemaDerivationError",
    "SchemaConfigurationError",
    "LegacyOptionError",
    "UnknownFilterEntryError",
    "UnrecognizedAssociationError",
    "MalformedSchemaError",
]
