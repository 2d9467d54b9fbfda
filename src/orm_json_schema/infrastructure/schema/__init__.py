"""JSON Schema derivation for ORM model definitions.

Modules:
- core.py: Model description types (ColumnType, AttributeDef, ModelDef, ...)
- constants.py: Canonical type fragments and text size aliases
- nullability.py: Null handling on type unions
- dispatcher.py: Per-column-type schema rules
- options.py: Builder options and YAML loading
- builder.py: Model and schema-set builders
- registry.py: Ordered model registry
"""

from .builder import model_schema, reference, schema_set
from .constants import SIZE_ALIASES, resolve_length, type_fragment
from .core import AssociationDef, AssociationKind, AttributeDef, ColumnType, ModelDef
from .dispatcher import attribute_schema, dispatch
from .exceptions import (
    LegacyOptionError,
    MalformedSchemaError,
    SchemaConfigurationError,
    SchemaDerivationError,
    UnknownFilterEntryError,
    UnrecognizedAssociationError,
)
from .nullability import with_null
from .options import ModelOptions, SchemaSetOptions, load_schema_set_options
from .registry import ModelRegistry

__all__ = [
    "ColumnType",
    "AssociationKind",
    "AttributeDef",
    "AssociationDef",
    "ModelDef",
    "ModelRegistry",
    "ModelOptions",
    "SchemaSetOptions",
    "load_schema_set_options",
    "SIZE_ALIASES",
    "type_fragment",
    "resolve_length",
    "with_null",
    "dispatch",
    "attribute_schema",
    "reference",
    "model_schema",
    "schema_set",
    "SchemaDerivationError",
    "SchemaConfigurationError",
    "LegacyOptionError",
    "UnknownFilterEntryError",
    "UnrecognizedAssociationError",
    "MalformedSchemaError",
]
