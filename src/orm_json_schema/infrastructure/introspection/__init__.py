"""ORM introspection: build ``ModelDef`` descriptions from mapped classes."""

from .sqlalchemy_models import (
    attribute_from_annotation,
    attribute_from_sql_type,
    model_from_sqlalchemy,
    registry_from_sqlalchemy,
)

__all__ = [
    "attribute_from_sql_type",
    "attribute_from_annotation",
    "model_from_sqlalchemy",
    "registry_from_sqlalchemy",
]
