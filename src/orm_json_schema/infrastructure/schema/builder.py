"""Model and schema-set builders.

``model_schema`` turns one ``ModelDef`` into an object schema;
``schema_set`` assembles every model of a registry into one root document
whose ``definitions`` are linked by ``$ref``. Associations are always
emitted as named references, never inlined, so cyclic model graphs are fine.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from orm_json_schema.config import get_settings
from orm_json_schema.utils.logging import get_logger

from .constants import REF_PREFIX, type_fragment
from .core import AssociationDef, AssociationKind, ModelDef
from .dispatcher import attribute_schema
from .exceptions import (
    SchemaConfigurationError,
    UnknownFilterEntryError,
    UnrecognizedAssociationError,
)
from .options import ModelOptions, SchemaSetOptions
from .registry import ModelRegistry

logger = get_logger(__name__)


def reference(model_name: str) -> Dict[str, Any]:
    """Return a pure ``$ref`` fragment pointing at ``model_name``."""
    return {"$ref": f"{REF_PREFIX}{model_name}"}


def _association_schema(model: ModelDef, association: AssociationDef) -> Dict[str, Any]:
    if not isinstance(association.kind, AssociationKind):
        raise UnrecognizedAssociationError(
            f"Unrecognized relationship kind {association.kind!r}; expected one of "
            f"{[k.value for k in AssociationKind]}",
            model=model.name,
            attribute=association.accessor,
        )
    if association.kind.is_plural:
        fragment = type_fragment("array")
        fragment["items"] = reference(association.target)
        return fragment
    return reference(association.target)


def _check_filter_names(model: ModelDef, options: ModelOptions) -> None:
    known = set(model.attribute_names()) | set(model.association_accessors())
    explicit = list(options.include or []) + list(options.exclude)
    for name in explicit:
        if name not in known:
            raise UnknownFilterEntryError(
                "Filter names an attribute or association the model does not have",
                model=model.name,
                attribute=name,
            )
    accessors = set(model.association_accessors())
    for name in options.required_associations:
        if name not in accessors:
            raise UnknownFilterEntryError(
                "required_associations names an unknown association",
                model=model.name,
                attribute=name,
            )


def _selected(name: str, options: ModelOptions) -> bool:
    if name in options.exclude:
        return False
    return options.include is None or name in options.include


def _build(model: ModelDef, options: ModelOptions) -> Dict[str, Any]:
    properties: Dict[str, Any] = {}
    required: List[str] = []
    hidden = set(model.backing_keys()) if options.resolve_associations else set()

    for attribute in model.attributes:
        if attribute.name in hidden or not _selected(attribute.name, options):
            continue
        properties[attribute.name] = attribute_schema(attribute)
        if attribute.allow_null is False:
            required.append(attribute.name)

    if options.resolve_associations:
        for association in model.associations:
            if not _selected(association.accessor, options):
                continue
            if association.accessor in properties:
                raise SchemaConfigurationError(
                    "Association accessor collides with an attribute name",
                    model=model.name,
                    attribute=association.accessor,
                )
            properties[association.accessor] = _association_schema(model, association)
            if association.accessor in options.required_associations:
                required.append(association.accessor)

    schema = type_fragment("object")
    schema["properties"] = properties
    if required:
        schema["required"] = required
    return schema


def model_schema(
    model: ModelDef,
    options: Union[ModelOptions, Mapping[str, Any], None] = None,
) -> Dict[str, Any]:
    """Build the object schema for one model.

    Args:
        model: Model definition to convert
        options: ``ModelOptions`` instance or mapping (include, exclude,
            resolve_associations, required_associations)

    Returns:
        ``{"type": "object", "properties": {...}, "required": [...]}`` with
        ``required`` omitted when no property is required

    Raises:
        SchemaConfigurationError: For legacy options, filter entries the
            model does not have, or unrecognized association kinds
    """
    resolved = ModelOptions.coerce(options)
    _check_filter_names(model, resolved)
    return _build(model, resolved)


def schema_set(
    registry: Union[ModelRegistry, Iterable[ModelDef]],
    options: Union[SchemaSetOptions, Mapping[str, Any], None] = None,
    dialect: Optional[str] = None,
) -> Dict[str, Any]:
    """Build one root document holding a definition per registered model.

    Global include/exclude are broad filters applied to every model and are
    not checked against each model; per-model overrides are explicit and
    are checked.

    Args:
        registry: ``ModelRegistry`` or any iterable of ``ModelDef``
        options: ``SchemaSetOptions`` instance or mapping
        dialect: ``$schema`` URI; defaults to the configured dialect

    Returns:
        ``{"$schema": ..., "type": "object", "definitions": {...}}``
    """
    resolved = SchemaSetOptions.coerce(options)
    if not isinstance(registry, ModelRegistry):
        registry = ModelRegistry(registry)

    for name in resolved.per_model:
        if name not in registry:
            logger.warning("per_model_override_unused", model=name)

    definitions: Dict[str, Any] = {}
    for model in registry:
        override = resolved.per_model.get(model.name)
        if override is not None:
            _check_filter_names(model, override)
        merged = resolved.options_for(model.name)
        definitions[model.name] = _build(model, merged)
        if not merged.resolve_associations:
            continue

        emitted = definitions[model.name]["properties"]
        for association in model.associations:
            if association.accessor in emitted and association.target not in registry:
                logger.warning(
                    "dangling_reference",
                    model=model.name,
                    accessor=association.accessor,
                    target=association.target,
                )

    logger.debug("schema_set_built", models=len(definitions))

    root = type_fragment("object")
    root["definitions"] = definitions
    return {"$schema": dialect or get_settings().schema_dialect, **root}


__all__ = ["reference", "model_schema", "schema_set"]
