"""
Build options for the model and schema-set builders.

Options are Pydantic models that forbid unknown keys. Keys removed from
earlier releases fail fast with a ``LegacyOptionError`` naming what to use
instead. ``SchemaSetOptions`` can also be loaded from a YAML file.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Type, TypeVar, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from .exceptions import LegacyOptionError, SchemaConfigurationError

LEGACY_OPTIONS: Mapping[str, str] = {
    "always_required": "mark columns allow_null=False instead",
    "alwaysRequired": "mark columns allow_null=False instead",
    "allow_null": "nullability now always follows each attribute's allow_null",
    "allowNull": "nullability now always follows each attribute's allow_null",
    "private": "use 'exclude'",
    "attributes": "use 'include'",
}

OptionsT = TypeVar("OptionsT", bound="_StrictOptions")


def _reject_legacy(data: Any) -> Any:
    if isinstance(data, Mapping):
        for key in data:
            if key in LEGACY_OPTIONS:
                raise LegacyOptionError(
                    f"Option '{key}' has been removed: {LEGACY_OPTIONS[key]}"
                )
    return data


class _StrictOptions(BaseModel):
    model_config = ConfigDict(extra="forbid")

    @model_validator(mode="before")
    @classmethod
    def _check_legacy(cls, data: Any) -> Any:
        return _reject_legacy(data)

    @classmethod
    def coerce(
        cls: Type[OptionsT], value: Union[OptionsT, Mapping[str, Any], None]
    ) -> OptionsT:
        """Accept an instance, a mapping or None and return an instance."""
        if value is None:
            return cls()
        if isinstance(value, cls):
            return value
        if not isinstance(value, Mapping):
            raise SchemaConfigurationError(
                f"{cls.__name__} expects a mapping, got {type(value).__name__}"
            )
        # Checked here too: pydantic would wrap the error raised in the validator
        _reject_legacy(value)
        try:
            return cls.model_validate(dict(value))
        except ValidationError as e:
            raise SchemaConfigurationError(f"Invalid {cls.__name__}: {e}") from e


class ModelOptions(_StrictOptions):
    """Options for building a single model schema."""

    include: Optional[List[str]] = Field(
        None, description="Attribute/association allow-list (default: all)"
    )
    exclude: List[str] = Field(
        default_factory=list, description="Deny-list; wins over include"
    )
    resolve_associations: bool = Field(
        True, description="Emit association references and hide backing keys"
    )
    required_associations: List[str] = Field(
        default_factory=list,
        description="Association accessors that go into 'required'",
    )


class SchemaSetOptions(_StrictOptions):
    """Options for building a schema set over a registry."""

    include: Optional[List[str]] = Field(None, description="Global allow-list")
    exclude: List[str] = Field(default_factory=list, description="Global deny-list")
    per_model: Dict[str, ModelOptions] = Field(
        default_factory=dict, description="Per-model overrides keyed by model name"
    )

    @model_validator(mode="before")
    @classmethod
    def _check_per_model_legacy(cls, data: Any) -> Any:
        if isinstance(data, Mapping):
            per_model = data.get("per_model")
            # Non-mapping values are left for field validation to reject
            if isinstance(per_model, Mapping):
                for overrides in per_model.values():
                    _reject_legacy(overrides)
        return data

    def options_for(self, model_name: str) -> ModelOptions:
        """Merge global filters with the override for ``model_name``."""
        override = self.per_model.get(model_name)
        if override is None:
            return ModelOptions(include=self.include, exclude=list(self.exclude))

        include = override.include if override.include is not None else self.include
        exclude = list(self.exclude)
        exclude.extend(name for name in override.exclude if name not in exclude)
        return ModelOptions(
            include=include,
            exclude=exclude,
            resolve_associations=override.resolve_associations,
            required_associations=list(override.required_associations),
        )


def load_schema_set_options(config_path: Union[str, Path]) -> SchemaSetOptions:
    """
    Load and validate schema-set options from a YAML file.

    Raises:
        SchemaConfigurationError: If the file is missing, not valid YAML,
            or fails validation
    """
    config_file = Path(config_path)

    if not config_file.exists():
        raise SchemaConfigurationError(f"Options file not found: {config_path}")

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise SchemaConfigurationError(f"Invalid YAML in options file: {e}") from e

    return SchemaSetOptions.coerce(data or {})


__all__ = [
    "LEGACY_OPTIONS",
    "ModelOptions",
    "SchemaSetOptions",
    "load_schema_set_options",
]
