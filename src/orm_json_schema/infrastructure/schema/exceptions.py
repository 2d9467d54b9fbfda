"""
Exception hierarchy for schema derivation.

Configuration errors abort the build for the whole invocation. Unknown column
types are not errors: they are logged and degrade to the permissive fragment.
"""

from typing import Optional


class SchemaDerivationError(Exception):
    """Base exception for all schema derivation errors."""

    pass


class SchemaConfigurationError(SchemaDerivationError):
    """
    Raised when model descriptors or build options are invalid.

    Args:
        message: Error description
        model: Name of the model being built (optional)
        attribute: Name of the attribute or association involved (optional)
    """

    def __init__(
        self,
        message: str,
        model: Optional[str] = None,
        attribute: Optional[str] = None,
    ):
        self.model = model
        self.attribute = attribute

        context_parts = []
        if model:
            context_parts.append(f"model='{model}'")
        if attribute:
            context_parts.append(f"attribute='{attribute}'")

        if context_parts:
            full_message = f"{message} ({', '.join(context_parts)})"
        else:
            full_message = message

        super().__init__(full_message)


class LegacyOptionError(SchemaConfigurationError):
    """Raised when a removed option is passed to a builder."""

    pass


class UnknownFilterEntryError(SchemaConfigurationError):
    """Raised when an explicit filter names something the model does not have."""

    pass


class UnrecognizedAssociationError(SchemaConfigurationError):
    """Raised for an association kind outside the recognized set."""

    pass


class MalformedSchemaError(SchemaDerivationError):
    """Raised when a schema fragment lacks the structure an operation needs."""

    pass


__all__ = [
    "SchemaDerivationError",
    "SchemaConfigurationError",
    "LegacyOptionError",
    "UnknownFilterEntryError",
    "UnrecognizedAssociationError",
    "MalformedSchemaError",
]
