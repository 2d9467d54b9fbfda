"""Attribute type dispatch: one rule per column type tag.

Each rule maps an ``AttributeDef`` to its base fragment without nullability.
``attribute_schema`` applies nullability and annotations on top.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Callable, Dict, Mapping

from orm_json_schema.utils.logging import get_logger

from .constants import resolve_length, type_fragment
from .core import AttributeDef, ColumnType
from .exceptions import SchemaConfigurationError
from .nullability import with_null

logger = get_logger(__name__)

Rule = Callable[[AttributeDef], Dict[str, Any]]


def _formatted(kind: str, fmt: str) -> Rule:
    def rule(attr: AttributeDef) -> Dict[str, Any]:
        fragment = type_fragment(kind)
        fragment["format"] = fmt
        return fragment

    return rule


def _plain(kind: str) -> Rule:
    def rule(attr: AttributeDef) -> Dict[str, Any]:
        return type_fragment(kind)

    return rule


def _text(attr: AttributeDef) -> Dict[str, Any]:
    fragment = type_fragment("string")
    max_length = resolve_length(attr.length)
    if max_length:
        fragment["maxLength"] = max_length
    return fragment


def _blob(attr: AttributeDef) -> Dict[str, Any]:
    fragment = type_fragment("string")
    fragment["contentEncoding"] = "base64"
    return fragment


def _enum(attr: AttributeDef) -> Dict[str, Any]:
    fragment = type_fragment("string")
    fragment["enum"] = list(attr.enum_values or [])
    return fragment


def _inet(attr: AttributeDef) -> Dict[str, Any]:
    # Branches carry only the format so the outer type union decides null
    fragment = type_fragment("string")
    fragment["anyOf"] = [{"format": "ipv4"}, {"format": "ipv6"}]
    return fragment


def _array(attr: AttributeDef) -> Dict[str, Any]:
    if attr.inner_type is None:
        raise SchemaConfigurationError(
            "Array attribute requires an inner type", attribute=attr.name
        )
    fragment = type_fragment("array")
    fragment["items"] = _typed_schema(replace(attr.inner_type, allow_null=False))
    return fragment


def _virtual(attr: AttributeDef) -> Dict[str, Any]:
    if attr.return_type is None:
        return type_fragment("string")
    return _typed_schema(
        replace(attr.return_type, name=attr.name, allow_null=attr.allow_null)
    )


_RULES: Mapping[ColumnType, Rule] = {
    ColumnType.BOOLEAN: _plain("boolean"),
    ColumnType.TINYINT: _formatted("integer", "int32"),
    ColumnType.SMALLINT: _formatted("integer", "int32"),
    ColumnType.MEDIUMINT: _formatted("integer", "int32"),
    ColumnType.INTEGER: _formatted("integer", "int32"),
    ColumnType.BIGINT: _formatted("integer", "int64"),
    ColumnType.FLOAT: _formatted("number", "float"),
    ColumnType.DOUBLE: _formatted("number", "double"),
    ColumnType.REAL: _plain("number"),
    ColumnType.DECIMAL: _plain("number"),
    ColumnType.NUMERIC: _plain("number"),
    ColumnType.CHAR: _text,
    ColumnType.STRING: _text,
    ColumnType.TEXT: _text,
    ColumnType.CITEXT: _text,
    ColumnType.BLOB: _blob,
    ColumnType.DATE: _formatted("string", "date-time"),
    ColumnType.DATEONLY: _formatted("string", "date"),
    ColumnType.TIME: _formatted("string", "time"),
    ColumnType.ENUM: _enum,
    ColumnType.UUID: _formatted("string", "uuid"),
    ColumnType.UUIDV1: _formatted("string", "uuid"),
    ColumnType.UUIDV4: _formatted("string", "uuid"),
    ColumnType.INET: _inet,
    ColumnType.CIDR: _plain("string"),
    ColumnType.MACADDR: _plain("string"),
    ColumnType.JSON: _plain("any"),
    ColumnType.JSONB: _plain("any"),
    ColumnType.ARRAY: _array,
    ColumnType.VIRTUAL: _virtual,
}


def dispatch(attr: AttributeDef) -> Dict[str, Any]:
    """Return the base fragment for ``attr`` without nullability applied.

    Unknown type tags log a warning and fall back to the permissive
    fragment so one unsupported column does not block the whole model.
    """
    rule = _RULES.get(attr.column_type) if isinstance(attr.column_type, ColumnType) else None
    if rule is None:
        logger.warning(
            "unsupported_column_type",
            attribute=attr.name,
            column_type=attr.type_label,
        )
        return type_fragment("any")
    return rule(attr)


def _typed_schema(attr: AttributeDef) -> Dict[str, Any]:
    return with_null(dispatch(attr), attr.allow_null)


def attribute_schema(attr: AttributeDef) -> Dict[str, Any]:
    """Build the complete schema fragment for one attribute.

    Examples:
        >>> attribute_schema(AttributeDef("id", ColumnType.INTEGER, allow_null=False))
        {'type': 'integer', 'format': 'int32'}
        >>> attribute_schema(AttributeDef("title", "string", length="tiny"))
        {'type': ['string', 'null'], 'maxLength': 255}
    """
    fragment = _typed_schema(attr)
    if attr.description:
        fragment["description"] = attr.description
    if attr.example is not None:
        fragment["examples"] = [attr.example]
    if attr.default is not None:
        fragment["default"] = attr.default
    return fragment


__all__ = ["dispatch", "attribute_schema"]
