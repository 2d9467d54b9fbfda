"""Canonical schema fragments and text size aliases.

The tables below are read-only. ``type_fragment`` hands out deep copies so
callers can extend the result freely.
"""

from __future__ import annotations

import copy
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Union

from .exceptions import SchemaConfigurationError

NULL_TYPE = "null"

REF_PREFIX = "#/definitions/"

_TYPE_FRAGMENTS: Mapping[str, Mapping[str, Any]] = MappingProxyType(
    {
        "object": MappingProxyType({"type": "object"}),
        "array": MappingProxyType({"type": "array"}),
        "boolean": MappingProxyType({"type": "boolean"}),
        "integer": MappingProxyType({"type": "integer"}),
        "number": MappingProxyType({"type": "number"}),
        "string": MappingProxyType({"type": "string"}),
        # integer is covered by number
        "any": MappingProxyType(
            {"type": ("object", "array", "boolean", "number", "string")}
        ),
    }
)

# MySQL TEXT size classes
SIZE_ALIASES: Mapping[str, int] = MappingProxyType(
    {
        "tiny": 255,
        "medium": 16777215,
        "long": 4294967295,
    }
)


def _thaw(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {k: _thaw(v) for k, v in value.items()}
    if isinstance(value, tuple):
        return [_thaw(v) for v in value]
    return copy.deepcopy(value)


def type_fragment(kind: str) -> Dict[str, Any]:
    """Return a fresh copy of the canonical fragment for ``kind``.

    Raises:
        KeyError: If ``kind`` is not one of the primitive kinds.
    """
    try:
        fragment = _TYPE_FRAGMENTS[kind]
    except KeyError:
        raise KeyError(
            f"Unknown schema kind '{kind}'. Available: {sorted(_TYPE_FRAGMENTS)}"
        ) from None
    return _thaw(fragment)


def resolve_length(raw: Optional[Union[int, str]]) -> Optional[int]:
    """Resolve a column length or size alias to a maxLength value.

    Returns None when there is no length (absent or zero).

    Examples:
        >>> resolve_length("medium")
        16777215
        >>> resolve_length(100)
        100
        >>> resolve_length(0) is None
        True
    """
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, str):
        key = raw.strip().lower()
        if key in SIZE_ALIASES:
            return SIZE_ALIASES[key]
        if not key.isdigit():
            raise SchemaConfigurationError(
                f"Unknown size alias {raw!r}; expected one of {list(SIZE_ALIASES)} "
                "or a positive integer"
            )
        raw = int(key)
    if not isinstance(raw, int):
        raise SchemaConfigurationError(f"Length must be an integer, got {raw!r}")
    if raw < 0:
        raise SchemaConfigurationError(f"Length must not be negative, got {raw}")
    return raw or None


__all__ = [
    "NULL_TYPE",
    "REF_PREFIX",
    "SIZE_ALIASES",
    "type_fragment",
    "resolve_length",
]
