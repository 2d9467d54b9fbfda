"""Add or remove ``null`` from a fragment's type union."""

from __future__ import annotations

import copy
from typing import Any, Dict, List, Mapping

from .constants import NULL_TYPE
from .exceptions import MalformedSchemaError


def with_null(fragment: Mapping[str, Any], allow_null: bool) -> Dict[str, Any]:
    """Return a copy of ``fragment`` whose type admits null iff ``allow_null``.

    The type is normalized to a list, null is added or removed, and a single
    remaining type collapses back to a scalar. An ``enum`` list is kept in
    step with the type so a nullable enum accepts None.

    Raises:
        MalformedSchemaError: If the fragment has no ``type`` (pure ``$ref``
            or empty schemas), or removing null would leave no type.

    Examples:
        >>> with_null({"type": "string"}, True)
        {'type': ['string', 'null']}
        >>> with_null({"type": ["string", "null"]}, False)
        {'type': 'string'}
    """
    if "type" not in fragment:
        raise MalformedSchemaError(
            f"Cannot apply nullability to a fragment without 'type': {dict(fragment)!r}"
        )

    result = copy.deepcopy(dict(fragment))
    raw = result["type"]
    types: List[str] = []
    for name in raw if isinstance(raw, (list, tuple)) else [raw]:
        if name not in types:
            types.append(name)

    if allow_null:
        if NULL_TYPE not in types:
            types.append(NULL_TYPE)
    else:
        types = [t for t in types if t != NULL_TYPE]
        if not types:
            raise MalformedSchemaError("Removing null would leave the fragment without a type")

    result["type"] = types[0] if len(types) == 1 else types

    if "enum" in result:
        values = [v for v in result["enum"] if v is not None]
        if allow_null:
            values.append(None)
        result["enum"] = values

    return result


__all__ = ["with_null"]
