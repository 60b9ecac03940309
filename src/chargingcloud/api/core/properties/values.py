# chargingcloud/api/core/properties/values.py
"""
Schema-free JSON values and their structural equality.

Python's ``==`` is not a faithful JSON comparison: ``True == 1`` and
``[1] == (1,)`` both hold. ``json_equal`` compares by JSON type first and
then by value, element-wise for arrays and key-wise for objects.
"""
from __future__ import annotations

import copy
import math
from collections.abc import Mapping, Sequence
from enum import Enum
from typing import Any, Union

from chargingcloud.api.core.errors import ValidationError

JSONScalar = Union[str, int, float, bool, None]
JSONValue = Union[JSONScalar, list["JSONValue"], dict[str, "JSONValue"]]


class JSONType(str, Enum):
    NULL = "null"
    BOOLEAN = "boolean"
    NUMBER = "number"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"


def json_type(value: Any) -> JSONType:
    """Classify ``value`` as one of the six JSON types.

    Raises:
        ValidationError: If ``value`` has no JSON representation.
    """
    if value is None:
        return JSONType.NULL
    # bool before int: bool is a subclass of int
    if isinstance(value, bool):
        return JSONType.BOOLEAN
    if isinstance(value, (int, float)):
        if isinstance(value, float) and not math.isfinite(value):
            raise ValidationError("Invalid property value: non-finite number!")
        return JSONType.NUMBER
    if isinstance(value, str):
        return JSONType.STRING
    if isinstance(value, Mapping):
        return JSONType.OBJECT
    if isinstance(value, Sequence) and not isinstance(value, (bytes, bytearray)):
        return JSONType.ARRAY
    raise ValidationError(f"Invalid property value of type '{type(value).__name__}'!")


def validate_json(value: Any) -> JSONValue:
    """Check that ``value`` is a JSON value and return a detached copy."""
    kind = json_type(value)
    if kind is JSONType.OBJECT:
        out: dict[str, JSONValue] = {}
        for key, item in value.items():
            if not isinstance(key, str):
                raise ValidationError("Invalid property value: object keys must be strings!")
            out[key] = validate_json(item)
        return out
    if kind is JSONType.ARRAY:
        return [validate_json(item) for item in value]
    return copy.copy(value)


def json_equal(left: Any, right: Any) -> bool:
    """Structural JSON equality.

    Scalars compare by type and value, arrays element-wise in order, objects
    by key set and per-key value, independent of key order.
    """
    lt, rt = json_type(left), json_type(right)
    if lt is not rt:
        return False
    if lt is JSONType.OBJECT:
        if left.keys() != right.keys():
            return False
        return all(json_equal(left[k], right[k]) for k in left)
    if lt is JSONType.ARRAY:
        if len(left) != len(right):
            return False
        return all(json_equal(a, b) for a, b in zip(left, right))
    return left == right
