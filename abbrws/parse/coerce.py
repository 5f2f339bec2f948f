"""
Coercions for fields the controller sends either natively or as strings.

Depending on the RobotWare version, numbers and booleans in file service
records arrive as JSON numbers/booleans or as their string form.
"""

import re
from typing import Any

from abbrws.exceptions import DecodeError

_UNSIGNED = re.compile(r"\+?[0-9]+")


def unsigned_through_str(value: Any, *, field: str) -> int:
    """
    Decode a non-negative integer given natively or as a decimal string.

    Raises:
        DecodeError: If the value is not a non-negative integer.
    """
    if isinstance(value, str):
        if not _UNSIGNED.fullmatch(value):
            msg = f"invalid value {value!r} for `{field}`, expected unsigned integer"
            raise DecodeError(msg)
        return int(value)
    if isinstance(value, bool) or not isinstance(value, int):
        msg = f"invalid type for `{field}`: {value!r}, expected unsigned integer"
        raise DecodeError(msg)
    if value < 0:
        msg = f"value out of range for `{field}`: {value}"
        raise DecodeError(msg)
    return value


def bool_through_str(value: Any, *, field: str) -> bool:
    """
    Decode a boolean given natively or as "true"/"false".

    Raises:
        DecodeError: If the value is not a boolean.
    """
    if isinstance(value, bool):
        return value
    if value == "true":
        return True
    if value == "false":
        return False
    msg = f"invalid value {value!r} for `{field}`, expected boolean"
    raise DecodeError(msg)


def required(record: dict[str, Any], field: str) -> Any:
    """Get a field from a record, failing if it is missing."""
    if field not in record:
        msg = f"missing field `{field}`"
        raise DecodeError(msg)
    return record[field]


def required_str(record: dict[str, Any], field: str) -> str:
    """Get a string field from a record."""
    value = required(record, field)
    if not isinstance(value, str):
        msg = f"invalid type for `{field}`: {value!r}, expected string"
        raise DecodeError(msg)
    return value
