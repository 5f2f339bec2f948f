"""
Decoder for the envelope wrapped around every RWS JSON response.

The controller nests results two levels deep::

    {"_links": {...}, "_embedded": {"_state": [...records...]}}

or, for failures::

    {"_links": {...}, "_embedded": {"status": {"code": -1073445879, "msg": "..."}}}
"""

import json
import struct
from typing import Any

from abbrws.exceptions import DecodeError
from abbrws.models.status import ErrorStatus

Record = dict[str, Any]


def load_json(data: bytes) -> Any:
    """
    Parse a JSON document.

    Raises:
        DecodeError: If the data is not valid UTF-8 JSON.
    """
    try:
        return json.loads(data)
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        msg = f"invalid JSON: {e}"
        raise DecodeError(msg) from e


def parse_error(data: bytes) -> ErrorStatus:
    """
    Parse an error envelope.

    Raises:
        DecodeError: If the envelope carries no error status.
    """
    embedded = _embedded(load_json(data))
    if embedded.get("status") is None:
        msg = "missing field `status`"
        raise DecodeError(msg)
    return _error_status(embedded["status"])


def parse_list(data: bytes) -> list[Record] | ErrorStatus:
    """
    Parse an envelope holding a sequence of records.

    Returns:
        The records, or the error status if the envelope holds one instead.

    Raises:
        DecodeError: If neither records nor an error status are present.
    """
    embedded = _embedded(load_json(data))
    state = embedded.get("_state")
    if state is None:
        return _status_or_missing_state(embedded)
    if not isinstance(state, list):
        msg = f"invalid type for `_state`: expected a sequence, got {_json_type(state)}"
        raise DecodeError(msg)
    return [_record(item) for item in state]


def parse_one(data: bytes) -> Record | ErrorStatus:
    """
    Parse an envelope holding a single record.

    The record is wrapped in a sequence of length one; an empty sequence
    is treated as if the state were absent.

    Returns:
        The record, or the error status if the envelope holds one instead.

    Raises:
        DecodeError: If no record and no error status are present, or the
            sequence holds more than one record.
    """
    embedded = _embedded(load_json(data))
    state = embedded.get("_state")
    if state is None or state == []:
        return _status_or_missing_state(embedded)
    if not isinstance(state, list):
        msg = f"invalid type for `_state`: expected a sequence, got {_json_type(state)}"
        raise DecodeError(msg)
    if len(state) != 1:
        msg = f"invalid length {len(state)} for `_state`, expected a single record"
        raise DecodeError(msg)
    return _record(state[0])


def reinterpret_error_code(code: int) -> int:
    """
    Reinterpret the signed 32-bit wire encoding of an error code as unsigned.

    The controller sends its codes as signed integers although they are
    unsigned bit patterns: -1073445879 is really 0xC0048409. A numeric
    conversion would reject or mangle every code with the high bit set.

    Raises:
        DecodeError: If the value does not fit in a signed 32-bit integer.
    """
    try:
        return struct.unpack("<I", struct.pack("<i", code))[0]
    except struct.error as e:
        msg = f"error code out of range for a signed 32-bit integer: {code}"
        raise DecodeError(msg) from e


def _embedded(document: Any) -> Record:
    if not isinstance(document, dict):
        msg = f"invalid type: expected an object, got {_json_type(document)}"
        raise DecodeError(msg)
    embedded = document.get("_embedded")
    if embedded is None:
        msg = "missing field `_embedded`"
        raise DecodeError(msg)
    if not isinstance(embedded, dict):
        msg = f"invalid type for `_embedded`: expected an object, got {_json_type(embedded)}"
        raise DecodeError(msg)
    return embedded


def _status_or_missing_state(embedded: Record) -> ErrorStatus:
    if embedded.get("status") is not None:
        return _error_status(embedded["status"])
    msg = "missing field `_state`"
    raise DecodeError(msg)


def _error_status(status: Any) -> ErrorStatus:
    if not isinstance(status, dict):
        msg = f"invalid type for `status`: expected an object, got {_json_type(status)}"
        raise DecodeError(msg)
    code = status.get("code")
    message = status.get("msg")
    if code is None:
        msg = "missing field `code`"
        raise DecodeError(msg)
    if message is None:
        msg = "missing field `msg`"
        raise DecodeError(msg)
    if isinstance(code, bool) or not isinstance(code, int):
        msg = f"invalid type for `code`: expected an integer, got {_json_type(code)}"
        raise DecodeError(msg)
    if not isinstance(message, str):
        msg = f"invalid type for `msg`: expected a string, got {_json_type(message)}"
        raise DecodeError(msg)
    return ErrorStatus(code=reinterpret_error_code(code), message=message)


def _record(item: Any) -> Record:
    if not isinstance(item, dict):
        msg = f"invalid type for record: expected an object, got {_json_type(item)}"
        raise DecodeError(msg)
    return item


def _json_type(value: Any) -> str:
    match value:
        case None:
            return "null"
        case bool():
            return "boolean"
        case int() | float():
            return "number"
        case str():
            return "string"
        case list():
            return "sequence"
        case dict():
            return "object"
    return type(value).__name__
