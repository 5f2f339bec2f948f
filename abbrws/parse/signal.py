"""
Signal decoder.

The controller encodes a signal's value differently depending on how it was
fetched: the signal listing sends ``lvalue`` as a JSON number, while a single
signal resource sends it as a string. Both shapes converge on the same
construction routine, which picks the interpretation from the signal kind.
"""

import math
import re
from dataclasses import dataclass
from typing import Any

from abbrws.exceptions import DecodeError
from abbrws.models.signal import Analog, Binary, Group, Signal, SignalKind, SignalValue
from abbrws.models.status import ErrorStatus
from abbrws.parse.coerce import required, required_str
from abbrws.parse.envelope import parse_list, parse_one

_U64_LIMIT = 1 << 64

_FLOAT = re.compile(
    r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf|infinity|nan)",
    re.IGNORECASE,
)
_UNSIGNED = re.compile(r"\+?[0-9]+")


@dataclass(frozen=True, slots=True)
class _ListRecord:
    """Signal as it appears in the signal listing; ``lvalue`` is a number."""

    title: str
    kind: SignalKind
    category: str
    lvalue: float | int


@dataclass(frozen=True, slots=True)
class _SingleRecord:
    """Signal as returned by its own resource; ``lvalue`` is a string."""

    title: str
    kind: SignalKind
    category: str
    lvalue: str


def parse_signal_list(data: bytes) -> list[Signal] | ErrorStatus:
    """
    Decode the body of the signal listing.

    Raises:
        DecodeError: If the envelope or any record is malformed.
    """
    records = parse_list(data)
    if isinstance(records, ErrorStatus):
        return records
    return [_from_list_record(_list_record(record)) for record in records]


def parse_signal(data: bytes) -> Signal | ErrorStatus:
    """
    Decode the body of a single signal resource.

    Raises:
        DecodeError: If the envelope or the record is malformed.
    """
    record = parse_one(data)
    if isinstance(record, ErrorStatus):
        return record
    return _from_single_record(_single_record(record))


def value_from_string(kind: SignalKind, text: str) -> SignalValue:
    """
    Interpret the string form of a value for a signal of the given kind.

    Digital values must be exactly "1" or "0", analog values use the
    standard floating point grammar and group values are unsigned integers.

    Raises:
        DecodeError: If the text is not a valid value for the kind.
    """
    if kind.is_digital:
        if text == "1":
            return Binary(True)
        if text == "0":
            return Binary(False)
        msg = f"invalid value {text!r} for {kind.label} signal, expected 1 or 0"
        raise DecodeError(msg)

    if kind.is_analog:
        if not _FLOAT.fullmatch(text):
            msg = f"invalid value {text!r} for {kind.label} signal, expected floating-point value"
            raise DecodeError(msg)
        return Analog(float(text))

    if not _UNSIGNED.fullmatch(text) or int(text) >= _U64_LIMIT:
        msg = f"invalid value {text!r} for {kind.label} signal, expected unsigned integer"
        raise DecodeError(msg)
    return Group(int(text))


def value_from_number(kind: SignalKind, number: float | int) -> SignalValue:
    """
    Interpret the numeric form of a value for a signal of the given kind.

    Group values arrive as JSON numbers too. Integer literals are decoded
    exactly, but a group value sent as a float above 2**53 has already lost
    precision on the wire; it is accepted as the nearest integral float.

    Raises:
        DecodeError: If the number is not a valid value for the kind.
    """
    if kind.is_digital:
        if number == 1:
            return Binary(True)
        if number == 0:
            return Binary(False)
        msg = f"invalid value {number!r} for {kind.label} signal, expected 1 or 0"
        raise DecodeError(msg)

    if kind.is_analog:
        try:
            return Analog(float(number))
        except OverflowError as e:
            msg = f"value out of range for {kind.label} signal: {number!r}"
            raise DecodeError(msg) from e

    if isinstance(number, float) and not (math.isfinite(number) and number.is_integer()):
        msg = f"invalid value {number!r} for {kind.label} signal, expected unsigned integer"
        raise DecodeError(msg)
    value = int(number)
    if not 0 <= value < _U64_LIMIT:
        msg = f"value out of range for {kind.label} signal: {number!r}"
        raise DecodeError(msg)
    return Group(value)


def _from_list_record(raw: _ListRecord) -> Signal:
    return Signal(
        title=raw.title,
        kind=raw.kind,
        category=raw.category,
        value=value_from_number(raw.kind, raw.lvalue),
    )


def _from_single_record(raw: _SingleRecord) -> Signal:
    return Signal(
        title=raw.title,
        kind=raw.kind,
        category=raw.category,
        value=value_from_string(raw.kind, raw.lvalue),
    )


def _list_record(record: dict[str, Any]) -> _ListRecord:
    lvalue = required(record, "lvalue")
    if isinstance(lvalue, bool) or not isinstance(lvalue, int | float):
        msg = f"invalid type for `lvalue`: {lvalue!r}, expected number"
        raise DecodeError(msg)
    return _ListRecord(
        title=required_str(record, "_title"),
        kind=_kind(record),
        category=required_str(record, "category"),
        lvalue=lvalue,
    )


def _single_record(record: dict[str, Any]) -> _SingleRecord:
    return _SingleRecord(
        title=required_str(record, "_title"),
        kind=_kind(record),
        category=required_str(record, "category"),
        lvalue=required_str(record, "lvalue"),
    )


def _kind(record: dict[str, Any]) -> SignalKind:
    raw = required_str(record, "type")
    try:
        return SignalKind(raw)
    except ValueError as e:
        expected = ", ".join(kind.value for kind in SignalKind)
        msg = f"unknown signal type {raw!r}, expected one of {expected}"
        raise DecodeError(msg) from e
