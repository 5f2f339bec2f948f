"""
Signal-related domain models.
"""

import math
from dataclasses import dataclass
from enum import StrEnum

_U64_LIMIT = 1 << 64


class SignalKind(StrEnum):
    """Electrical type of an I/O signal, as named by the controller."""

    DIGITAL_INPUT = "DI"
    DIGITAL_OUTPUT = "DO"
    ANALOG_INPUT = "AI"
    ANALOG_OUTPUT = "AO"
    GROUP_INPUT = "GI"
    GROUP_OUTPUT = "GO"

    @property
    def is_digital(self) -> bool:
        return self in (SignalKind.DIGITAL_INPUT, SignalKind.DIGITAL_OUTPUT)

    @property
    def is_analog(self) -> bool:
        return self in (SignalKind.ANALOG_INPUT, SignalKind.ANALOG_OUTPUT)

    @property
    def is_group(self) -> bool:
        return self in (SignalKind.GROUP_INPUT, SignalKind.GROUP_OUTPUT)

    @property
    def is_input(self) -> bool:
        return self in (SignalKind.DIGITAL_INPUT, SignalKind.ANALOG_INPUT, SignalKind.GROUP_INPUT)

    @property
    def is_output(self) -> bool:
        return not self.is_input

    @property
    def label(self) -> str:
        """Human readable name, e.g. "digital input"."""
        return self.name.replace("_", " ").lower()


@dataclass(frozen=True, slots=True)
class Binary:
    """Value of a digital signal."""

    value: bool

    def __str__(self) -> str:
        return "1" if self.value else "0"


@dataclass(frozen=True, slots=True)
class Analog:
    """Value of an analog signal."""

    value: float

    def __str__(self) -> str:
        return format_analog(self.value)


@dataclass(frozen=True, slots=True)
class Group:
    """Value of a group signal: the packed state of its binary lines."""

    value: int

    def __post_init__(self) -> None:
        if not 0 <= self.value < _U64_LIMIT:
            msg = f"group value out of range for unsigned 64-bit integer: {self.value}"
            raise ValueError(msg)

    def __str__(self) -> str:
        return str(self.value)


SignalValue = Binary | Analog | Group


def format_analog(value: float) -> str:
    """
    Format a float as the shortest decimal that parses back to the same value.

    Integral values are written without a fractional part ("3" rather than "3.0").
    """
    if math.isfinite(value) and value.is_integer() and abs(value) < 1e16:
        return str(int(value))
    return repr(value)


def expected_value_type(kind: SignalKind) -> type[Binary] | type[Analog] | type[Group]:
    """Get the value variant carried by signals of the given kind."""
    if kind.is_digital:
        return Binary
    if kind.is_analog:
        return Analog
    return Group


@dataclass(frozen=True, kw_only=True)
class Signal:
    """
    A named I/O point on the controller.

    The runtime variant of ``value`` always matches ``kind``:
    digital kinds carry Binary, analog kinds Analog and group kinds Group.
    """

    title: str
    kind: SignalKind
    category: str
    value: SignalValue

    def __post_init__(self) -> None:
        expected = expected_value_type(self.kind)
        if not isinstance(self.value, expected):
            msg = (
                f"signal {self.title!r} of kind {self.kind.label} requires a "
                f"{expected.__name__} value, got {type(self.value).__name__}"
            )
            raise ValueError(msg)
