"""
Error status reported inside a response envelope.
"""

from dataclasses import dataclass


@dataclass(frozen=True, kw_only=True)
class ErrorStatus:
    """
    Attributes:
        code: Controller error code as an unsigned 32-bit value (e.g. 0xC0048409).
        message: Human readable message from the controller.
    """

    code: int
    message: str
