"""
Domain models for ABB RWS.

These are immutable (frozen) dataclasses representing the controller's resources.
"""

from abbrws.models.files import Device, DirEntry, Directory, File
from abbrws.models.signal import Analog, Binary, Group, Signal, SignalKind, SignalValue
from abbrws.models.status import ErrorStatus

__all__ = [
    # Signals
    "SignalKind",
    "SignalValue",
    "Binary",
    "Analog",
    "Group",
    "Signal",
    # Files
    "DirEntry",
    "Directory",
    "File",
    "Device",
    # Status
    "ErrorStatus",
]
