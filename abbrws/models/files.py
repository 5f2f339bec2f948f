"""
File service domain models.
"""

from dataclasses import dataclass


@dataclass(frozen=True, kw_only=True)
class Directory:
    """A directory in a file listing."""

    name: str


@dataclass(frozen=True, kw_only=True)
class File:
    """
    A file in a file listing.

    Dates are kept as the strings reported by the controller.
    """

    name: str
    created: str
    modified: str
    size: int
    read_only: bool


@dataclass(frozen=True, kw_only=True)
class Device:
    """A storage device (e.g. a USB disk) in a file listing."""

    name: str
    device_type: str
    free_space: int
    total_space: int
    enabled: bool
    read_only: bool


DirEntry = Directory | File | Device


def _format_size(size: int) -> str:
    value = float(size)
    for unit in ("B", "KB", "MB", "GB"):
        if value < 1024:
            return f"{int(value)} {unit}" if unit == "B" else f"{value:.1f} {unit}"
        value /= 1024
    return f"{value:.1f} TB"


def describe_entry(entry: DirEntry) -> str:
    """One-line description of a listing entry."""
    match entry:
        case Directory(name=name):
            return f"{name}/"
        case File():
            flags = " (read-only)" if entry.read_only else ""
            return f"{entry.name}  {_format_size(entry.size)}  {entry.modified}{flags}"
        case Device():
            state = "enabled" if entry.enabled else "disabled"
            return (
                f"{entry.name}  [{entry.device_type}, {state}]  "
                f"{_format_size(entry.free_space)} free of {_format_size(entry.total_space)}"
            )
