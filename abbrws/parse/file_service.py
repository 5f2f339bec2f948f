"""
File service listing decoder.
"""

from typing import Any

from abbrws.exceptions import DecodeError
from abbrws.models.files import Device, DirEntry, Directory, File
from abbrws.models.status import ErrorStatus
from abbrws.parse.coerce import bool_through_str, required, required_str, unsigned_through_str
from abbrws.parse.envelope import parse_list


def parse_directory_listing(data: bytes) -> list[DirEntry] | ErrorStatus:
    """
    Decode the body of a directory listing.

    Raises:
        DecodeError: If the envelope or any entry is malformed.
    """
    records = parse_list(data)
    if isinstance(records, ErrorStatus):
        return records
    return [parse_entry(record) for record in records]


def parse_entry(record: dict[str, Any]) -> DirEntry:
    """
    Decode one listing record, dispatching on its type tag.

    Raises:
        DecodeError: If the tag is unknown or a field is malformed.
    """
    tag = record.get("_type", record.get("class"))
    match tag:
        case "fs-dir":
            return Directory(name=required_str(record, "_title"))
        case "fs-file":
            return File(
                name=required_str(record, "_title"),
                created=required_str(record, "fs-cdate"),
                modified=required_str(record, "fs-mdate"),
                size=unsigned_through_str(required(record, "fs-size"), field="fs-size"),
                read_only=bool_through_str(required(record, "fs-readonly"), field="fs-readonly"),
            )
        case "fs-device":
            return Device(
                name=required_str(record, "_title"),
                device_type=required_str(record, "fs-devicetype"),
                free_space=unsigned_through_str(
                    required(record, "fs-freespace"), field="fs-freespace"
                ),
                total_space=unsigned_through_str(
                    required(record, "fs-totalspace"), field="fs-totalspace"
                ),
                enabled=bool_through_str(required(record, "fs-enabled"), field="fs-enabled"),
                read_only=bool_through_str(required(record, "fs-readonly"), field="fs-readonly"),
            )
        case None:
            msg = "missing field `_type`"
            raise DecodeError(msg)
    msg = f"unknown variant {tag!r}, expected one of fs-dir, fs-file, fs-device"
    raise DecodeError(msg)


def is_directory_listing(data: bytes) -> bool:
    """Check whether a body decodes as a directory listing."""
    try:
        return not isinstance(parse_directory_listing(data), ErrorStatus)
    except DecodeError:
        return False
