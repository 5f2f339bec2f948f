"""
Decoders for RWS response bodies.
"""

from abbrws.parse.envelope import parse_error, parse_list, parse_one
from abbrws.parse.file_service import parse_directory_listing
from abbrws.parse.signal import parse_signal, parse_signal_list, value_from_string

__all__ = [
    "parse_error",
    "parse_list",
    "parse_one",
    "parse_signal",
    "parse_signal_list",
    "value_from_string",
    "parse_directory_listing",
]
