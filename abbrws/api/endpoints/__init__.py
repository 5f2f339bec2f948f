"""
Typed functions for each RWS endpoint used by the client.
"""

from abbrws.api.endpoints.files import create_directory, download_file, list_files, upload_file
from abbrws.api.endpoints.signals import get_signal, get_signals, login, set_signal

__all__ = [
    "login",
    "get_signals",
    "get_signal",
    "set_signal",
    "list_files",
    "create_directory",
    "download_file",
    "upload_file",
]
