"""
ABB Robot Web Services client.

An async Python client for the RWS HTTP API of ABB robot controllers.

Example:
    ```python
    from abbrws import AbbRwsClient, AbbRwsConfig, Binary

    async with AbbRwsClient(AbbRwsConfig(host="192.168.125.1")) as client:
        signal = await client.get_signal("Local/PANEL/SS2")
        print(signal.title, signal.value)

        await client.set_signal("Local/DRV_1/DO1", Binary(True))
    ```
"""

from abbrws.api.content_type import ContentType
from abbrws.client import AbbRwsClient
from abbrws.config import AbbRwsConfig
from abbrws.exceptions import (
    AbbRwsError,
    ContentTypeError,
    DecodeError,
    InvalidCookieError,
    InvalidHeaderError,
    InvalidPathError,
    InvalidUriError,
    MalformedContentTypeError,
    NotAFileError,
    PathError,
    RemoteFailureError,
    TransportError,
    UnexpectedContentTypeError,
)
from abbrws.models import (
    Analog,
    Binary,
    Device,
    DirEntry,
    Directory,
    ErrorStatus,
    File,
    Group,
    Signal,
    SignalKind,
    SignalValue,
)

__version__ = "0.1.0"

__all__ = [
    # Main client
    "AbbRwsClient",
    "AbbRwsConfig",
    "ContentType",
    # Models
    "Signal",
    "SignalKind",
    "SignalValue",
    "Binary",
    "Analog",
    "Group",
    "DirEntry",
    "Directory",
    "File",
    "Device",
    "ErrorStatus",
    # Exceptions
    "AbbRwsError",
    "RemoteFailureError",
    "ContentTypeError",
    "MalformedContentTypeError",
    "UnexpectedContentTypeError",
    "InvalidUriError",
    "TransportError",
    "DecodeError",
    "InvalidHeaderError",
    "InvalidCookieError",
    "PathError",
    "InvalidPathError",
    "NotAFileError",
]
