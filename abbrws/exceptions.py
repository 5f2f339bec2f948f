"""
ABB RWS exception hierarchy.

All exceptions inherit from AbbRwsError for easy catching.
"""

from typing import Any


class AbbRwsError(Exception):
    """Base exception for all abbrws errors."""

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message)
        self.message = message
        self.context = context

    def __str__(self) -> str:
        if self.context:
            ctx = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({ctx})"
        return self.message


class RemoteFailureError(AbbRwsError):
    """The controller reported a failure for the request."""

    def __init__(self, *, http_status: int, code: int | None = None, server_message: str = "") -> None:
        message = f"remote call failed with HTTP status {http_status}"
        if code is not None:
            # The controller documents its codes as signed 32-bit values.
            signed = code - (1 << 32) if code >= (1 << 31) else code
            message += f" and error code {signed}"
        if server_message:
            message += f": {server_message}"
        super().__init__(message)
        self.http_status = http_status
        self.code = code
        self.server_message = server_message


class ContentTypeError(AbbRwsError):
    """Content-Type of a response could not be used."""


class MalformedContentTypeError(ContentTypeError):
    """Content-Type header is missing or could not be parsed."""

    def __init__(self, content_type: bytes) -> None:
        try:
            shown: str | bytes = content_type.decode("utf-8")
        except UnicodeDecodeError:
            shown = content_type
        super().__init__(f"malformed content type: {shown!r}")
        self.content_type = content_type


class UnexpectedContentTypeError(ContentTypeError):
    """Content-Type header was valid but not one we can handle."""

    def __init__(self, actual: str, expected: str) -> None:
        super().__init__(f"unexpected content type: {actual!r}, expected {expected}")
        self.actual = actual
        self.expected = expected


class InvalidUriError(AbbRwsError):
    """Controller URL could not be built from the configured host."""

    def __init__(self, message: str, *, uri: str) -> None:
        super().__init__(message, uri=uri)
        self.uri = uri


class TransportError(AbbRwsError):
    """Network-level error (connection failed, timeout, protocol error)."""


class DecodeError(AbbRwsError):
    """Response body did not have the expected structure."""


class InvalidHeaderError(AbbRwsError):
    """Response header value is not valid UTF-8."""

    def __init__(self, message: str, *, header: str) -> None:
        super().__init__(message, header=header)
        self.header = header


class InvalidCookieError(AbbRwsError):
    """Set-Cookie header could not be parsed."""

    def __init__(self, message: str, *, cookie: str) -> None:
        super().__init__(message, cookie=cookie)
        self.cookie = cookie


class PathError(AbbRwsError):
    """Path-related error."""

    def __init__(self, message: str, *, path: str) -> None:
        super().__init__(message, path=path)
        self.path = path


class InvalidPathError(PathError):
    """Path cannot be used for the requested operation."""


class NotAFileError(PathError):
    """Expected a file but got a directory."""
