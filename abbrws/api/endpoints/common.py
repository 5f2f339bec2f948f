"""Helpers shared by the endpoint modules."""

from typing import TypeVar

from abbrws.api.http_client import RawResponse
from abbrws.exceptions import RemoteFailureError
from abbrws.models.status import ErrorStatus

T = TypeVar("T")


def raise_for_status(response: RawResponse, decoded: T | ErrorStatus) -> T:
    """
    Unwrap a decoded body, raising if the envelope carried an error status.

    Raises:
        RemoteFailureError: If ``decoded`` is an error status.
    """
    if isinstance(decoded, ErrorStatus):
        raise RemoteFailureError(
            http_status=response.status_code, code=decoded.code, server_message=decoded.message
        )
    return decoded
