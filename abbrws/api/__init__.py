"""
RWS API client layer.

Provides async HTTP communication with the controller.
"""

from abbrws.api.cookies import CookieJar
from abbrws.api.digest_auth import DigestAuthCache
from abbrws.api.http_client import AsyncHttpClient, RawResponse
from abbrws.api.url_encode import url_encode_query_value

__all__ = [
    "AsyncHttpClient",
    "RawResponse",
    "CookieJar",
    "DigestAuthCache",
    "url_encode_query_value",
]
