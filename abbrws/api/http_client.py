"""
Async HTTP client for the RWS API.

Provides a single request routine that takes care of digest
authentication, session cookies and error responses.
"""

from dataclasses import dataclass
from typing import Any, NoReturn

import httpx
import structlog

from abbrws.api.content_type import (
    APPLICATION_JSON,
    TEXT_PLAIN,
    ContentType,
    parse_content_type,
)
from abbrws.api.cookies import CookieJar
from abbrws.api.digest_auth import DigestAuthCache
from abbrws.config import AbbRwsConfig
from abbrws.exceptions import (
    RemoteFailureError,
    TransportError,
    UnexpectedContentTypeError,
)
from abbrws.parse.envelope import parse_error

logger = structlog.get_logger(__name__)

# Plain text error bodies longer than this are not used as error message.
MAX_PLAIN_TEXT_ERROR = 150


@dataclass(frozen=True, slots=True)
class RawResponse:
    """Successful response, before decoding."""

    status_code: int
    content_type: ContentType | None
    content: bytes


class AsyncHttpClient:
    """
    Async HTTP client for one controller session.

    Owns the digest challenge cache and the session cookies. The underlying
    ``httpx.AsyncClient`` is created on ``async with`` unless one is passed
    in, in which case it is borrowed and never closed here.

    Not reentrant: run at most one request at a time per instance.
    """

    def __init__(
        self,
        config: AbbRwsConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Args:
            config: Client configuration.
            transport: Optional transport for testing (mock transport).
            client: Optional existing HTTP client to send requests with.

        Raises:
            InvalidUriError: If the configured host does not form a valid URL.
        """
        self._config = config
        self._root_url = config.root_url
        self._transport = transport

        self._client = client
        self._owns_client = client is None

        self._auth = DigestAuthCache(config.user, config.password)
        self._cookies = CookieJar()

    async def __aenter__(self) -> "AsyncHttpClient":
        self._ensure_client()
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    def _ensure_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._config.timeout,
                transport=self._transport,
            )
            self._owns_client = True
        return self._client

    async def close(self) -> None:
        """Close the HTTP client if it was created here."""
        if self._client is None:
            logger.debug("Client not open.")
            return
        if self._owns_client:
            await self._client.aclose()
            self._client = None

    @property
    def root_url(self) -> str:
        return self._root_url

    @property
    def cookies(self) -> CookieJar:
        """Session cookies received from the controller."""
        return self._cookies

    @property
    def auth(self) -> DigestAuthCache:
        return self._auth

    async def request(
        self,
        method: str,
        path: str,
        *,
        content: bytes | None = None,
        content_type: str | None = None,
    ) -> RawResponse:
        """
        Make an API request.

        Args:
            method: HTTP method (GET, POST, PUT).
            path: Path and query below the root URL (e.g., "/rw/iosystem/signals?json=1").
            content: Request body.
            content_type: Content-Type of the request body.

        Returns:
            The successful (2xx) response.

        Raises:
            RemoteFailureError: If the controller reports an error.
            MalformedContentTypeError: If an error response has no usable Content-Type.
            UnexpectedContentTypeError: If an error response is neither JSON nor plain text.
            DecodeError: If a JSON error response is malformed.
            InvalidHeaderError: If a Set-Cookie header is not UTF-8.
            InvalidCookieError: If a Set-Cookie header is malformed.
            TransportError: If the request fails due to network issues.
        """
        if self._client is None:
            msg = "HTTP client not initialized. Use 'async with' first."
            raise RuntimeError(msg)

        url = f"{self._root_url}{path}"
        headers = {"User-Agent": self._config.user_agent}
        if content_type is not None:
            headers["Content-Type"] = content_type
        if (cookie_header := self._cookies.header_value()) is not None:
            headers["Cookie"] = cookie_header

        # Requests are built directly rather than through the client, so the
        # client's own cookie store never adds to the Cookie header.
        timeout = httpx.Timeout(self._config.timeout).as_dict()

        def build_request() -> httpx.Request:
            return httpx.Request(
                method, url, headers=headers, content=content, extensions={"timeout": timeout}
            )

        logger.debug("Request", method=method, path=path)
        try:
            response = await self._auth.request(self._client, build_request)
        except httpx.TransportError as e:
            msg = f"{method} {path} failed: {e}"
            raise TransportError(msg) from e

        self._cookies.harvest(
            value for key, value in response.headers.raw if key.lower() == b"set-cookie"
        )

        if response.is_success:
            raw = _raw_header(response, b"content-type")
            parsed = parse_content_type(raw) if raw is not None else None
            return RawResponse(response.status_code, parsed, response.content)

        self._raise_remote_error(response)

    @staticmethod
    def _raise_remote_error(response: httpx.Response) -> NoReturn:
        status = response.status_code
        content_type = parse_content_type(_raw_header(response, b"content-type"))
        logger.debug("Error response", status=status, content_type=content_type.essence)

        if content_type.essence == TEXT_PLAIN:
            raise RemoteFailureError(http_status=status, server_message=_plain_text(response.content))
        if content_type.essence == APPLICATION_JSON:
            error = parse_error(response.content)
            raise RemoteFailureError(
                http_status=status, code=error.code, server_message=error.message
            )
        raise UnexpectedContentTypeError(
            str(content_type), f"{APPLICATION_JSON} or {TEXT_PLAIN}"
        )


def _raw_header(response: httpx.Response, name: bytes) -> bytes | None:
    for key, value in response.headers.raw:
        if key.lower() == name:
            return value
    return None


def _plain_text(body: bytes) -> str:
    """Use a short UTF-8 body as error message, anything else yields ""."""
    if len(body) > MAX_PLAIN_TEXT_ERROR:
        return ""
    try:
        return body.decode("utf-8")
    except UnicodeDecodeError:
        return ""
