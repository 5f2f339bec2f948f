"""
HTTP Digest authentication with a cached challenge.

The controller answers an unauthenticated request with 401 and a
``WWW-Authenticate: Digest ...`` challenge. ``httpx.DigestAuth`` keeps the
last challenge it answered, so once the handshake is done every following
request carries a precomputed ``Authorization`` header and the 401 round trip
is only paid again when the server issues a new challenge.
"""

from collections.abc import Callable

import httpx
import structlog

logger = structlog.get_logger(__name__)

# Raised by httpx.DigestAuth for challenges it cannot answer: malformed
# parameters, missing realm or nonce, unsupported algorithm or qop.
_UNANSWERABLE = (httpx.ProtocolError, KeyError, ValueError, NotImplementedError)


class DigestAuthCache:
    """
    Performs requests while caching the server's digest challenge.

    The cache owns the credentials and at most one challenge. It is not safe
    to share between concurrently running requests.
    """

    def __init__(self, username: str, password: str) -> None:
        """
        Args:
            username: User to authenticate as.
            password: Password for the user.
        """
        self._username = username
        self._password = password
        self._auth = httpx.DigestAuth(username, password)
        self._challenge: str | None = None

    @property
    def username(self) -> str:
        return self._username

    @property
    def challenge(self) -> str | None:
        """The ``WWW-Authenticate`` value of the cached challenge, if any."""
        return self._challenge

    async def request(
        self,
        client: httpx.AsyncClient,
        build_request: Callable[[], httpx.Request],
    ) -> httpx.Response:
        """
        Send a request, answering a digest challenge if needed.

        If a challenge is cached, the request carries an Authorization header
        computed from it. If the server answers 401 with a new Digest
        challenge, the challenge replaces the cached one and a freshly built
        request is sent once more. A second 401 is returned to the caller.

        A 401 whose challenge cannot be answered is returned as is, and the
        cached challenge is dropped so the next request starts a new handshake.

        Args:
            client: HTTP client used to send the requests.
            build_request: Factory for the request; called once, or twice on retry.

        Returns:
            The final response.

        Raises:
            httpx.HTTPError: If sending fails. Transport errors are not retried.
        """
        flow = self._auth.async_auth_flow(build_request())
        try:
            request = await anext(flow)
            response = await client.send(request)

            try:
                answered = await flow.asend(response)
            except StopAsyncIteration:
                return response
            except _UNANSWERABLE as e:
                logger.debug("Digest challenge cannot be answered", error=str(e))
                self._reset()
                return response

            self._challenge = _digest_challenge(response)
            logger.debug("Digest challenge cached")

            # The retry is rebuilt so the session's own Cookie header is kept;
            # only the answer to the challenge is carried over.
            retry = build_request()
            retry.headers["Authorization"] = answered.headers["Authorization"]
            return await client.send(retry)
        finally:
            await flow.aclose()

    def _reset(self) -> None:
        self._auth = httpx.DigestAuth(self._username, self._password)
        self._challenge = None


def _digest_challenge(response: httpx.Response) -> str | None:
    for header in response.headers.get_list("www-authenticate"):
        if header.lower().startswith("digest "):
            return header
    return None
