"""Tests for DigestAuthCache."""

import hashlib
from urllib.request import parse_http_list, parse_keqv_list

import httpx
import pytest

from abbrws.api.digest_auth import DigestAuthCache
from abbrws.tests.utils.mock_transport import CHALLENGE, MockTransport

URL = "http://robot.local/rw/iosystem/signals?json=1"
USER = "Default User"
PASSWORD = "robotics"


def _build_get() -> httpx.Request:
    return httpx.Request("GET", URL)


def _fields(authorization: str) -> dict[str, str]:
    scheme, _, params = authorization.partition(" ")
    assert scheme == "Digest"
    return parse_keqv_list(parse_http_list(params))


def _expected_response(request: httpx.Request, fields: dict[str, str]) -> str:
    """Compute the answer the controller expects, over the target as sent on the wire."""

    def md5(text: str) -> str:
        return hashlib.md5(text.encode()).hexdigest()

    target = request.url.raw_path.decode("ascii")
    ha1 = md5(f"{USER}:{fields['realm']}:{PASSWORD}")
    ha2 = md5(f"{request.method}:{target}")
    return md5(f"{ha1}:{fields['nonce']}:{fields['nc']}:{fields['cnonce']}:{fields['qop']}:{ha2}")


@pytest.mark.asyncio
async def test_request_retries_once_after_challenge(mock_transport: MockTransport) -> None:
    """Test that [no challenge, 401 + challenge, 200] issues exactly two requests."""
    mock_transport.add_challenge()
    mock_transport.add_response(httpx.codes.OK, content=b"ok")
    cache = DigestAuthCache(USER, PASSWORD)

    async with httpx.AsyncClient(transport=mock_transport) as client:
        response = await cache.request(client, _build_get)

    assert response.status_code == httpx.codes.OK
    assert len(mock_transport.requests) == 2
    assert "authorization" not in mock_transport.requests[0].headers
    assert cache.challenge == CHALLENGE

    retry = mock_transport.requests[1]
    fields = _fields(retry.headers["authorization"])
    assert fields["username"] == USER
    assert fields["realm"] == "validusers@robapi.abb"
    assert fields["nonce"] == "dcd98b7102dd2f0e8b11d0f600bfb0c093"
    assert fields["opaque"] == "799d5"
    assert fields["qop"] == "auth"
    assert fields["nc"] == "00000001"
    assert fields["uri"] == "/rw/iosystem/signals?json=1"
    assert fields["response"] == _expected_response(retry, fields)


@pytest.mark.parametrize(
    ("url", "target"),
    [
        (
            "http://robot.local/fileservice/$HOME/my%20file.txt?json=1",
            "/fileservice/$HOME/my%20file.txt?json=1",
        ),
        (
            "http://robot.local/rw/iosystem/signals/Local/caf%C3%A9/?json=1",
            "/rw/iosystem/signals/Local/caf%C3%A9/?json=1",
        ),
        (
            "http://robot.local/fileservice/$HOME/a%23b?json=1",
            "/fileservice/$HOME/a%23b?json=1",
        ),
    ],
)
@pytest.mark.asyncio
async def test_authorization_covers_encoded_target(
    mock_transport: MockTransport, url: str, target: str
) -> None:
    mock_transport.add_challenge()
    mock_transport.add_response(httpx.codes.OK)
    cache = DigestAuthCache(USER, PASSWORD)

    async with httpx.AsyncClient(transport=mock_transport) as client:
        await cache.request(client, lambda: httpx.Request("GET", url))

    retry = mock_transport.requests[1]
    assert retry.url.raw_path.decode("ascii") == target
    fields = _fields(retry.headers["authorization"])
    assert fields["uri"] == target
    assert fields["response"] == _expected_response(retry, fields)


@pytest.mark.asyncio
async def test_request_with_cached_challenge_sends_once(mock_transport: MockTransport) -> None:
    """Test that [cached challenge, 200] issues exactly one request."""
    mock_transport.add_challenge()
    mock_transport.add_response(httpx.codes.OK)
    mock_transport.add_response(httpx.codes.OK)
    cache = DigestAuthCache(USER, PASSWORD)

    async with httpx.AsyncClient(transport=mock_transport) as client:
        await cache.request(client, _build_get)
        response = await cache.request(client, _build_get)

    assert response.status_code == httpx.codes.OK
    assert len(mock_transport.requests) == 3
    cached = mock_transport.requests[2]
    fields = _fields(cached.headers["authorization"])
    assert fields["nc"] == "00000002"
    assert fields["response"] == _expected_response(cached, fields)


@pytest.mark.parametrize(
    "header",
    [
        "Digest garbage without realm",
        'Digest nonce="n"',
        'Digest realm="r"',
        'Digest realm="r", nonce="n", qop="auth-conf"',
        'Digest realm="r", nonce="n", algorithm=UNKNOWN',
    ],
)
@pytest.mark.asyncio
async def test_request_returns_401_with_unanswerable_challenge(
    mock_transport: MockTransport, header: str
) -> None:
    """Test that [cached challenge, 401 + unusable challenge] returns the 401 without retry."""
    mock_transport.add_challenge()
    mock_transport.add_response(httpx.codes.OK)
    mock_transport.add_challenge(header)
    cache = DigestAuthCache(USER, PASSWORD)

    async with httpx.AsyncClient(transport=mock_transport) as client:
        await cache.request(client, _build_get)
        response = await cache.request(client, _build_get)

    assert response.status_code == httpx.codes.UNAUTHORIZED
    assert len(mock_transport.requests) == 3
    assert cache.challenge is None


@pytest.mark.asyncio
async def test_unanswerable_challenge_restarts_handshake(mock_transport: MockTransport) -> None:
    mock_transport.add_challenge('Digest realm="r", nonce="n", qop="auth-conf"')
    mock_transport.add_challenge()
    mock_transport.add_response(httpx.codes.OK)
    cache = DigestAuthCache(USER, PASSWORD)

    async with httpx.AsyncClient(transport=mock_transport) as client:
        first = await cache.request(client, _build_get)
        second = await cache.request(client, _build_get)

    assert first.status_code == httpx.codes.UNAUTHORIZED
    assert second.status_code == httpx.codes.OK
    assert "authorization" not in mock_transport.requests[1].headers
    assert "authorization" in mock_transport.requests[2].headers


@pytest.mark.parametrize("headers", [[], [("WWW-Authenticate", 'Basic realm="robot"')]])
@pytest.mark.asyncio
async def test_request_returns_401_without_digest_challenge(
    mock_transport: MockTransport, headers: list[tuple[str, str]]
) -> None:
    mock_transport.add_response(httpx.codes.UNAUTHORIZED, headers=headers)
    cache = DigestAuthCache(USER, PASSWORD)

    async with httpx.AsyncClient(transport=mock_transport) as client:
        response = await cache.request(client, _build_get)

    assert response.status_code == httpx.codes.UNAUTHORIZED
    assert len(mock_transport.requests) == 1
    assert cache.challenge is None


@pytest.mark.asyncio
async def test_request_does_not_retry_second_401(mock_transport: MockTransport) -> None:
    mock_transport.add_challenge()
    mock_transport.add_challenge()
    cache = DigestAuthCache(USER, "wrong")

    async with httpx.AsyncClient(transport=mock_transport) as client:
        response = await cache.request(client, _build_get)

    assert response.status_code == httpx.codes.UNAUTHORIZED
    assert len(mock_transport.requests) == 2


@pytest.mark.asyncio
async def test_request_replaces_cached_challenge(mock_transport: MockTransport) -> None:
    fresh = 'Digest realm="validusers@robapi.abb", nonce="fresh", qop="auth"'
    mock_transport.add_challenge()
    mock_transport.add_response(httpx.codes.OK)
    mock_transport.add_challenge(fresh)
    mock_transport.add_response(httpx.codes.OK)
    cache = DigestAuthCache(USER, PASSWORD)

    async with httpx.AsyncClient(transport=mock_transport) as client:
        await cache.request(client, _build_get)
        await cache.request(client, _build_get)

    assert cache.challenge == fresh
    fields = _fields(mock_transport.requests[3].headers["authorization"])
    assert fields["nonce"] == "fresh"
    assert fields["nc"] == "00000001"


@pytest.mark.asyncio
async def test_request_rebuilds_request_for_retry(mock_transport: MockTransport) -> None:
    mock_transport.add_challenge()
    mock_transport.add_response(httpx.codes.NO_CONTENT)
    cache = DigestAuthCache(USER, PASSWORD)
    built = []

    def build() -> httpx.Request:
        request = httpx.Request("POST", URL, headers={"Cookie": "ABBCX=1"}, content=b"lvalue=1")
        built.append(request)
        return request

    async with httpx.AsyncClient(transport=mock_transport) as client:
        await cache.request(client, build)

    assert len(built) == 2
    retry = mock_transport.requests[1]
    assert retry is built[1]
    assert retry.content == b"lvalue=1"
    assert retry.headers.get_list("cookie") == ["ABBCX=1"]
    assert "authorization" in retry.headers


@pytest.mark.asyncio
async def test_request_propagates_transport_errors() -> None:
    class FailingTransport(httpx.AsyncBaseTransport):
        calls = 0

        async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
            FailingTransport.calls += 1
            raise httpx.ConnectError("connection refused", request=request)

    cache = DigestAuthCache(USER, PASSWORD)

    async with httpx.AsyncClient(transport=FailingTransport()) as client:
        with pytest.raises(httpx.ConnectError):
            await cache.request(client, _build_get)

    assert FailingTransport.calls == 1
