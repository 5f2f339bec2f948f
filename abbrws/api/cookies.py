"""
In-memory cookie jar for a single controller session.
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from http.cookies import CookieError, SimpleCookie

import structlog

from abbrws.exceptions import InvalidCookieError, InvalidHeaderError

logger = structlog.get_logger(__name__)


@dataclass(frozen=True, kw_only=True)
class StoredCookie:
    """A cookie as received in a Set-Cookie header."""

    name: str
    value: str
    attributes: dict[str, str | bool] = field(default_factory=dict, compare=False)


class CookieJar:
    """
    Cookies received from the controller, keyed by name.

    The jar only serves a single host, so domain and path attributes are
    kept for reference but not used to select cookies.
    """

    def __init__(self) -> None:
        self._cookies: dict[str, StoredCookie] = {}

    def __len__(self) -> int:
        return len(self._cookies)

    def __iter__(self) -> Iterator[StoredCookie]:
        return iter(self._cookies.values())

    def __contains__(self, name: object) -> bool:
        return name in self._cookies

    def get(self, name: str) -> str | None:
        """Get the current value of a cookie."""
        cookie = self._cookies.get(name)
        return cookie.value if cookie is not None else None

    def add(self, cookie: StoredCookie) -> None:
        """Store a cookie, replacing any cookie with the same name."""
        self._cookies[cookie.name] = cookie

    def clear(self) -> None:
        self._cookies.clear()

    def harvest(self, raw_headers: Iterable[bytes]) -> None:
        """
        Store the cookies from raw Set-Cookie header values.

        Args:
            raw_headers: Raw values of every Set-Cookie header in a response.

        Raises:
            InvalidHeaderError: If a header value is not valid UTF-8.
            InvalidCookieError: If a header value is not a valid cookie.
        """
        for raw in raw_headers:
            try:
                header = raw.decode("utf-8")
            except UnicodeDecodeError as e:
                msg = "Set-Cookie header is not valid UTF-8"
                raise InvalidHeaderError(msg, header="set-cookie") from e
            cookie = parse_set_cookie(header)
            self.add(cookie)
            logger.debug("Cookie stored", name=cookie.name)

    def header_value(self) -> str | None:
        """
        Serialize the jar into a Cookie header value.

        Returns:
            "name=value; other=value", or None if the jar is empty.
        """
        if not self._cookies:
            return None
        return "; ".join(f"{c.name}={c.value}" for c in self._cookies.values())


def parse_set_cookie(header: str) -> StoredCookie:
    """
    Parse a single Set-Cookie header value.

    Raises:
        InvalidCookieError: If the value is not a valid cookie.
    """
    name, sep, _ = header.partition("=")
    if not sep or not name.strip():
        msg = "malformed Set-Cookie header"
        raise InvalidCookieError(msg, cookie=header)

    parsed: SimpleCookie = SimpleCookie()
    try:
        parsed.load(header)
    except CookieError as e:
        msg = f"malformed Set-Cookie header: {e}"
        raise InvalidCookieError(msg, cookie=header) from e

    morsel = parsed.get(name.strip())
    if morsel is None:
        msg = "malformed Set-Cookie header"
        raise InvalidCookieError(msg, cookie=header)

    attributes = {key: value for key, value in morsel.items() if value}
    return StoredCookie(name=morsel.key, value=morsel.coded_value, attributes=attributes)
