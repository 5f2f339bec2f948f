"""
ABB RWS client configuration.
"""

from dataclasses import dataclass

import httpx

from abbrws.exceptions import InvalidUriError

_SCHEMES = frozenset({"http", "https"})


@dataclass(frozen=True, kw_only=True)
class AbbRwsConfig:
    """
    Attributes:
        host: Controller host, optionally with a port (e.g. "192.168.125.1:80").
        user: User to authenticate as.
        password: Password for the user.
        scheme: URL scheme used to reach the controller.
        timeout: Request timeout in seconds, applied by the HTTP transport.
        user_agent: User-Agent header value.
    """

    host: str
    user: str = "Default User"
    password: str = "robotics"
    scheme: str = "http"
    timeout: float = 30.0
    user_agent: str = "abbrws-python/0.1"

    def __post_init__(self) -> None:
        if not self.host:
            msg = "host must not be empty"
            raise ValueError(msg)
        if self.scheme not in _SCHEMES:
            msg = f"scheme must be one of {sorted(_SCHEMES)}"
            raise ValueError(msg)
        if self.timeout <= 0:
            msg = "timeout must be positive"
            raise ValueError(msg)

    def __repr__(self) -> str:
        return (
            f"AbbRwsConfig(host={self.host!r}, user={self.user!r}, password='***', "
            f"scheme={self.scheme!r}, timeout={self.timeout!r})"
        )

    @property
    def root_url(self) -> str:
        """
        Root URL of the controller, without a trailing slash.

        Raises:
            InvalidUriError: If the host does not form a valid URL.
        """
        uri = f"{self.scheme}://{self.host}"
        try:
            url = httpx.URL(uri)
        except httpx.InvalidURL as e:
            raise InvalidUriError(f"invalid controller host: {e}", uri=uri) from e
        if not url.host or url.path not in ("", "/") or url.query or url.fragment:
            msg = "invalid controller host"
            raise InvalidUriError(msg, uri=uri)
        return uri
