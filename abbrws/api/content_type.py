"""
Content-Type header parsing.
"""

import re
from dataclasses import dataclass, field

from abbrws.exceptions import MalformedContentTypeError, UnexpectedContentTypeError

APPLICATION_JSON = "application/json"
TEXT_PLAIN = "text/plain"
FORM_URLENCODED = "application/x-www-form-urlencoded"

_TOKEN = r"[!#$%&'*+.^_`|~0-9A-Za-z-]+"
_ESSENCE = re.compile(rf"\s*({_TOKEN})/({_TOKEN})\s*")
_PARAM = re.compile(rf"\s*({_TOKEN})=(?:({_TOKEN})|\"((?:[^\"\\]|\\.)*)\")\s*")


@dataclass(frozen=True)
class ContentType:
    """A parsed media type such as ``application/json; charset=utf-8``."""

    type: str
    subtype: str
    params: dict[str, str] = field(default_factory=dict, compare=False)

    @property
    def essence(self) -> str:
        """The media type without parameters, e.g. "application/json"."""
        return f"{self.type}/{self.subtype}"

    def __str__(self) -> str:
        params = "".join(f"; {k}={v}" for k, v in self.params.items())
        return f"{self.essence}{params}"


def parse_content_type(raw: bytes | None) -> ContentType:
    """
    Parse the raw value of a Content-Type header.

    Raises:
        MalformedContentTypeError: If the header is missing, not UTF-8 or
            not a valid media type.
    """
    if raw is None:
        raise MalformedContentTypeError(b"")
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise MalformedContentTypeError(raw) from e

    essence, *params = text.split(";")
    if (match := _ESSENCE.fullmatch(essence)) is None:
        raise MalformedContentTypeError(raw)

    parsed: dict[str, str] = {}
    for param in params:
        if not param.strip():
            continue
        if (param_match := _PARAM.fullmatch(param)) is None:
            raise MalformedContentTypeError(raw)
        name, token, quoted = param_match.groups()
        parsed[name.lower()] = token if token is not None else re.sub(r"\\(.)", r"\1", quoted)

    return ContentType(match.group(1).lower(), match.group(2).lower(), parsed)


def check_content_type(actual: ContentType | None, expected: str) -> ContentType:
    """
    Check that a response has the expected media type.

    Raises:
        MalformedContentTypeError: If the response had no Content-Type.
        UnexpectedContentTypeError: If the media type differs.
    """
    if actual is None:
        raise MalformedContentTypeError(b"")
    if actual.essence != expected:
        raise UnexpectedContentTypeError(str(actual), expected)
    return actual
