"""Percent-encoding for values embedded in query strings and form data."""

_RESERVED = frozenset(b"#%&=")


def url_encode_query_value(data: str | bytes) -> str:
    """
    Percent-encode a value for use in a query string or form body.

    Only the bytes that would change the meaning of the query are escaped:
    ``#``, ``%``, ``&``, ``=`` and every non-ASCII byte.

    Args:
        data: Value to encode. Strings are encoded as UTF-8 first.

    Returns:
        The encoded value.
    """
    raw = data.encode() if isinstance(data, str) else data
    return "".join(
        f"%{byte:02X}" if byte in _RESERVED or byte > 127 else chr(byte) for byte in raw
    )
