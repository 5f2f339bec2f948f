"""I/O system endpoints (login, signals)."""

from abbrws.api.content_type import APPLICATION_JSON, FORM_URLENCODED, check_content_type
from abbrws.api.endpoints.common import raise_for_status
from abbrws.api.http_client import AsyncHttpClient
from abbrws.models.signal import Signal, SignalValue
from abbrws.parse.signal import parse_signal, parse_signal_list

SIGNALS_PATH = "/rw/iosystem/signals"


async def login(http: AsyncHttpClient) -> None:
    """Establish a session by requesting the API root."""
    await http.request("GET", "/?json=1")


async def get_signals(http: AsyncHttpClient) -> list[Signal]:
    """Get all signals with their current values."""
    response = await http.request("GET", f"{SIGNALS_PATH}?json=1")
    check_content_type(response.content_type, APPLICATION_JSON)
    return raise_for_status(response, parse_signal_list(response.content))


async def get_signal(http: AsyncHttpClient, name: str) -> Signal:
    """Get a single signal by its full name (e.g. "Local/PANEL/SS2")."""
    response = await http.request("GET", f"{SIGNALS_PATH}/{name}/?json=1")
    check_content_type(response.content_type, APPLICATION_JSON)
    return raise_for_status(response, parse_signal(response.content))


async def set_signal(http: AsyncHttpClient, name: str, value: SignalValue) -> None:
    """Set the value of a signal."""
    await http.request(
        "POST",
        f"{SIGNALS_PATH}/{name}/?json=1&action=set",
        content=f"lvalue={value}".encode(),
        content_type=FORM_URLENCODED,
    )
