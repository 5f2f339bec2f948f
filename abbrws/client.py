"""
ABB RWS client facade.

This is the main entry point for users of the library. It manages a session
with an ABB RobotWare controller and exposes the signal and file service
operations.
"""

from typing import Self

import httpx
import structlog

from abbrws.api.content_type import ContentType
from abbrws.api.endpoints import files, signals
from abbrws.api.http_client import AsyncHttpClient
from abbrws.config import AbbRwsConfig
from abbrws.models.files import DirEntry
from abbrws.models.signal import Signal, SignalValue

logger = structlog.get_logger(__name__)


class AbbRwsClient:
    """
    Async client for the Robot Web Services API of an ABB controller.

    Digest authentication and session cookies are handled transparently.
    The client is not reentrant: await each operation before starting the
    next one on the same instance.

    Example:
        ```python
        config = AbbRwsConfig(host="192.168.125.1")
        async with AbbRwsClient(config) as client:
            for signal in await client.get_signals():
                print(signal.title, signal.value)

            await client.set_signal("Local/PANEL/DO1", Binary(True))
        ```

    Args:
        config: Client configuration.
        transport: Optional httpx transport for testing (mock transport).
        http_client: Optional existing httpx client; it is used but not closed.
    """

    def __init__(
        self,
        config: AbbRwsConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Initialize the client.

        Raises:
            InvalidUriError: If the configured host does not form a valid URL.
        """
        self._config = config
        self._http = AsyncHttpClient(config, transport=transport, client=http_client)

    async def __aenter__(self) -> Self:
        """Enter async context."""
        await self._http.__aenter__()
        logger.debug("Client initialized", root_url=self._http.root_url)
        return self

    async def __aexit__(
        self, exc_type: type | None, exc_val: BaseException | None, exc_tb: object
    ) -> None:
        """Exit async context."""
        await self.close()

    async def close(self) -> None:
        """Close the client and release resources."""
        await self._http.close()
        logger.debug("Client closed")

    @property
    def config(self) -> AbbRwsConfig:
        return self._config

    async def login(self) -> None:
        """
        Establish a session with the controller.

        Calling this is optional since a session is established when needed,
        but it avoids the digest handshake on the first real request and
        checks that the controller is reachable.
        """
        await signals.login(self._http)

    async def get_signals(self) -> list[Signal]:
        """
        Get all signals on the controller with their current values.

        Raises:
            RemoteFailureError: If the controller reports an error.
            DecodeError: If the response is malformed.
        """
        return await signals.get_signals(self._http)

    async def get_signal(self, name: str) -> Signal:
        """
        Get a single signal.

        Args:
            name: Full signal name, e.g. "Local/PANEL/SS2".

        Raises:
            RemoteFailureError: If the signal does not exist.
        """
        return await signals.get_signal(self._http, name)

    async def set_signal(self, name: str, value: SignalValue) -> None:
        """
        Set the value of a signal.

        Args:
            name: Full signal name.
            value: New value; its variant must suit the signal's kind.
        """
        await signals.set_signal(self._http, name, value)

    async def list_files(self, directory: str) -> list[DirEntry]:
        """
        List the contents of a directory.

        Args:
            directory: Directory path, e.g. "$HOME" or "$HOME/programs".
        """
        return await files.list_files(self._http, directory)

    async def create_directory(self, path: str) -> None:
        """
        Create a directory.

        Raises:
            InvalidPathError: If the path has no final component.
        """
        await files.create_directory(self._http, path)

    async def download_file(self, path: str) -> tuple[ContentType, bytes]:
        """
        Download a file from the controller.

        Returns:
            Tuple of (content type, file content).

        Raises:
            NotAFileError: If the path is a directory.
        """
        return await files.download_file(self._http, path)

    async def upload_file(self, path: str, content_type: ContentType | str, data: bytes) -> None:
        """
        Upload a file to the controller.

        Args:
            path: Destination path on the controller.
            content_type: Media type of the file, e.g. "text/plain".
            data: File content.
        """
        await files.upload_file(self._http, path, content_type, data)
