"""File service endpoints (listing, directories, upload and download)."""

import structlog

from abbrws.api.content_type import (
    APPLICATION_JSON,
    FORM_URLENCODED,
    ContentType,
    check_content_type,
    parse_content_type,
)
from abbrws.api.endpoints.common import raise_for_status
from abbrws.api.http_client import AsyncHttpClient
from abbrws.api.url_encode import url_encode_query_value
from abbrws.exceptions import InvalidPathError, MalformedContentTypeError, NotAFileError
from abbrws.models.files import DirEntry
from abbrws.parse.file_service import is_directory_listing, parse_directory_listing

logger = structlog.get_logger(__name__)

FILESERVICE_PATH = "/fileservice"


def _file_path(path: str) -> str:
    return f"{FILESERVICE_PATH}/{path.strip('/')}"


def _directory_path(path: str) -> str:
    return _file_path(path).rstrip("/") + "/"


async def list_files(http: AsyncHttpClient, directory: str) -> list[DirEntry]:
    """List the entries of a directory (e.g. "$HOME")."""
    response = await http.request("GET", f"{_directory_path(directory)}?json=1")
    check_content_type(response.content_type, APPLICATION_JSON)
    return raise_for_status(response, parse_directory_listing(response.content))


async def create_directory(http: AsyncHttpClient, path: str) -> None:
    """
    Create a directory.

    The last path component is the new directory; everything before it
    must already exist.

    Raises:
        InvalidPathError: If the path has no final component.
    """
    parent, _, name = path.rstrip("/").rpartition("/")
    if not name:
        msg = f"Path has no directory name: {path}"
        raise InvalidPathError(msg, path=path)

    await http.request(
        "POST",
        f"{_directory_path(parent)}?json=1",
        content=f"fs-newname={url_encode_query_value(name)}&fs-action=create".encode(),
        content_type=FORM_URLENCODED,
    )


async def download_file(http: AsyncHttpClient, path: str) -> tuple[ContentType, bytes]:
    """
    Download a file.

    Returns:
        Tuple of (content type, file content).

    Raises:
        NotAFileError: If the path refers to a directory.
        MalformedContentTypeError: If the response has no Content-Type.
    """
    response = await http.request("GET", f"{_file_path(path)}?json=1")
    if response.content_type is None:
        raise MalformedContentTypeError(b"")

    # Directories answer with a JSON listing, which is never a file's content.
    if response.content_type.essence == APPLICATION_JSON and is_directory_listing(
        response.content
    ):
        msg = f"Path is a directory: {path}"
        raise NotAFileError(msg, path=path)

    logger.debug("File downloaded", path=path, size=len(response.content))
    return response.content_type, response.content


async def upload_file(
    http: AsyncHttpClient, path: str, content_type: ContentType | str, data: bytes
) -> None:
    """
    Upload a file, replacing any existing file at the path.

    Args:
        http: Configured async HTTP client.
        path: Destination path on the controller.
        content_type: Media type of the data.
        data: File content.
    """
    if isinstance(content_type, str):
        content_type = parse_content_type(content_type.encode())
    await http.request(
        "PUT", f"{_file_path(path)}?json=1", content=data, content_type=str(content_type)
    )
    logger.debug("File uploaded", path=path, size=len(data))
