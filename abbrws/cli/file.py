"""Command line tool for the controller's file service."""

import asyncio
from pathlib import Path
from typing import Annotated

import typer

from abbrws.cli import common
from abbrws.client import AbbRwsClient
from abbrws.config import AbbRwsConfig
from abbrws.exceptions import AbbRwsError
from abbrws.log import setup_logging
from abbrws.models.files import describe_entry

app = typer.Typer(add_completion=False, help="Manage files on an ABB controller.")


@app.command()
def main(
    host: common.HostOption,
    user: common.UserOption = common.DEFAULT_USER,
    password: common.PasswordOption = common.DEFAULT_PASSWORD,
    list_: Annotated[
        str | None, typer.Option("--list", metavar="DIR", help="List the contents of a directory.")
    ] = None,
    create_dir: Annotated[
        str | None, typer.Option("--create-dir", metavar="DIR", help="Create a directory.")
    ] = None,
    download: Annotated[
        tuple[str, str] | None,
        typer.Option("--download", metavar="SOURCE DEST", help="Download a file."),
    ] = None,
    upload: Annotated[
        tuple[str, str] | None,
        typer.Option("--upload", metavar="SOURCE DEST", help="Upload a file."),
    ] = None,
    content_type: Annotated[
        str | None,
        typer.Option("--content-type", metavar="MIME", help="The content-type of the uploaded file."),
    ] = None,
    verbose: common.VerboseOption = False,
) -> None:
    """Manage files on an ABB controller."""
    download = common.pair(download)
    upload = common.pair(upload)

    selected = [option for option in (list_, create_dir, download, upload) if option is not None]
    if len(selected) != 1:
        msg = "exactly one of --list, --create-dir, --download and --upload is required"
        raise typer.BadParameter(msg)
    if (upload is None) != (content_type is None):
        msg = "--content-type must be given together with --upload"
        raise typer.BadParameter(msg)

    setup_logging(verbose=verbose)
    config = common.make_config(host, user, password)
    asyncio.run(
        _run(
            config,
            list_=list_,
            create_dir=create_dir,
            download=download,
            upload=upload,
            content_type=content_type,
        )
    )


async def _run(
    config: AbbRwsConfig,
    *,
    list_: str | None,
    create_dir: str | None,
    download: tuple[str, str] | None,
    upload: tuple[str, str] | None,
    content_type: str | None,
) -> None:
    # Read local input before touching the network.
    data = None
    if upload is not None:
        data = _read_file(Path(upload[0]))

    try:
        client = common.connect(config)
    except AbbRwsError as e:
        common.fail(f"failed to connect to {config.host!r}", e)

    async with client:
        if list_ is not None:
            await _list(client, list_)
        elif create_dir is not None:
            await _create_dir(client, create_dir)
        elif download is not None:
            await _download(client, download[0], Path(download[1]))
        elif upload is not None and data is not None and content_type is not None:
            await _upload(client, upload[1], content_type, data)


async def _list(client: AbbRwsClient, directory: str) -> None:
    try:
        entries = await client.list_files(directory)
    except AbbRwsError as e:
        common.fail("failed to retrieve directory contents", e)
    for entry in entries:
        typer.echo(describe_entry(entry))


async def _create_dir(client: AbbRwsClient, directory: str) -> None:
    try:
        await client.create_directory(directory)
    except AbbRwsError as e:
        common.fail("failed to create directory", e)


async def _download(client: AbbRwsClient, source: str, destination: Path) -> None:
    try:
        content_type, data = await client.download_file(source)
    except AbbRwsError as e:
        common.fail("failed to download file", e)
    typer.echo(f"Content-Type: {content_type}", err=True)
    try:
        destination.write_bytes(data)
    except OSError as e:
        common.fail(f"failed to write to file {str(destination)!r}", e)


async def _upload(client: AbbRwsClient, destination: str, content_type: str, data: bytes) -> None:
    try:
        await client.upload_file(destination, content_type, data)
    except AbbRwsError as e:
        common.fail("failed to upload file", e)


def _read_file(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except OSError as e:
        common.fail(f"failed to read from file {str(path)!r}", e)
