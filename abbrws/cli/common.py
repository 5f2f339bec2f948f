"""Options and helpers shared by the command line tools."""

from typing import Annotated, NoReturn

import typer

from abbrws.client import AbbRwsClient
from abbrws.config import AbbRwsConfig

HostOption = Annotated[str, typer.Option("--host", "-h", help="The host to connect to.")]
UserOption = Annotated[
    str, typer.Option("--user", "-u", help="The user to authenticate as.")
]
PasswordOption = Annotated[
    str, typer.Option("--password", "-p", help="The password for the user.")
]
VerboseOption = Annotated[
    bool, typer.Option("--verbose", "-v", help="Log requests and authentication to stderr.")
]

DEFAULT_USER = "Default User"
DEFAULT_PASSWORD = "robotics"


def connect(config: AbbRwsConfig) -> AbbRwsClient:
    """Create the client used by a command."""
    return AbbRwsClient(config)


def make_config(host: str, user: str, password: str) -> AbbRwsConfig:
    """Build the client configuration, exiting on invalid values."""
    try:
        return AbbRwsConfig(host=host, user=user, password=password)
    except ValueError as e:
        fail(f"failed to connect to {host!r}", e)


def fail(context: str, error: Exception | str) -> NoReturn:
    """
    Print an error to stderr and exit with code 1.

    Raises:
        typer.Exit: Always, with code 1.
    """
    typer.secho("Error:", fg=typer.colors.RED, bold=True, err=True, nl=False)
    typer.echo(f" {context}: {error}", err=True)
    raise typer.Exit(code=1)


def pair(value: tuple[str, str] | None) -> tuple[str, str] | None:
    """Normalize an optional two-value option; unset options may arrive as (None, None)."""
    if value is None or any(item is None for item in value):
        return None
    return value
