"""Command line tool to show and set I/O signals."""

import asyncio
from typing import Annotated

import typer

from abbrws.cli import common
from abbrws.client import AbbRwsClient
from abbrws.config import AbbRwsConfig
from abbrws.exceptions import AbbRwsError
from abbrws.log import setup_logging
from abbrws.models.signal import Signal
from abbrws.parse.signal import value_from_string

app = typer.Typer(add_completion=False, help="Show or set I/O signals on an ABB controller.")


@app.command()
def main(
    host: common.HostOption,
    user: common.UserOption = common.DEFAULT_USER,
    password: common.PasswordOption = common.DEFAULT_PASSWORD,
    list_: Annotated[bool, typer.Option("--list", help="List all available signals.")] = False,
    signal: Annotated[
        str | None, typer.Option("--signal", metavar="NAME", help="Show or set one signal.")
    ] = None,
    set_: Annotated[
        str | None, typer.Option("--set", metavar="VALUE", help="Set the value of the signal.")
    ] = None,
    verbose: common.VerboseOption = False,
) -> None:
    """Show or set I/O signals on an ABB controller."""
    if list_ == (signal is not None):
        msg = "exactly one of --list and --signal is required"
        raise typer.BadParameter(msg)
    if set_ is not None and signal is None:
        msg = "--set requires --signal"
        raise typer.BadParameter(msg)

    setup_logging(verbose=verbose)
    config = common.make_config(host, user, password)
    asyncio.run(_run(config, list_=list_, signal=signal, value=set_))


async def _run(config: AbbRwsConfig, *, list_: bool, signal: str | None, value: str | None) -> None:
    try:
        client = common.connect(config)
    except AbbRwsError as e:
        common.fail(f"failed to connect to {config.host!r}", e)

    async with client:
        if list_:
            await _list_signals(client)
        elif signal is not None:
            if value is not None:
                await _set_signal(client, signal, value)
            await _show_signal(client, signal)


async def _list_signals(client: AbbRwsClient) -> None:
    try:
        signals = await client.get_signals()
    except AbbRwsError as e:
        common.fail("failed to retrieve signals", e)

    width = max((len(s.title) for s in signals), default=0)
    for signal in signals:
        typer.echo(_format_signal(signal, width))


async def _show_signal(client: AbbRwsClient, name: str) -> None:
    try:
        signal = await client.get_signal(name)
    except AbbRwsError as e:
        common.fail(f"failed to retrieve signal {name!r}", e)
    typer.echo(_format_signal(signal))


async def _set_signal(client: AbbRwsClient, name: str, text: str) -> None:
    # The value grammar depends on the signal kind, so look the signal up first.
    try:
        current = await client.get_signal(name)
        value = value_from_string(current.kind, text)
        await client.set_signal(name, value)
    except AbbRwsError as e:
        common.fail(f"failed to set signal {name!r} to {text}", e)


def _format_signal(signal: Signal, width: int = 0) -> str:
    title = typer.style(signal.title.ljust(width), fg=typer.colors.BLUE)
    value = typer.style(str(signal.value).ljust(10 if width else 0), fg=typer.colors.YELLOW)
    kind = typer.style(signal.kind.value, fg=typer.colors.MAGENTA)
    return f"{title} = {value} ({kind})"
