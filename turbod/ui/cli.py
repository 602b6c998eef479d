"""Command line for inspecting and reaching a repository's daemon."""

import asyncio
import os
from pathlib import Path
from typing import Optional

import typer

from turbod import __version__
from turbod.core.configs import (
    DaemonSettings,
    build_executable_provider,
    build_path_resolver,
    get_settings,
    is_daemon_enabled,
)
from turbod.core.logs import configure_logging
from turbod.daemon import (
    ClientBootstrapper,
    ClientOptions,
    DaemonError,
    get_client,
    get_repo_hash,
)

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    help="turbod - locate and connect to a repository's build daemon.",
)

REPO_ARGUMENT = typer.Argument(None, help="Repository root (default: current directory)")


def _repo_root(repo: Optional[Path]) -> Path:
    return Path(os.path.abspath(repo or Path.cwd()))


def _load_settings() -> DaemonSettings:
    try:
        return get_settings()
    except ValueError as e:
        typer.echo(f"Error loading configuration: {e}", err=True)
        raise typer.Exit(1)


@app.command("hash")
def hash_command(repo: Optional[Path] = REPO_ARGUMENT) -> None:
    """Print the 16 character discriminator for a repository."""
    typer.echo(get_repo_hash(_repo_root(repo)))


@app.command()
def paths(repo: Optional[Path] = REPO_ARGUMENT) -> None:
    """
    Print socket, pid, log and entry point paths for a repository.

    Example: turbod paths ~/src/my-monorepo
    """
    settings = _load_settings()
    logger = configure_logging(settings.log_level)
    bootstrapper = ClientBootstrapper(
        path_resolver=build_path_resolver(settings),
        executable_provider=build_executable_provider(settings),
    )

    try:
        descriptor = bootstrapper.build_descriptor(_repo_root(repo), logger, __version__)
    except DaemonError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"socket: {descriptor.sock_path}")
    typer.echo(f"pid:    {descriptor.pid_path}")
    typer.echo(f"log:    {descriptor.log_path}")
    typer.echo(f"bin:    {descriptor.bin}")


@app.command()
def connect(
    repo: Optional[Path] = REPO_ARGUMENT,
    turbo_version: str = typer.Option(__version__, "--version", help="Version sent to the daemon"),
    timeout: Optional[float] = typer.Option(None, "--timeout", min=0, help="Connect timeout in seconds"),
) -> None:
    """
    Connect to a running daemon and report the socket used.

    Example: turbod connect --timeout 2
    """
    settings = _load_settings()
    logger = configure_logging(settings.log_level)

    if not is_daemon_enabled(settings):
        typer.echo("Daemon disabled (TURBOD_NO_DAEMON set or unsupported platform)", err=True)
        raise typer.Exit(1)

    opts = ClientOptions(
        server_timeout=timeout if timeout is not None else settings.connect_timeout
    )

    async def _connect():
        client = await get_client(
            _repo_root(repo),
            logger,
            turbo_version,
            opts,
            path_resolver=build_path_resolver(settings),
            executable_provider=build_executable_provider(settings),
        )
        await client.close()
        return client

    try:
        client = asyncio.run(_connect())
    except DaemonError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"Connected to daemon at {client.socket_path}")


def run() -> None:
    """Entry point for console script mapping."""
    app()


if __name__ == "__main__":
    run()
