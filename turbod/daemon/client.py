"""Bootstrap a connection to a repository's daemon.

Resolves the socket, pid and log paths plus the entry point binary, then
hands a ClientDescriptor to the connector. Nothing is retried here and no
timeout is imposed: cancelling the awaiting task cancels the connect.

Usage:
    client = await get_client(repo_root, logger, "1.10.0", ClientOptions())
"""

import logging
from typing import Any, Optional

from turbod.daemon.binary import ExecutableProvider, current_executable, resolve_entry_point
from turbod.daemon.connector import (
    BaseConnector,
    ClientDescriptor,
    ClientOptions,
    UnixSocketConnector,
)
from turbod.daemon.errors import ExecutableResolutionError
from turbod.daemon.hashing import PathArg
from turbod.daemon.paths import PathResolver, check_socket_path

CLIENT_LOGGER_NAME = "TurbodClient"


class ClientBootstrapper:
    """Builds a connection request and delegates it to a connector."""

    def __init__(
        self,
        connector: Optional[BaseConnector] = None,
        path_resolver: Optional[PathResolver] = None,
        executable_provider: ExecutableProvider = current_executable,
    ):
        self.connector = connector or UnixSocketConnector()
        self.path_resolver = path_resolver or PathResolver()
        self.executable_provider = executable_provider

    def build_descriptor(
        self,
        repo_root: PathArg,
        logger: logging.Logger,
        turbo_version: str,
        opts: Optional[ClientOptions] = None,
    ) -> ClientDescriptor:
        """
        Resolve every path the connector needs.

        Raises:
            PathResolutionError: If temp/data dirs are unavailable or the
                socket path is too long
            ExecutableResolutionError: If the running executable is unknown
        """
        paths = self.path_resolver.resolve(repo_root)
        check_socket_path(paths.socket_path)

        try:
            executable = self.executable_provider()
        except (OSError, RuntimeError, ValueError) as e:
            raise ExecutableResolutionError(f"Unable to determine the current executable: {e}") from e
        bin_path = resolve_entry_point(executable)

        client_logger = logger.getChild(CLIENT_LOGGER_NAME)
        client_logger.debug(
            f"Daemon paths for {repo_root}: socket={paths.socket_path} "
            f"pid={paths.pid_path} log={paths.log_path} bin={bin_path}"
        )

        return ClientDescriptor(
            logger=client_logger,
            bin=bin_path,
            opts=opts or ClientOptions(),
            sock_path=paths.socket_path,
            pid_path=paths.pid_path,
            log_path=paths.log_path,
            turbo_version=turbo_version,
        )

    async def connect(
        self,
        repo_root: PathArg,
        logger: logging.Logger,
        turbo_version: str,
        opts: Optional[ClientOptions] = None,
    ) -> Any:
        """Resolve, then return whatever the connector returns (or raises)."""
        descriptor = self.build_descriptor(repo_root, logger, turbo_version, opts)
        return await self.connector.connect(descriptor)


async def get_client(
    repo_root: PathArg,
    logger: logging.Logger,
    turbo_version: str,
    opts: Optional[ClientOptions] = None,
    *,
    connector: Optional[BaseConnector] = None,
    path_resolver: Optional[PathResolver] = None,
    executable_provider: ExecutableProvider = current_executable,
) -> Any:
    """
    Return a client connected to the daemon for `repo_root`.

    Args:
        repo_root: Absolute repository root
        logger: Parent logger; the connector gets its "TurbodClient" child
        turbo_version: Version string forwarded to the connector
        opts: Connector options
        connector: Defaults to UnixSocketConnector
        path_resolver: Defaults to the platform temp and data dirs
        executable_provider: Defaults to current_executable

    Raises:
        ValueError: If repo_root is not absolute
        PathResolutionError: See ClientBootstrapper.build_descriptor
        ExecutableResolutionError: See ClientBootstrapper.build_descriptor
        Whatever the connector raises, unchanged
    """
    bootstrapper = ClientBootstrapper(
        connector=connector,
        path_resolver=path_resolver,
        executable_provider=executable_provider,
    )
    return await bootstrapper.connect(repo_root, logger, turbo_version, opts)
