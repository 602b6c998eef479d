"""Connector contract and the default unix socket connector.

Any connector must accept a ClientDescriptor and hand back a client. Spawning,
retrying and version handshakes are the connector's business; the
bootstrapper only builds the descriptor.

Usage:
    connector = UnixSocketConnector()
    client = await connector.connect(descriptor)
    async with client:
        ...
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from turbod.daemon.errors import DaemonConnectionError, DaemonNotRunningError


@dataclass(frozen=True)
class ClientOptions:
    """Caller options passed through to the connector untouched."""

    dont_start: bool = False
    dont_kill: bool = False
    server_timeout: Optional[float] = None


@dataclass(frozen=True)
class ClientDescriptor:
    """Everything a connector needs to reach one repository's daemon."""

    logger: logging.Logger
    bin: Path
    opts: ClientOptions
    sock_path: Path
    pid_path: Path
    log_path: Path
    turbo_version: str


class BaseConnector(ABC):
    """Abstract connector: turns a descriptor into a live client."""

    @abstractmethod
    async def connect(self, descriptor: ClientDescriptor) -> Any:
        """
        Connect to the daemon described by `descriptor`.

        Errors are the connector's own and reach the caller unmodified.
        """
        pass


@dataclass
class DaemonClient:
    """Open connection to a daemon's unix socket."""

    socket_path: Path
    reader: asyncio.StreamReader
    writer: asyncio.StreamWriter = field(repr=False)

    @property
    def closed(self) -> bool:
        return self.writer.is_closing()

    async def close(self) -> None:
        if not self.writer.is_closing():
            self.writer.close()
        await self.writer.wait_closed()

    async def __aenter__(self) -> "DaemonClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()


class UnixSocketConnector(BaseConnector):
    """
    Connects to an already running daemon.

    Does not spawn, retry or negotiate versions. `opts.server_timeout`
    bounds the connection attempt when set.
    """

    async def connect(self, descriptor: ClientDescriptor) -> DaemonClient:
        logger = descriptor.logger
        sock_path = descriptor.sock_path

        if not sock_path.exists():
            logger.debug(f"No daemon socket at {sock_path}")
            raise DaemonNotRunningError(f"No daemon socket at {sock_path}")

        attempt = asyncio.open_unix_connection(str(sock_path))
        timeout = descriptor.opts.server_timeout
        try:
            if timeout is not None:
                reader, writer = await asyncio.wait_for(attempt, timeout)
            else:
                reader, writer = await attempt
        except (ConnectionRefusedError, FileNotFoundError) as e:
            raise DaemonNotRunningError(f"Daemon at {sock_path} is not accepting connections") from e
        except asyncio.TimeoutError as e:
            raise DaemonConnectionError(
                f"Timed out after {timeout}s connecting to daemon at {sock_path}"
            ) from e
        except OSError as e:
            raise DaemonConnectionError(f"Failed to connect to daemon at {sock_path}: {e}") from e

        logger.debug(f"Connected to daemon at {sock_path}")
        return DaemonClient(socket_path=sock_path, reader=reader, writer=writer)
