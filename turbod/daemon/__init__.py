"""Daemon addressing and client bootstrap for turbod.

One daemon runs per repository. Its socket, pid file and log file are found
from the repository root alone:

- get_repo_hash: 16 hex character discriminator of the repo root
- PathResolver: socket/pid under the temp dir, log under the data dir
- resolve_entry_point: route the go-turbo engine back to the turbo wrapper
- get_client: build a ClientDescriptor and hand it to a connector
"""

from turbod.daemon.binary import current_executable, resolve_entry_point
from turbod.daemon.client import ClientBootstrapper, get_client
from turbod.daemon.connector import (
    BaseConnector,
    ClientDescriptor,
    ClientOptions,
    DaemonClient,
    UnixSocketConnector,
)
from turbod.daemon.errors import (
    DaemonConnectionError,
    DaemonError,
    DaemonNotRunningError,
    ExecutableResolutionError,
    PathResolutionError,
    SocketPathTooLongError,
)
from turbod.daemon.hashing import get_repo_hash
from turbod.daemon.paths import DaemonPaths, PathResolver, check_socket_path

__all__ = [
    "BaseConnector",
    "ClientBootstrapper",
    "ClientDescriptor",
    "ClientOptions",
    "DaemonClient",
    "DaemonConnectionError",
    "DaemonError",
    "DaemonNotRunningError",
    "DaemonPaths",
    "ExecutableResolutionError",
    "PathResolutionError",
    "PathResolver",
    "SocketPathTooLongError",
    "UnixSocketConnector",
    "check_socket_path",
    "current_executable",
    "get_client",
    "get_repo_hash",
    "resolve_entry_point",
]
