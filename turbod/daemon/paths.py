"""Socket, pid and log file locations for a repository's daemon.

Layout:
    <temp-root>/turbod/<hash>/turbod.sock
    <temp-root>/turbod/<hash>/turbod.pid
    <data-dir>/logs/<hash>-<repo base name>.log

Nothing here touches the filesystem. The temp and data directories come from
injected providers so callers (and tests) decide where they live.
"""

import os
import sys
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, Union

import platformdirs

from turbod.daemon.errors import PathResolutionError, SocketPathTooLongError
from turbod.daemon.hashing import PathArg, get_repo_hash

DAEMON_NAMESPACE = "turbod"
DATA_APP_NAME = "turborepo"
SOCKET_FILE = "turbod.sock"
PID_FILE = "turbod.pid"
LOGS_DIR = "logs"

# sun_path is 104 bytes on macOS and the BSDs, 108 on Linux
if sys.platform == "darwin" or sys.platform.startswith(("freebsd", "openbsd", "netbsd")):
    UNIX_SOCKET_PATH_MAX = 104
else:
    UNIX_SOCKET_PATH_MAX = 108

TempDirProvider = Callable[[str], Union[str, "os.PathLike[str]"]]
DataDirProvider = Callable[[], Union[str, "os.PathLike[str]"]]


def default_temp_dir(namespace: str) -> Path:
    """Platform temp directory joined with `namespace` (honours TMPDIR)."""
    return Path(tempfile.gettempdir()) / namespace


def default_data_dir() -> Path:
    """Per-user data directory of the turborepo application."""
    return platformdirs.user_data_path(DATA_APP_NAME, appauthor=False)


def repo_base_name(repo_root: PathArg) -> str:
    """Final component of the repo root, or "root" for a filesystem root."""
    return Path(repo_root).name or "root"


def check_socket_path(path: PathArg, limit: Optional[int] = None) -> None:
    """
    Reject a socket path the OS would refuse to bind.

    Raises:
        SocketPathTooLongError: If the encoded path is longer than `limit`
    """
    limit = UNIX_SOCKET_PATH_MAX if limit is None else limit
    length = len(os.fsencode(path))
    if length > limit:
        raise SocketPathTooLongError(path, length, limit)


@dataclass(frozen=True)
class DaemonPaths:
    socket_path: Path
    pid_path: Path
    log_path: Path

    @property
    def file_root(self) -> Path:
        return self.socket_path.parent


class PathResolver:
    """
    Derives daemon file locations from a repository root.

    Every call recomputes from scratch; the resolver holds only its two
    providers and is safe to share between threads.
    """

    def __init__(
        self,
        temp_dir_provider: TempDirProvider = default_temp_dir,
        data_dir_provider: DataDirProvider = default_data_dir,
    ):
        self.temp_dir_provider = temp_dir_provider
        self.data_dir_provider = data_dir_provider

    def resolve(self, repo_root: PathArg) -> DaemonPaths:
        """
        Resolve socket, pid and log paths in one go.

        Raises:
            ValueError: If repo_root is not absolute
            PathResolutionError: If a provider cannot supply its directory
        """
        return DaemonPaths(
            socket_path=self.socket_path(repo_root),
            pid_path=self.pid_path(repo_root),
            log_path=self.log_path(repo_root),
        )

    def daemon_file_root(self, repo_root: PathArg) -> Path:
        root = _absolute(repo_root)
        temp_dir = _call_provider(
            "temp", lambda: self.temp_dir_provider(DAEMON_NAMESPACE)
        )
        return temp_dir / get_repo_hash(root)

    def socket_path(self, repo_root: PathArg) -> Path:
        return self.daemon_file_root(repo_root) / SOCKET_FILE

    def pid_path(self, repo_root: PathArg) -> Path:
        return self.daemon_file_root(repo_root) / PID_FILE

    def log_path(self, repo_root: PathArg) -> Path:
        root = _absolute(repo_root)
        data_dir = _call_provider("data", self.data_dir_provider)
        filename = f"{get_repo_hash(root)}-{repo_base_name(root)}.log"
        return data_dir / LOGS_DIR / filename


def _absolute(repo_root: PathArg) -> Path:
    root = Path(repo_root)
    if not root.is_absolute():
        raise ValueError(f"Repository root must be absolute, got {os.fspath(repo_root)!r}")
    return root


def _call_provider(kind: str, provider: Callable[[], object]) -> Path:
    try:
        value = provider()
    except (OSError, RuntimeError, ValueError) as e:
        raise PathResolutionError(f"Unable to determine {kind} directory: {e}") from e
    if not value:
        raise PathResolutionError(f"Unable to determine {kind} directory: provider returned nothing")
    return Path(value)
