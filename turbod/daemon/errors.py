"""Error kinds raised while locating and connecting to the daemon."""


class DaemonError(Exception):
    """Base class for every daemon bootstrap failure."""


class PathResolutionError(DaemonError):
    """Raised when the temp or data directory cannot be determined."""


class SocketPathTooLongError(PathResolutionError):
    """Raised when the socket path exceeds the platform's unix socket limit."""

    def __init__(self, path, length: int, limit: int):
        self.path = path
        self.length = length
        self.limit = limit
        super().__init__(
            f"Socket path {path} is {length} bytes, "
            f"exceeding the {limit} byte unix socket limit"
        )


class ExecutableResolutionError(DaemonError):
    """Raised when the running process cannot report its own executable."""


class DaemonConnectionError(DaemonError):
    """Raised by the default connector when the daemon cannot be reached."""


class DaemonNotRunningError(DaemonConnectionError):
    """Raised when nothing is listening on the daemon socket."""
