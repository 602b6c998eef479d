"""Resolve the executable the daemon is addressed through.

The internal engine (`go-turbo`) can no longer be called directly, so a call
that originates from it has to be routed back to the public `turbo` wrapper
in the same directory.
"""

import os
import shutil
import sys
from pathlib import Path
from typing import Callable, Dict

from turbod.daemon.errors import ExecutableResolutionError
from turbod.daemon.hashing import PathArg

ENGINE_TO_WRAPPER: Dict[str, str] = {
    "go-turbo": "turbo",
    "go-turbo.exe": "turbo.exe",
}

ExecutableProvider = Callable[[], PathArg]


def resolve_entry_point(executable: PathArg) -> Path:
    """
    Map the running executable to the daemon's client entry point.

    Args:
        executable: Path of the currently running executable

    Returns:
        The wrapper in the same directory for an engine binary,
        otherwise `executable` unchanged
    """
    bin_path = Path(executable)
    wrapper = ENGINE_TO_WRAPPER.get(bin_path.name)
    if wrapper is None:
        return bin_path
    return bin_path.with_name(wrapper)


def current_executable() -> Path:
    """
    Path of the executable this process was started from.

    Frozen builds report their own binary through sys.executable; otherwise
    the console script in sys.argv[0] is the entry point.

    Raises:
        ExecutableResolutionError: If the path cannot be determined
    """
    if getattr(sys, "frozen", False) and sys.executable:
        return Path(sys.executable)

    argv0 = sys.argv[0] if sys.argv else ""
    if not argv0 or argv0 == "-c":
        raise ExecutableResolutionError("Unable to determine the current executable")

    if os.sep in argv0 or (os.altsep and os.altsep in argv0):
        return Path(os.path.abspath(argv0))

    found = shutil.which(argv0)
    if found is None:
        raise ExecutableResolutionError(
            f"Unable to determine the current executable: {argv0!r} not found on PATH"
        )
    return Path(os.path.abspath(found))
