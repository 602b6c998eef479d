"""Configuration management for turbod.

Settings come from ~/.config/turbod/config.cfg, then a .env file in the
working directory, then the process environment (later sources win).
"""

import configparser
from dataclasses import dataclass
import os
import sys
from pathlib import Path
from typing import Dict, Mapping, Optional

from dotenv import dotenv_values

from turbod.daemon.binary import ExecutableProvider, current_executable
from turbod.daemon.paths import PathResolver, default_data_dir, default_temp_dir

# Default location for user configuration.
CONFIG_PATH = Path.home() / ".config" / "turbod" / "config.cfg"
ENV_PATH = Path(".env")

SETTING_KEYS = (
    "turbod_no_daemon",
    "turbod_log_level",
    "turbod_temp_dir",
    "turbod_data_dir",
    "turbod_binary",
    "turbod_connect_timeout",
)


@dataclass
class DaemonSettings:
    no_daemon: bool = False
    log_level: str = "WARNING"
    temp_dir: Optional[Path] = None
    data_dir: Optional[Path] = None
    binary: Optional[Path] = None
    connect_timeout: Optional[float] = None


def load_raw_config(
    path: Path = CONFIG_PATH,
    env_path: Path = ENV_PATH,
    environ: Optional[Mapping[str, str]] = None,
) -> Dict[str, str]:
    """
    Merge config file, .env and environment values.
    Keys are returned lowercase; only turbod settings are kept.
    """
    data: Dict[str, str] = {}

    if path.exists():
        cfg = configparser.ConfigParser()
        cfg.read(path)
        if "DEFAULT" in cfg:
            data.update({k.lower(): v for k, v in cfg["DEFAULT"].items()})

    if env_path.exists():
        data.update(
            {k.lower(): v for k, v in dotenv_values(env_path).items() if v is not None}
        )

    environ = os.environ if environ is None else environ
    data.update({k.lower(): v for k, v in environ.items() if k.lower() in SETTING_KEYS})

    return {k: v for k, v in data.items() if k in SETTING_KEYS}


def _get_bool(raw: Dict[str, str], key: str, default: bool = False) -> bool:
    value = raw.get(key)
    if value is None:
        return default
    return str(value).strip().lower() in {"1", "true", "yes", "y", "on"}


def _get_path(raw: Dict[str, str], key: str) -> Optional[Path]:
    value = raw.get(key, "").strip()
    return Path(value).expanduser() if value else None


def get_settings(raw: Optional[Dict[str, str]] = None) -> DaemonSettings:
    """
    Build DaemonSettings from raw configuration values.
    Raises ValueError if the connect timeout is not a number.
    """
    raw = load_raw_config() if raw is None else raw

    timeout_value = raw.get("turbod_connect_timeout", "").strip()
    try:
        connect_timeout = float(timeout_value) if timeout_value else None
    except ValueError:
        raise ValueError(
            f"Invalid TURBOD_CONNECT_TIMEOUT '{timeout_value}': expected seconds"
        ) from None

    return DaemonSettings(
        no_daemon=_get_bool(raw, "turbod_no_daemon"),
        log_level=raw.get("turbod_log_level", "WARNING").strip().upper() or "WARNING",
        temp_dir=_get_path(raw, "turbod_temp_dir"),
        data_dir=_get_path(raw, "turbod_data_dir"),
        binary=_get_path(raw, "turbod_binary"),
        connect_timeout=connect_timeout,
    )


def is_daemon_enabled(settings: DaemonSettings) -> bool:
    """
    Daemon is DISABLED if:
    - TURBOD_NO_DAEMON is set
    - Running on Windows (unix sockets not used there)
    """
    if settings.no_daemon:
        return False

    if sys.platform == "win32":
        return False

    return True


def build_path_resolver(settings: DaemonSettings) -> PathResolver:
    """PathResolver honouring the temp/data dir overrides."""
    temp_provider = default_temp_dir
    data_provider = default_data_dir

    if settings.temp_dir is not None:
        temp_root = settings.temp_dir
        temp_provider = lambda namespace: temp_root / namespace  # noqa: E731
    if settings.data_dir is not None:
        data_root = settings.data_dir
        data_provider = lambda: data_root  # noqa: E731

    return PathResolver(temp_dir_provider=temp_provider, data_dir_provider=data_provider)


def build_executable_provider(settings: DaemonSettings) -> ExecutableProvider:
    """Executable provider honouring the TURBOD_BINARY override."""
    if settings.binary is not None:
        binary = settings.binary
        return lambda: binary
    return current_executable
