"""Configuration resolution with XDG paths and CLI/environment precedence.

apimatrix keeps no configuration files. Its only settings are the HTTP
options used to fetch a spec, resolved by :func:`resolve_fetch_config`:

    1. CLI flags (``--timeout``, ``--retries``, ``--insecure``)
    2. Environment variables (``APIMATRIX_TIMEOUT``,
       ``APIMATRIX_MAX_RETRIES``, ``APIMATRIX_VERIFY_SSL``)
    3. Defaults from :class:`~apimatrix.models.FetchConfig`

:func:`get_data_dir` locates the directory used for crash logs.
"""

from __future__ import annotations

import os
import platform
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from apimatrix.exceptions import ConfigError
from apimatrix.models import FetchConfig

_APP_NAME = "apimatrix"
_ENV_PREFIX = "APIMATRIX_"

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True if the platform supports XDG Base Directory spec (Linux/FreeBSD)."""
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def _fallback_base_dir() -> Path:
    """Fallback base directory for non-XDG platforms (macOS, Windows)."""
    return Path.home() / f".{_APP_NAME}"


def _xdg_base(env_var: str, default_segments: tuple[str, ...]) -> Path:
    """Resolve an XDG base directory from an env var with fallback segments under $HOME."""
    env_value = os.environ.get(env_var, "")
    if env_value:
        return Path(env_value)
    base = Path.home()
    for seg in default_segments:
        base = base / seg
    return base


def get_data_dir() -> Path:
    """Return the data directory (crash logs), creating it if necessary.

    On Linux/BSD: ``$XDG_DATA_HOME/apimatrix/`` (default ``~/.local/share/apimatrix/``).
    On macOS/Windows: ``~/.apimatrix/logs/``.

    Returns:
        Absolute path to the data directory (guaranteed to exist).
    """
    if _is_xdg_platform():
        base = _xdg_base("XDG_DATA_HOME", (".local", "share"))
        path = base / _APP_NAME
    else:
        path = _fallback_base_dir() / "logs"
    path.mkdir(parents=True, exist_ok=True)
    return path


# --- Precedence resolution ---


def _env(name: str) -> Optional[str]:
    value = os.environ.get(f"{_ENV_PREFIX}{name}", "").strip()
    return value or None


def _parse_bool(name: str, value: str) -> bool:
    lowered = value.lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ConfigError(f"{_ENV_PREFIX}{name} must be a boolean (got '{value}')")


def resolve_fetch_config(
    cli_timeout: Optional[float] = None,
    cli_max_retries: Optional[int] = None,
    cli_verify_ssl: Optional[bool] = None,
) -> FetchConfig:
    """Resolve fetch settings with full precedence chain.

    Precedence (high to low):
        1. CLI flags
        2. Environment variables (``APIMATRIX_TIMEOUT``,
           ``APIMATRIX_MAX_RETRIES``, ``APIMATRIX_VERIFY_SSL``)
        3. Defaults

    Returns:
        The effective :class:`FetchConfig`.

    Raises:
        ConfigError: If a value is malformed, the timeout is not positive,
            or the retry count is negative.
    """
    values: dict[str, object] = {}

    env_timeout = _env("TIMEOUT")
    if env_timeout is not None:
        values["timeout"] = env_timeout
    env_retries = _env("MAX_RETRIES")
    if env_retries is not None:
        values["max_retries"] = env_retries
    env_verify = _env("VERIFY_SSL")
    if env_verify is not None:
        values["verify_ssl"] = _parse_bool("VERIFY_SSL", env_verify)

    if cli_timeout is not None:
        values["timeout"] = cli_timeout
    if cli_max_retries is not None:
        values["max_retries"] = cli_max_retries
    if cli_verify_ssl is not None:
        values["verify_ssl"] = cli_verify_ssl

    try:
        config = FetchConfig.model_validate(values)
    except ValidationError as exc:
        raise ConfigError(f"Invalid fetch configuration: {exc}") from exc

    if config.timeout <= 0:
        raise ConfigError(f"Timeout must be positive (got {config.timeout})")
    if config.max_retries < 0:
        raise ConfigError(f"Retries cannot be negative (got {config.max_retries})")
    return config
