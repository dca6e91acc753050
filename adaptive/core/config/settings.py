"""
Installer settings — read from the environment into a typed model.

Nothing is read from disk: the installer is driven entirely by its
arguments plus a handful of environment variables.

    ADAPTIVE_INSTALL_TIMEOUT   seconds allowed for one install command
    ADAPTIVE_QUERY_TIMEOUT     seconds allowed for one catalog query
    ADAPTIVE_DRY_RUN           1/true/yes to print installs instead of running them
    SUDO                       privilege prefix (unset = auto, empty = never)
"""

from __future__ import annotations

import logging
import os
import shlex
import shutil
from collections.abc import Mapping

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

DEFAULT_INSTALL_TIMEOUT = 900
DEFAULT_QUERY_TIMEOUT = 60

_TRUTHY = ("1", "true", "yes", "on")
_FALSY = ("", "0", "false", "no", "off")


class ConfigError(Exception):
    """Raised when installer configuration is invalid."""


class InstallSettings(BaseModel):
    """Runtime knobs for the installer."""

    install_timeout: int = Field(default=DEFAULT_INSTALL_TIMEOUT, gt=0)
    query_timeout: int = Field(default=DEFAULT_QUERY_TIMEOUT, gt=0)
    dry_run: bool = False
    sudo: list[str] = Field(default_factory=list)
    # Set by --json: install output goes to stderr, stdout stays parseable
    relay_install_output: bool = False


def _default_sudo() -> list[str]:
    """``sudo`` when we are not root and it exists, otherwise nothing."""
    if hasattr(os, "geteuid") and os.geteuid() == 0:
        return []
    return ["sudo"] if shutil.which("sudo") else []


def _parse_seconds(environ: Mapping[str, str], key: str, default: int) -> int:
    raw = environ.get(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError as e:
        raise ConfigError(f"{key} must be a whole number of seconds, got {raw!r}") from e
    if value <= 0:
        raise ConfigError(f"{key} must be positive, got {value}")
    return value


def _parse_bool(environ: Mapping[str, str], key: str) -> bool:
    raw = environ.get(key, "").strip().lower()
    if raw in _TRUTHY:
        return True
    if raw in _FALSY:
        return False
    raise ConfigError(f"{key} must be a boolean (1/0, true/false, yes/no), got {raw!r}")


def load_settings(environ: Mapping[str, str] | None = None) -> InstallSettings:
    """Build settings from environment variables.

    Args:
        environ: Mapping to read from (default: ``os.environ``).

    Returns:
        Validated InstallSettings.

    Raises:
        ConfigError: If any variable holds an invalid value.
    """
    env = os.environ if environ is None else environ

    if "SUDO" in env:
        sudo = shlex.split(env["SUDO"])
    else:
        sudo = _default_sudo()

    settings = InstallSettings(
        install_timeout=_parse_seconds(env, "ADAPTIVE_INSTALL_TIMEOUT", DEFAULT_INSTALL_TIMEOUT),
        query_timeout=_parse_seconds(env, "ADAPTIVE_QUERY_TIMEOUT", DEFAULT_QUERY_TIMEOUT),
        dry_run=_parse_bool(env, "ADAPTIVE_DRY_RUN"),
        sudo=sudo,
    )
    logger.debug(
        "Settings: install_timeout=%ds query_timeout=%ds dry_run=%s sudo=%s",
        settings.install_timeout,
        settings.query_timeout,
        settings.dry_run,
        settings.sudo or "-",
    )
    return settings
