"""
Preference parsing — turn installer argv into an InstallRequest.

Flags may appear anywhere among the package names:

    install_on_debian --prefer-nix ripgrep rg
    install_on_debian ripgrep --prefer-cargo rg --prefer-nix
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from adaptive.core.models.install import (
    PREFER_CARGO_FLAG,
    PREFER_NIX_FLAG,
    InstallRequest,
)

logger = logging.getLogger(__name__)


class MissingPackageError(ValueError):
    """Raised when the arguments name no package at all."""

    def __init__(self, message: str = "no package provided"):
        super().__init__(message)


def as_argv(args: Iterable[str]) -> list[str]:
    """Copy installer arguments into a list.

    A bare string is refused: iterating it would yield one-letter
    package names.
    """
    if isinstance(args, (str, bytes)):
        raise TypeError(
            f"installer arguments must be a list of strings, not {type(args).__name__}"
        )
    return list(args)


def parse_request(args: Iterable[str]) -> InstallRequest:
    """Split argv into preference flags and ordered package candidates.

    Args:
        args: Raw arguments, flags interspersed with package names.

    Returns:
        InstallRequest with candidates in their original relative order.

    Raises:
        TypeError: If ``args`` is a single string rather than a list.
        MissingPackageError: If no package name remains after removing flags.
    """
    candidates: list[str] = []
    prefer_nix = False
    prefer_cargo = False

    for token in as_argv(args):
        if token == PREFER_NIX_FLAG:
            prefer_nix = True
        elif token == PREFER_CARGO_FLAG:
            prefer_cargo = True
        elif token:
            candidates.append(token)

    if not candidates:
        raise MissingPackageError()

    request = InstallRequest(
        package_candidates=candidates,
        prefer_nix=prefer_nix,
        prefer_cargo=prefer_cargo,
    )
    logger.debug(
        "Parsed request: candidates=%s prefer_nix=%s prefer_cargo=%s",
        candidates, prefer_nix, prefer_cargo,
    )
    return request
