"""
Backend registry — which package managers exist and in what order.

The registry owns the OS-family lookup table: for each family, the
native managers in preference order followed by the universal
fallbacks (Nix, then Cargo). The resolver never hard-codes a manager.
"""

from __future__ import annotations

import logging
from typing import Any

from adaptive.adapters.base import CliBackend, PackageBackend
from adaptive.adapters.packages import (
    ApkBackend,
    AptBackend,
    BrewBackend,
    CargoBackend,
    DnfBackend,
    FinkBackend,
    NalaBackend,
    NixBackend,
    PacmanBackend,
    ParuBackend,
    PortBackend,
    YayBackend,
    YumBackend,
)
from adaptive.adapters.shell.command import CommandRunner
from adaptive.adapters.shell.probe import CommandProbe
from adaptive.core.models.install import OsFamily

logger = logging.getLogger(__name__)

NIX = "nix"
CARGO = "cargo"
UNIVERSAL_FALLBACKS: tuple[str, ...] = (NIX, CARGO)

FAMILY_BACKENDS: dict[OsFamily, tuple[str, ...]] = {
    OsFamily.MACOS: ("brew", "port", "fink", *UNIVERSAL_FALLBACKS),
    OsFamily.DEBIAN: ("nala", "apt", *UNIVERSAL_FALLBACKS),
    OsFamily.FEDORA: ("dnf", "yum", *UNIVERSAL_FALLBACKS),
    OsFamily.ARCH: ("pacman", "yay", "paru", *UNIVERSAL_FALLBACKS),
    OsFamily.ALPINE: ("apk", *UNIVERSAL_FALLBACKS),
}

_BACKEND_CLASSES: tuple[type[CliBackend], ...] = (
    BrewBackend,
    PortBackend,
    FinkBackend,
    NalaBackend,
    AptBackend,
    DnfBackend,
    YumBackend,
    PacmanBackend,
    YayBackend,
    ParuBackend,
    ApkBackend,
    NixBackend,
    CargoBackend,
)


class BackendRegistry:
    """Lookup of backends by name, plus per-family ordering.

    Features:
        - Register/unregister backends by name
        - Ordered backend list for an OS family
        - Availability status for display
    """

    def __init__(self, backends: list[PackageBackend] | None = None):
        self._backends: dict[str, PackageBackend] = {}
        for backend in backends or []:
            self.register(backend)

    @classmethod
    def default(cls, runner: CommandRunner | None = None) -> BackendRegistry:
        """Registry holding every real package-manager backend."""
        runner = runner or CommandRunner()
        return cls([backend_cls(runner) for backend_cls in _BACKEND_CLASSES])

    def register(self, backend: PackageBackend) -> None:
        name = backend.name
        if name in self._backends:
            logger.warning("Overwriting existing backend: %s", name)
        self._backends[name] = backend
        logger.debug("Registered backend: %s", name)

    def unregister(self, name: str) -> None:
        self._backends.pop(name, None)

    def get(self, name: str) -> PackageBackend | None:
        return self._backends.get(name)

    def list_backends(self) -> list[str]:
        return list(self._backends.keys())

    def for_family(self, family: OsFamily) -> list[PackageBackend]:
        """Backends for ``family`` in default order.

        Names in the family table without a registered backend are left
        out, so a registry of mocks only needs the managers a test uses.
        """
        ordered = []
        for name in FAMILY_BACKENDS[family]:
            backend = self._backends.get(name)
            if backend is not None:
                ordered.append(backend)
        return ordered

    def backend_status(
        self, family: OsFamily, probe: CommandProbe,
    ) -> list[dict[str, Any]]:
        """Availability of each backend for ``family``, in order."""
        status = []
        for backend in self.for_family(family):
            status.append({
                "name": backend.name,
                "binary": backend.binary,
                "available": backend.is_available(probe),
                "type": backend.__class__.__name__,
            })
        return status
