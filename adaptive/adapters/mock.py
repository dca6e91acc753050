"""
Mock backend — recording test double for package managers.

Simulates a package manager with an in-memory catalog so resolver
behaviour can be exercised without touching the system. Every
``find``/``install`` call is logged in order.
"""

from __future__ import annotations

from collections.abc import Iterable

from adaptive.adapters.base import PackageBackend
from adaptive.adapters.shell.probe import CommandProbe


class MockBackend(PackageBackend):
    """Universal mock backend for testing.

    Args:
        backend_name: Identifier reported as ``name``.
        catalog: Package names ``find`` reports as present.
        failing: Packages that are found but whose install fails.
        available: Force availability; ``None`` defers to the probe
            using ``binary``.
        binary: Executable probed when ``available`` is None.
        dry_run: Report installs as successful without recording them.
    """

    def __init__(
        self,
        backend_name: str = "mock",
        catalog: Iterable[str] = (),
        failing: Iterable[str] = (),
        available: bool | None = True,
        binary: str | None = None,
        dry_run: bool = False,
    ):
        self._name = backend_name
        self._binary = binary or backend_name
        self._catalog = set(catalog)
        self._failing = set(failing)
        self._available = available
        self._dry_run = dry_run
        self._call_log: list[tuple[str, str]] = []
        self._installed: list[str] = []

    @property
    def name(self) -> str:
        return self._name

    @property
    def binary(self) -> str:
        return self._binary

    @property
    def dry_run(self) -> bool:
        return self._dry_run

    @property
    def call_log(self) -> list[tuple[str, str]]:
        """``(operation, package)`` pairs in call order."""
        return self._call_log

    @property
    def call_count(self) -> int:
        return len(self._call_log)

    @property
    def installed(self) -> list[str]:
        """Packages successfully installed through this mock."""
        return self._installed

    def calls(self, operation: str) -> list[str]:
        """Packages passed to ``operation`` ('find' or 'install')."""
        return [pkg for op, pkg in self._call_log if op == operation]

    def is_available(self, probe: CommandProbe) -> bool:
        if self._available is None:
            return super().is_available(probe)
        return self._available

    def add_package(self, package: str) -> None:
        self._catalog.add(package)

    def set_failure(self, package: str) -> None:
        """Make installs of ``package`` fail (it stays findable)."""
        self._catalog.add(package)
        self._failing.add(package)

    def find(self, package: str) -> bool:
        self._call_log.append(("find", package))
        return package in self._catalog

    def install(self, package: str) -> bool:
        self._call_log.append(("install", package))
        if package not in self._catalog or package in self._failing:
            return False
        if not self._dry_run:
            self._installed.append(package)
        return True

    def reset(self) -> None:
        """Clear call log and installed packages."""
        self._call_log.clear()
        self._installed.clear()
