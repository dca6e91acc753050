"""
Package backend base — the contract between resolver and package managers.

The resolver only talks to package managers through this interface,
never directly to ``brew``/``apt``/``cargo``.  That keeps every real
side effect behind an object tests can replace.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from adaptive.adapters.shell.command import CommandResult, CommandRunner
from adaptive.adapters.shell.probe import CommandProbe


class PackageBackend(ABC):
    """Abstract base class for all package-manager backends.

    Backends are stateless strategies. ``find`` and ``install`` return
    booleans and NEVER raise for expected failures (package missing,
    non-zero exit, timeout).

    To add a backend:
        1. Subclass PackageBackend (or CliBackend for plain CLIs)
        2. Implement name, binary, find, install
        3. Add it to the family tables in ``adaptive.adapters.registry``
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """The backend identifier (e.g., 'brew', 'apt', 'nix')."""

    @property
    @abstractmethod
    def binary(self) -> str:
        """Executable whose presence makes this backend usable."""

    @property
    def dry_run(self) -> bool:
        """True when ``install`` only reports what it would run."""
        return False

    def is_available(self, probe: CommandProbe) -> bool:
        """Whether the backend's binary is on PATH (functions don't count)."""
        return probe.has_command(self.binary)

    @abstractmethod
    def find(self, package: str) -> bool:
        """Whether the catalog has ``package``. Must not install anything."""

    @abstractmethod
    def install(self, package: str) -> bool:
        """Install ``package``; True iff the package manager reported success."""

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"


class CliBackend(PackageBackend):
    """A backend driven by one query command and one install command.

    Subclasses set the class attributes; ``{pkg}`` in a command
    template is replaced by the package name.
    """

    backend_id: str = ""
    executable: str = ""
    query_cmd: tuple[str, ...] = ()
    install_cmd: tuple[str, ...] = ()
    needs_sudo: bool = False
    # Some catalogs exit 0 with empty output for unknown packages
    require_output: bool = False

    def __init__(self, runner: CommandRunner):
        self._runner = runner

    @property
    def name(self) -> str:
        return self.backend_id

    @property
    def binary(self) -> str:
        return self.executable or self.backend_id

    @property
    def dry_run(self) -> bool:
        return self._runner.settings.dry_run

    @staticmethod
    def _fill(template: tuple[str, ...], package: str) -> list[str]:
        return [part.replace("{pkg}", package) for part in template]

    def query_command(self, package: str) -> list[str]:
        return self._fill(self.query_cmd, package)

    def install_command(self, package: str) -> list[str]:
        return self._fill(self.install_cmd, package)

    def found_in(self, result: CommandResult, package: str) -> bool:
        """Interpret a query result. Override for catalogs with odd output."""
        return result.has_output if self.require_output else result.ok

    def find(self, package: str) -> bool:
        result = self._runner.query(self.query_command(package))
        return self.found_in(result, package)

    def install(self, package: str) -> bool:
        result = self._runner.install(self.install_command(package), needs_sudo=self.needs_sudo)
        return result.ok
