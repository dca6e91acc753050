"""
Shared test fixtures and configuration.
"""

from pathlib import Path

import pytest

from adaptive.adapters.shell.command import CommandResult
from adaptive.adapters.shell.probe import CommandProbe
from adaptive.core.config.settings import InstallSettings


def make_executable(directory: Path, name: str, body: str = "exit 0") -> Path:
    """Create an executable shell script called ``name`` in ``directory``."""
    path = directory / name
    path.write_text(f"#!/bin/sh\n{body}\n")
    path.chmod(0o755)
    return path


class RecordingRunner:
    """Stand-in for CommandRunner: records commands, replays canned results.

    ``results`` maps a command tuple to ``(returncode, stdout)``; any
    other command exits 1 with no output.
    """

    def __init__(self, results: dict | None = None, settings: InstallSettings | None = None):
        self._results = results or {}
        self.settings = settings or InstallSettings()
        self.queries: list[list[str]] = []
        self.installs: list[tuple[list[str], bool]] = []

    def _answer(self, cmd: list[str]) -> CommandResult:
        returncode, stdout = self._results.get(tuple(cmd), (1, ""))
        return CommandResult(command=cmd, returncode=returncode, stdout=stdout)

    def query(self, cmd: list[str]) -> CommandResult:
        self.queries.append(cmd)
        return self._answer(cmd)

    def install(self, cmd: list[str], needs_sudo: bool = False) -> CommandResult:
        self.installs.append((cmd, needs_sudo))
        return self._answer(cmd)


@pytest.fixture
def bin_dir(tmp_path: Path) -> Path:
    """Return an empty directory to use as the only PATH entry."""
    directory = tmp_path / "bin"
    directory.mkdir()
    return directory


@pytest.fixture
def empty_probe(bin_dir: Path) -> CommandProbe:
    """A probe that finds no executables, only builtins."""
    return CommandProbe(path=str(bin_dir))
