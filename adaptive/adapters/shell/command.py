"""
Command runner — the single place backends shell out.

Every catalog query and every install goes through ``CommandRunner``.
Sudo prefixing, timeouts, dry-run and logging are centralised here,
and failures of any kind come back as a ``CommandResult`` rather than
an exception.
"""

from __future__ import annotations

import logging
import shlex
import subprocess
import sys
import time

from pydantic import BaseModel

from adaptive.core.config.settings import InstallSettings

logger = logging.getLogger(__name__)

# Keep the tail of long outputs only
_OUTPUT_LIMIT = 2000


class CommandResult(BaseModel):
    """Outcome of one external process."""

    command: list[str]
    returncode: int | None = None
    stdout: str = ""
    stderr: str = ""
    elapsed_ms: int = 0
    error: str | None = None    # set when the process could not run or timed out
    dry_run: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None and self.returncode == 0

    @property
    def has_output(self) -> bool:
        """Succeeded and printed something — how most catalogs say "found"."""
        return self.ok and bool(self.stdout.strip())


class CommandRunner:
    """Run package-manager commands one at a time.

    Args:
        settings: Timeouts, sudo prefix and dry-run mode.
    """

    def __init__(self, settings: InstallSettings | None = None):
        self._settings = settings or InstallSettings()

    @property
    def settings(self) -> InstallSettings:
        return self._settings

    def query(self, cmd: list[str]) -> CommandResult:
        """Run a read-only catalog query. Always executed, even in dry-run."""
        return self._run(cmd, timeout=self._settings.query_timeout)

    def install(self, cmd: list[str], needs_sudo: bool = False) -> CommandResult:
        """Run a mutating install command, sudo-prefixed when required."""
        if needs_sudo and self._settings.sudo:
            cmd = [*self._settings.sudo, *cmd]

        if self._settings.dry_run:
            logger.info("[dry-run] would run: %s", shlex.join(cmd))
            return CommandResult(
                command=cmd,
                returncode=0,
                stdout=f"[dry-run] {shlex.join(cmd)}",
                dry_run=True,
            )

        # Installs may prompt (sudo password, pacman confirmations) so
        # they inherit the terminal, unless stdout is reserved for
        # machine-readable output; then their output is relayed to stderr.
        if self._settings.relay_install_output:
            return self._run(cmd, timeout=self._settings.install_timeout, relay=True)
        return self._run(cmd, timeout=self._settings.install_timeout, capture=False)

    def _run(
        self,
        cmd: list[str],
        timeout: int,
        capture: bool = True,
        relay: bool = False,
    ) -> CommandResult:
        logger.debug("Executing: %s (timeout=%ds)", shlex.join(cmd), timeout)
        start = time.monotonic()
        try:
            result = subprocess.run(
                cmd,
                capture_output=capture,
                text=True,
                timeout=timeout,
            )
        except FileNotFoundError:
            return CommandResult(command=cmd, error=f"Command not found: {cmd[0]}")
        except subprocess.TimeoutExpired:
            logger.warning("Timed out after %ds: %s", timeout, shlex.join(cmd))
            return CommandResult(command=cmd, error=f"Command timed out ({timeout}s)")
        except OSError as e:
            logger.warning("Could not run %s: %s", shlex.join(cmd), e)
            return CommandResult(command=cmd, error=str(e))

        elapsed_ms = int((time.monotonic() - start) * 1000)
        if relay:
            sys.stderr.write(result.stdout or "")
            sys.stderr.write(result.stderr or "")
            sys.stderr.flush()
        stdout = (result.stdout or "")[-_OUTPUT_LIMIT:]
        stderr = (result.stderr or "")[-_OUTPUT_LIMIT:]
        if result.returncode != 0:
            logger.debug("Exit %d from %s: %s", result.returncode, cmd[0], stderr.strip())

        return CommandResult(
            command=cmd,
            returncode=result.returncode,
            stdout=stdout,
            stderr=stderr,
            elapsed_ms=elapsed_ms,
        )
