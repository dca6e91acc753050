"""
Universal backends — Nix and Cargo.

Both work on every OS family and act as last resorts after the native
package manager, unless the caller promotes them with --prefer-nix or
--prefer-cargo.
"""

from __future__ import annotations

from adaptive.adapters.base import CliBackend
from adaptive.adapters.shell.command import CommandResult


class NixBackend(CliBackend):
    """nix-env against the ``nixpkgs`` channel."""

    backend_id = "nix"
    executable = "nix-env"
    query_cmd = ("nix-env", "-qa", "{pkg}")
    install_cmd = ("nix-env", "-iA", "nixpkgs.{pkg}")
    require_output = True


class CargoBackend(CliBackend):
    """crates.io via ``cargo install``.

    ``cargo search`` is a fuzzy search that exits 0 either way, so the
    first result line must be the crate itself: ``ripgrep = "14.1.0" # ...``.
    """

    backend_id = "cargo"
    query_cmd = ("cargo", "search", "{pkg}", "--limit", "1")
    install_cmd = ("cargo", "install", "{pkg}")

    def found_in(self, result: CommandResult, package: str) -> bool:
        if not result.ok:
            return False
        lines = result.stdout.strip().splitlines()
        return bool(lines) and lines[0].startswith(f"{package} =")
