"""
macOS backends — Homebrew, MacPorts, Fink.
"""

from __future__ import annotations

from adaptive.adapters.base import CliBackend


class BrewBackend(CliBackend):
    """Homebrew. ``brew info`` exits non-zero for unknown formulae."""

    backend_id = "brew"
    query_cmd = ("brew", "info", "{pkg}")
    install_cmd = ("brew", "install", "{pkg}")
    require_output = True


class PortBackend(CliBackend):
    """MacPorts. Installs into /opt/local and needs root."""

    backend_id = "port"
    query_cmd = ("port", "info", "{pkg}")
    install_cmd = ("port", "install", "{pkg}")
    needs_sudo = True


class FinkBackend(CliBackend):
    # fink escalates by itself when it needs to
    backend_id = "fink"
    query_cmd = ("fink", "list", "{pkg}")
    install_cmd = ("fink", "install", "{pkg}")
    require_output = True
