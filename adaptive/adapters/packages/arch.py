"""
Arch Linux backends — pacman for the official repos, yay/paru for the AUR.
"""

from __future__ import annotations

from adaptive.adapters.base import CliBackend


class PacmanBackend(CliBackend):
    backend_id = "pacman"
    query_cmd = ("pacman", "-Si", "{pkg}")
    install_cmd = ("pacman", "-S", "--noconfirm", "{pkg}")
    needs_sudo = True


class YayBackend(CliBackend):
    """AUR helper. Runs as the user and calls sudo itself for pacman."""

    backend_id = "yay"
    query_cmd = ("yay", "-Si", "{pkg}")
    install_cmd = ("yay", "-S", "--noconfirm", "{pkg}")


class ParuBackend(CliBackend):
    """AUR helper, same contract as yay."""

    backend_id = "paru"
    query_cmd = ("paru", "-Si", "{pkg}")
    install_cmd = ("paru", "-S", "--noconfirm", "{pkg}")
