"""
Debian/Ubuntu backends — nala and apt.

nala is a frontend over apt's database, so both answer catalog
queries the same way through ``apt-cache``; only the installer differs.
"""

from __future__ import annotations

from adaptive.adapters.base import CliBackend


class NalaBackend(CliBackend):
    backend_id = "nala"
    query_cmd = ("apt-cache", "show", "{pkg}")
    install_cmd = ("nala", "install", "-y", "{pkg}")
    needs_sudo = True


class AptBackend(CliBackend):
    # apt's CLI is not stable for scripts; apt-get does the install
    backend_id = "apt"
    query_cmd = ("apt-cache", "show", "{pkg}")
    install_cmd = ("apt-get", "install", "-y", "{pkg}")
    needs_sudo = True
