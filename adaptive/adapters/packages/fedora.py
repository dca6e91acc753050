"""
Fedora/RHEL/CentOS backends — dnf and yum.
"""

from __future__ import annotations

from adaptive.adapters.base import CliBackend


class DnfBackend(CliBackend):
    backend_id = "dnf"
    query_cmd = ("dnf", "info", "{pkg}")
    install_cmd = ("dnf", "install", "-y", "{pkg}")
    needs_sudo = True


class YumBackend(CliBackend):
    backend_id = "yum"
    query_cmd = ("yum", "info", "{pkg}")
    install_cmd = ("yum", "install", "-y", "{pkg}")
    needs_sudo = True
