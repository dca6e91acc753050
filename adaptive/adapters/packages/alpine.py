"""
Alpine backend — apk.
"""

from __future__ import annotations

from adaptive.adapters.base import CliBackend


class ApkBackend(CliBackend):
    # `apk search -e` exits 0 and prints nothing when there is no match
    backend_id = "apk"
    query_cmd = ("apk", "search", "-e", "{pkg}")
    install_cmd = ("apk", "add", "{pkg}")
    needs_sudo = True
    require_output = True
