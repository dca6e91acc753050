"""
OS family detection — map the host to a package-manager ecosystem.

Read-only. Uses ``platform.system()`` and, on Linux, ``/etc/os-release``
(``ID`` first, then each ``ID_LIKE`` entry).
"""

from __future__ import annotations

import logging
import platform
from pathlib import Path

from adaptive.core.models.install import OsFamily

logger = logging.getLogger(__name__)

OS_RELEASE = Path("/etc/os-release")

# os-release ID / ID_LIKE values → family
_DISTRO_FAMILIES: dict[str, OsFamily] = {
    "debian": OsFamily.DEBIAN,
    "ubuntu": OsFamily.DEBIAN,
    "raspbian": OsFamily.DEBIAN,
    "linuxmint": OsFamily.DEBIAN,
    "pop": OsFamily.DEBIAN,
    "kali": OsFamily.DEBIAN,
    "fedora": OsFamily.FEDORA,
    "rhel": OsFamily.FEDORA,
    "centos": OsFamily.FEDORA,
    "rocky": OsFamily.FEDORA,
    "almalinux": OsFamily.FEDORA,
    "amzn": OsFamily.FEDORA,
    "arch": OsFamily.ARCH,
    "archarm": OsFamily.ARCH,
    "manjaro": OsFamily.ARCH,
    "endeavouros": OsFamily.ARCH,
    "alpine": OsFamily.ALPINE,
}


def parse_os_release(text: str) -> dict[str, str]:
    """Parse os-release ``KEY=value`` lines, unquoting values."""
    fields: dict[str, str] = {}
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, _, value = line.partition("=")
        fields[key.strip()] = value.strip().strip('"').strip("'")
    return fields


def read_os_release(path: Path = OS_RELEASE) -> dict[str, str]:
    """Read and parse an os-release file; empty dict when unreadable."""
    try:
        return parse_os_release(path.read_text(encoding="utf-8"))
    except (FileNotFoundError, OSError):
        return {}


def family_from_os_release(fields: dict[str, str]) -> OsFamily | None:
    ids = [fields.get("ID", "").lower()]
    ids += fields.get("ID_LIKE", "").lower().split()
    for distro_id in ids:
        family = _DISTRO_FAMILIES.get(distro_id)
        if family is not None:
            return family
    return None


def detect_os_family(
    system: str | None = None,
    os_release: Path = OS_RELEASE,
) -> OsFamily | None:
    """Detect the host's OS family.

    Args:
        system: Override for ``platform.system()``.
        os_release: os-release file to consult on Linux.

    Returns:
        The family, or None when the host is not a supported system.
    """
    system = system or platform.system()
    if system == "Darwin":
        return OsFamily.MACOS
    if system != "Linux":
        logger.info("Unsupported system for package installs: %s", system)
        return None

    family = family_from_os_release(read_os_release(os_release))
    if family is None:
        logger.info("Unrecognised Linux distribution in %s", os_release)
    return family


def detect_os(os_release: Path = OS_RELEASE) -> dict:
    """Describe the host: system, distro and detected family."""
    info: dict[str, str | bool | None] = {
        "system": platform.system(),
        "release": platform.release(),
        "machine": platform.machine(),
    }
    try:
        with open("/proc/version", encoding="utf-8") as f:
            version_str = f.read().lower()
            info["wsl"] = "microsoft" in version_str or "wsl" in version_str
    except (FileNotFoundError, OSError):
        info["wsl"] = False

    if info["system"] == "Linux":
        fields = read_os_release(os_release)
        info["distro"] = fields.get("PRETTY_NAME", "Linux (unknown)")
        info["distro_id"] = fields.get("ID")

    family = detect_os_family(str(info["system"]), os_release)
    info["family"] = family.value if family else None
    return info
