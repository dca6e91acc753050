"""Adapters — package-manager backends and shell probes.

Public re-exports for convenient access.
"""

from adaptive.adapters.base import CliBackend, PackageBackend
from adaptive.adapters.mock import MockBackend
from adaptive.adapters.registry import BackendRegistry

__all__ = [
    "BackendRegistry",
    "CliBackend",
    "MockBackend",
    "PackageBackend",
]
