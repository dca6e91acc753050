"""
Package installation — preference parsing and backend resolution.

Public API:
    from adaptive.core.services.install import install_on, parse_request
"""

from adaptive.core.services.install.preferences import MissingPackageError, parse_request
from adaptive.core.services.install.resolver import (
    install_for_host,
    install_on,
    install_on_alpine,
    install_on_arch,
    install_on_debian,
    install_on_fedora,
    install_on_macos,
    order_backends,
    resolve,
)

__all__ = [
    "MissingPackageError",
    "install_for_host",
    "install_on",
    "install_on_alpine",
    "install_on_arch",
    "install_on_debian",
    "install_on_fedora",
    "install_on_macos",
    "order_backends",
    "parse_request",
    "resolve",
]
