"""Package-manager backends, one class per manager."""

from adaptive.adapters.packages.alpine import ApkBackend
from adaptive.adapters.packages.arch import PacmanBackend, ParuBackend, YayBackend
from adaptive.adapters.packages.debian import AptBackend, NalaBackend
from adaptive.adapters.packages.fedora import DnfBackend, YumBackend
from adaptive.adapters.packages.macos import BrewBackend, FinkBackend, PortBackend
from adaptive.adapters.packages.universal import CargoBackend, NixBackend

__all__ = [
    "ApkBackend",
    "AptBackend",
    "BrewBackend",
    "CargoBackend",
    "DnfBackend",
    "FinkBackend",
    "NalaBackend",
    "NixBackend",
    "PacmanBackend",
    "ParuBackend",
    "PortBackend",
    "YayBackend",
    "YumBackend",
]
