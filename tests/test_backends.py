"""
Tests for package-manager backends and the backend registry.
"""

from pathlib import Path

import pytest

from adaptive.adapters.mock import MockBackend
from adaptive.adapters.packages import (
    ApkBackend,
    AptBackend,
    BrewBackend,
    CargoBackend,
    DnfBackend,
    FinkBackend,
    NalaBackend,
    NixBackend,
    PacmanBackend,
    ParuBackend,
    PortBackend,
    YayBackend,
    YumBackend,
)
from adaptive.adapters.registry import FAMILY_BACKENDS, BackendRegistry
from adaptive.adapters.shell.probe import CommandProbe
from adaptive.core.models.install import OsFamily
from tests.conftest import RecordingRunner, make_executable

# ── Command construction ────────────────────────────────────────────


@pytest.mark.parametrize(
    ("backend_cls", "query", "install", "sudo"),
    [
        (BrewBackend, ["brew", "info", "jq"], ["brew", "install", "jq"], False),
        (PortBackend, ["port", "info", "jq"], ["port", "install", "jq"], True),
        (FinkBackend, ["fink", "list", "jq"], ["fink", "install", "jq"], False),
        (NalaBackend, ["apt-cache", "show", "jq"], ["nala", "install", "-y", "jq"], True),
        (AptBackend, ["apt-cache", "show", "jq"], ["apt-get", "install", "-y", "jq"], True),
        (DnfBackend, ["dnf", "info", "jq"], ["dnf", "install", "-y", "jq"], True),
        (YumBackend, ["yum", "info", "jq"], ["yum", "install", "-y", "jq"], True),
        (PacmanBackend, ["pacman", "-Si", "jq"], ["pacman", "-S", "--noconfirm", "jq"], True),
        (YayBackend, ["yay", "-Si", "jq"], ["yay", "-S", "--noconfirm", "jq"], False),
        (ParuBackend, ["paru", "-Si", "jq"], ["paru", "-S", "--noconfirm", "jq"], False),
        (ApkBackend, ["apk", "search", "-e", "jq"], ["apk", "add", "jq"], True),
        (NixBackend, ["nix-env", "-qa", "jq"], ["nix-env", "-iA", "nixpkgs.jq"], False),
        (CargoBackend, ["cargo", "search", "jq", "--limit", "1"], ["cargo", "install", "jq"], False),
    ],
)
def test_backend_commands(backend_cls, query, install, sudo):
    runner = RecordingRunner()
    backend = backend_cls(runner)
    backend.find("jq")
    backend.install("jq")
    assert runner.queries == [query]
    assert runner.installs == [(install, sudo)]


class TestFind:
    def test_find_does_not_install(self):
        runner = RecordingRunner({("dnf", "info", "jq"): (0, "Name : jq")})
        assert DnfBackend(runner).find("jq")
        assert runner.installs == []

    def test_nonzero_query_means_missing(self):
        runner = RecordingRunner({("pacman", "-Si", "nope"): (1, "")})
        assert not PacmanBackend(runner).find("nope")

    def test_brew_requires_output(self):
        runner = RecordingRunner({("brew", "info", "jq"): (0, "")})
        assert not BrewBackend(runner).find("jq")

    def test_apk_empty_search_is_missing(self):
        runner = RecordingRunner({("apk", "search", "-e", "jq"): (0, "\n")})
        assert not ApkBackend(runner).find("jq")

    def test_apk_match(self):
        runner = RecordingRunner({("apk", "search", "-e", "jq"): (0, "jq-1.7.1-r0\n")})
        assert ApkBackend(runner).find("jq")

    def test_nix_match(self):
        runner = RecordingRunner({("nix-env", "-qa", "eza"): (0, "eza-0.18.0\n")})
        assert NixBackend(runner).find("eza")

    def test_cargo_exact_crate(self):
        output = 'ripgrep = "14.1.0"    # ripgrep is a line-oriented search tool\n'
        runner = RecordingRunner({("cargo", "search", "ripgrep", "--limit", "1"): (0, output)})
        assert CargoBackend(runner).find("ripgrep")

    def test_cargo_fuzzy_hit_is_not_a_match(self):
        output = 'ripgrep_all = "0.10.6"    # rga: ripgrep, but also search in PDFs\n'
        runner = RecordingRunner({("cargo", "search", "ripgrep", "--limit", "1"): (0, output)})
        assert not CargoBackend(runner).find("ripgrep")

    def test_cargo_no_results(self):
        runner = RecordingRunner({("cargo", "search", "zzz", "--limit", "1"): (0, "")})
        assert not CargoBackend(runner).find("zzz")


class TestInstall:
    def test_success_is_exit_zero(self):
        runner = RecordingRunner({("apt-get", "install", "-y", "jq"): (0, "")})
        assert AptBackend(runner).install("jq")

    def test_failure_is_nonzero(self):
        runner = RecordingRunner({("apk", "add", "jq"): (2, "")})
        assert not ApkBackend(runner).install("jq")


class TestAvailability:
    def test_binary_differs_from_name(self, bin_dir: Path):
        backend = NixBackend(RecordingRunner())
        assert backend.name == "nix"
        assert backend.binary == "nix-env"
        assert not backend.is_available(CommandProbe(path=str(bin_dir)))

        make_executable(bin_dir, "nix-env")
        assert backend.is_available(CommandProbe(path=str(bin_dir)))

    def test_function_is_not_availability(self, bin_dir: Path):
        probe = CommandProbe(path=str(bin_dir), functions=["brew"])
        assert not BrewBackend(RecordingRunner()).is_available(probe)

    def test_repr(self):
        assert repr(BrewBackend(RecordingRunner())) == "<BrewBackend name='brew'>"


# ── Registry ────────────────────────────────────────────────────────


class TestFamilyTable:
    @pytest.mark.parametrize(
        ("family", "expected"),
        [
            (OsFamily.MACOS, ["brew", "port", "fink", "nix", "cargo"]),
            (OsFamily.DEBIAN, ["nala", "apt", "nix", "cargo"]),
            (OsFamily.FEDORA, ["dnf", "yum", "nix", "cargo"]),
            (OsFamily.ARCH, ["pacman", "yay", "paru", "nix", "cargo"]),
            (OsFamily.ALPINE, ["apk", "nix", "cargo"]),
        ],
    )
    def test_default_order(self, family, expected):
        registry = BackendRegistry.default()
        assert [b.name for b in registry.for_family(family)] == expected

    def test_every_family_ends_with_universal_fallbacks(self):
        for order in FAMILY_BACKENDS.values():
            assert order[-2:] == ("nix", "cargo")

    def test_every_table_entry_has_a_backend(self):
        registry = BackendRegistry.default()
        names = set(registry.list_backends())
        for order in FAMILY_BACKENDS.values():
            assert set(order) <= names


class TestBackendRegistry:
    def test_register_and_get(self):
        registry = BackendRegistry()
        mock = MockBackend("apt")
        registry.register(mock)
        assert registry.get("apt") is mock
        assert "apt" in registry.list_backends()

    def test_get_missing(self):
        assert BackendRegistry().get("emerge") is None

    def test_unregister(self):
        registry = BackendRegistry([MockBackend("yum")])
        registry.unregister("yum")
        assert registry.get("yum") is None

    def test_for_family_skips_unregistered(self):
        registry = BackendRegistry([MockBackend("cargo"), MockBackend("dnf")])
        assert [b.name for b in registry.for_family(OsFamily.FEDORA)] == ["dnf", "cargo"]

    def test_backend_status(self, bin_dir: Path):
        make_executable(bin_dir, "apk")
        registry = BackendRegistry.default()
        status = registry.backend_status(OsFamily.ALPINE, CommandProbe(path=str(bin_dir)))
        assert [s["name"] for s in status] == ["apk", "nix", "cargo"]
        assert status[0]["available"] is True
        assert status[1] == {
            "name": "nix", "binary": "nix-env", "available": False, "type": "NixBackend",
        }
