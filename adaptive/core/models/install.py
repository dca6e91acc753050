"""
Install request and outcome models — the resolver's I/O contract.

Requests describe what the caller asked for. Outcomes describe what
happened. Expected failures (nothing found, install failed) are data
on the outcome, never exceptions.
"""

from __future__ import annotations

from datetime import UTC, datetime
from enum import StrEnum
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator

PREFER_NIX_FLAG = "--prefer-nix"
PREFER_CARGO_FLAG = "--prefer-cargo"


def _now_iso() -> str:
    """Current UTC time as ISO string."""
    return datetime.now(UTC).isoformat()


class OsFamily(StrEnum):
    """Groups of systems sharing a native package-manager ecosystem."""

    MACOS = "macos"
    DEBIAN = "debian"
    FEDORA = "fedora"
    ARCH = "arch"
    ALPINE = "alpine"


class AttemptStatus(StrEnum):
    """What happened when a backend was tried."""

    UNAVAILABLE = "unavailable"
    NOT_FOUND = "not_found"
    INSTALL_FAILED = "install_failed"
    INSTALLED = "installed"
    WOULD_INSTALL = "would_install"   # dry-run: found, install only reported


class InstallRequest(BaseModel):
    """One parsed call to the installer.

    ``package_candidates`` are synonyms for the same logical package,
    most preferred first (e.g. ``["ripgrep", "rg"]``).
    """

    package_candidates: list[str]
    prefer_nix: bool = False
    prefer_cargo: bool = False

    @field_validator("package_candidates")
    @classmethod
    def _check_candidates(cls, value: list[str]) -> list[str]:
        if not any(value):
            raise ValueError("at least one package name is required")
        flags = {PREFER_NIX_FLAG, PREFER_CARGO_FLAG}
        for name in value:
            if name in flags:
                raise ValueError(f"preference flag {name!r} is not a package name")
        return value

    @property
    def preferred_name(self) -> str:
        return self.package_candidates[0]


class Attempt(BaseModel):
    """A single (backend, package) step of a resolution."""

    backend: str
    package: str | None = None   # None when the backend was skipped outright
    status: AttemptStatus
    detail: str = ""


class ResolutionOutcome(BaseModel):
    """Result of resolving an InstallRequest against an OS family."""

    succeeded: bool
    reason: Literal["installed", "dry_run", "no_package", "exhausted", "unsupported_os"]
    os_family: str | None = None
    backend_used: str | None = None
    package_name_used: str | None = None
    error: str | None = None
    dry_run: bool = False
    attempts: list[Attempt] = Field(default_factory=list)
    finished_at: str = Field(default_factory=_now_iso)

    @classmethod
    def success(
        cls,
        backend: str,
        package: str,
        dry_run: bool = False,
        **kwargs: Any,
    ) -> ResolutionOutcome:
        """Create a success outcome. A dry run succeeds without installing."""
        return cls(
            succeeded=True,
            reason="dry_run" if dry_run else "installed",
            backend_used=backend,
            package_name_used=package,
            dry_run=dry_run,
            **kwargs,
        )

    @classmethod
    def failure(
        cls,
        reason: Literal["no_package", "exhausted", "unsupported_os"],
        error: str,
        **kwargs: Any,
    ) -> ResolutionOutcome:
        """Create a failure outcome."""
        return cls(succeeded=False, reason=reason, error=error, **kwargs)

    @property
    def exit_code(self) -> int:
        return 0 if self.succeeded else 1

    def tried(self, status: AttemptStatus) -> list[Attempt]:
        """Attempts that ended with the given status."""
        return [a for a in self.attempts if a.status == status]

    def to_dict(self) -> dict:
        """Convert to a JSON-serializable dictionary."""
        result: dict = {
            "succeeded": self.succeeded,
            "reason": self.reason,
            "os_family": self.os_family,
            "dry_run": self.dry_run,
        }
        if self.succeeded:
            result["backend"] = self.backend_used
            result["package"] = self.package_name_used
        else:
            result["error"] = self.error
        result["attempts"] = [
            {
                "backend": a.backend,
                "package": a.package,
                "status": a.status.value,
                **({"detail": a.detail} if a.detail else {}),
            }
            for a in self.attempts
        ]
        return result
