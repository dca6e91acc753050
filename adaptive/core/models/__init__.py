"""
Domain models — Pydantic types for the installer.

All models are re-exported here for convenient access:

    from adaptive.core.models import InstallRequest, ResolutionOutcome
"""

from adaptive.core.models.install import (
    Attempt,
    AttemptStatus,
    InstallRequest,
    OsFamily,
    ResolutionOutcome,
)

__all__ = [
    "Attempt",
    "AttemptStatus",
    "InstallRequest",
    "OsFamily",
    "ResolutionOutcome",
]
