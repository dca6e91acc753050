"""
Install resolver — walk backends × candidates until one install succeeds.

For an OS family the resolver takes the family's backend order from the
registry, promotes Nix/Cargo when the request prefers them, then:

    for backend in order (skipping unavailable ones):
        for name in candidates:
            find → install → first success wins

A failed install moves on to the next candidate on the same backend;
a backend is only left once every candidate has been tried on it.
Nothing is retried and nothing runs in parallel: package managers
own a single package database each.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable

from adaptive.adapters.base import PackageBackend
from adaptive.adapters.registry import CARGO, NIX, BackendRegistry
from adaptive.adapters.shell.probe import CommandProbe
from adaptive.core.models.install import (
    Attempt,
    AttemptStatus,
    InstallRequest,
    OsFamily,
    ResolutionOutcome,
)
from adaptive.core.services.detection.os_family import detect_os_family
from adaptive.core.services.install.preferences import (
    MissingPackageError,
    as_argv,
    parse_request,
)

logger = logging.getLogger(__name__)

Notify = Callable[[str], None]


def order_backends(
    backends: Iterable[PackageBackend],
    request: InstallRequest,
) -> list[PackageBackend]:
    """Apply preference promotion to a family's default order.

    Cargo is promoted first and Nix second, so when both flags are set
    the order is nix, cargo, then the native managers.
    """
    ordered = list(backends)
    promotions = []
    if request.prefer_cargo:
        promotions.append(CARGO)
    if request.prefer_nix:
        promotions.append(NIX)

    for name in promotions:
        for i, backend in enumerate(ordered):
            if backend.name == name:
                ordered.insert(0, ordered.pop(i))
                break
    return ordered


def _try_backend(
    backend: PackageBackend,
    request: InstallRequest,
    attempts: list[Attempt],
    notify: Notify,
) -> str | None:
    """Try every candidate on one backend; return the name that installed."""
    for name in request.package_candidates:
        if not backend.find(name):
            logger.debug("%s: no package named %r", backend.name, name)
            attempts.append(Attempt(
                backend=backend.name, package=name, status=AttemptStatus.NOT_FOUND,
            ))
            continue

        verb = "would install" if backend.dry_run else "installing"
        notify(f"- {verb} {name} using {backend.name}")
        logger.info("%s %s using %s", verb.capitalize(), name, backend.name)
        if backend.install(name):
            status = AttemptStatus.WOULD_INSTALL if backend.dry_run else AttemptStatus.INSTALLED
            attempts.append(Attempt(backend=backend.name, package=name, status=status))
            return name

        notify(f"ERROR: failed to install {name} package using {backend.name}!")
        logger.warning("Install of %s via %s failed", name, backend.name)
        attempts.append(Attempt(
            backend=backend.name,
            package=name,
            status=AttemptStatus.INSTALL_FAILED,
            detail="install command reported failure",
        ))
    return None


def resolve(
    request: InstallRequest,
    backends: Iterable[PackageBackend],
    probe: CommandProbe,
    notify: Notify | None = None,
    family_label: str = "",
) -> ResolutionOutcome:
    """Run the nested backend/candidate scan for a parsed request.

    Args:
        request: Parsed install request.
        backends: The family's backends in default order.
        probe: Availability probe, consulted afresh for every backend.
        notify: Progress sink for user-facing lines.
        family_label: Family name for outcome and messages.

    Returns:
        Success with the (backend, package) pair that installed, or an
        ``exhausted`` failure carrying every attempt.
        Under dry-run the success is marked ``dry_run`` and nothing was
        installed.
    """
    notify = notify or (lambda line: None)
    attempts: list[Attempt] = []

    for backend in order_backends(backends, request):
        if not backend.is_available(probe):
            logger.debug("Skipping %s: %s not on PATH", backend.name, backend.binary)
            attempts.append(Attempt(
                backend=backend.name,
                status=AttemptStatus.UNAVAILABLE,
                detail=f"{backend.binary} not found",
            ))
            continue

        installed = _try_backend(backend, request, attempts, notify)
        if installed is not None:
            return ResolutionOutcome.success(
                backend.name,
                installed,
                dry_run=backend.dry_run,
                os_family=family_label or None,
                attempts=attempts,
            )

    where = f"this {family_label} system" if family_label else "this system"
    message = (
        f"unsure how to install '{request.preferred_name}' on {where} "
        "with the available package managers"
    )
    notify(f"- {message}")
    logger.info("All backends exhausted for %s", request.package_candidates)
    return ResolutionOutcome.failure(
        "exhausted",
        message,
        os_family=family_label or None,
        attempts=attempts,
    )


def install_on(
    os_family: OsFamily | str,
    args: Iterable[str],
    *,
    registry: BackendRegistry | None = None,
    backends: Iterable[PackageBackend] | None = None,
    probe: CommandProbe | None = None,
    notify: Notify | None = None,
) -> ResolutionOutcome:
    """Install a package on ``os_family`` from raw installer arguments.

    Args:
        os_family: Target family (``OsFamily`` or its string value).
        args: Package names with optional --prefer-nix/--prefer-cargo.
        registry: Source of the family's backend order (default: real backends).
        backends: Explicit backend order, bypassing the registry.
        probe: Availability probe (default: current environment).
        notify: Progress sink for user-facing lines.

    Returns:
        ResolutionOutcome. Never raises for missing packages or failed installs.

    Raises:
        TypeError: If ``args`` is a single string instead of a list.
    """
    try:
        request = parse_request(args)
    except MissingPackageError as e:
        return ResolutionOutcome.failure(
            "no_package",
            str(e),
            os_family=str(os_family),
        )

    try:
        family = OsFamily(os_family)
    except ValueError:
        return ResolutionOutcome.failure(
            "unsupported_os",
            f"no package managers known for OS family '{os_family}'",
            os_family=str(os_family),
        )

    if backends is None:
        registry = registry or BackendRegistry.default()
        backends = registry.for_family(family)

    return resolve(
        request,
        backends,
        probe or CommandProbe.from_environment(),
        notify=notify,
        family_label=family.value,
    )


def install_on_macos(args: Iterable[str], **kwargs) -> ResolutionOutcome:
    return install_on(OsFamily.MACOS, args, **kwargs)


def install_on_debian(args: Iterable[str], **kwargs) -> ResolutionOutcome:
    return install_on(OsFamily.DEBIAN, args, **kwargs)


def install_on_fedora(args: Iterable[str], **kwargs) -> ResolutionOutcome:
    return install_on(OsFamily.FEDORA, args, **kwargs)


def install_on_arch(args: Iterable[str], **kwargs) -> ResolutionOutcome:
    return install_on(OsFamily.ARCH, args, **kwargs)


def install_on_alpine(args: Iterable[str], **kwargs) -> ResolutionOutcome:
    return install_on(OsFamily.ALPINE, args, **kwargs)


def install_for_host(
    args: Iterable[str],
    *,
    family: OsFamily | None = None,
    **kwargs,
) -> ResolutionOutcome:
    """Install on whatever family this host belongs to.

    Args:
        args: Raw installer arguments.
        family: Skip detection and use this family.
        **kwargs: Passed through to ``install_on``.
    """
    args = as_argv(args)
    family = family or detect_os_family()
    if family is None:
        try:
            parse_request(args)
        except MissingPackageError as e:
            return ResolutionOutcome.failure("no_package", str(e))
        return ResolutionOutcome.failure(
            "unsupported_os",
            "unable to automate installs on this OS; install the package manually",
        )
    return install_on(family, args, **kwargs)
