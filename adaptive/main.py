"""
Adaptive shell installer — CLI entrypoint.

Usage:
    adaptive --help
    adaptive install ripgrep rg
    adaptive install --prefer-nix eza
    adaptive install-on-debian jq
    adaptive has-command brew
"""

from __future__ import annotations

import json
import os
import sys

import click

from adaptive import __version__
from adaptive.adapters.registry import BackendRegistry
from adaptive.adapters.shell.command import CommandRunner
from adaptive.adapters.shell.probe import CommandProbe
from adaptive.core.config.settings import ConfigError, InstallSettings, load_settings
from adaptive.core.models.install import OsFamily, ResolutionOutcome
from adaptive.core.observability.logging_config import resolve_level, setup_logging

_FAMILIES = [family.value for family in OsFamily]

# Raw passthrough so --prefer-nix/--prefer-cargo reach the preference parser
_PASSTHROUGH = {"ignore_unknown_options": True}


def _registry(settings: InstallSettings) -> BackendRegistry:
    """Backends wired to a runner using ``settings``."""
    return BackendRegistry.default(CommandRunner(settings))


def _probe() -> CommandProbe:
    return CommandProbe.from_environment()


def _load_settings(dry_run: bool, as_json: bool = False) -> InstallSettings:
    try:
        settings = load_settings()
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red", err=True)
        sys.exit(1)
    if dry_run:
        settings = settings.model_copy(update={"dry_run": True})
    if as_json:
        settings = settings.model_copy(update={"relay_install_output": True})
    return settings


def _notify(line: str) -> None:
    click.echo(line, err=True)


def _report(ctx: click.Context, outcome: ResolutionOutcome, as_json: bool) -> None:
    """Print an outcome and exit with its code."""
    if as_json:
        click.echo(json.dumps(outcome.to_dict(), indent=2))
        sys.exit(outcome.exit_code)

    if outcome.succeeded and outcome.dry_run:
        click.secho(
            f"🔎 would install {outcome.package_name_used} using {outcome.backend_used}",
            fg="cyan",
        )
        return

    if outcome.succeeded:
        click.secho(
            f"✅ {outcome.package_name_used} installed using {outcome.backend_used}",
            fg="green",
        )
        return

    if outcome.reason == "no_package":
        click.secho(f"❌ ERROR: {outcome.error}", fg="red", bold=True, err=True)
        click.echo("   usage: install [--prefer-nix] [--prefer-cargo] <package> [<alt> ...]", err=True)
        sys.exit(1)

    click.secho(f"❌ ERROR: {outcome.error}", fg="red", bold=True, err=True)
    if ctx.obj.get("verbose") and outcome.attempts:
        for attempt in outcome.attempts:
            target = f" {attempt.package}" if attempt.package else ""
            click.echo(f"   • {attempt.backend}{target}: {attempt.status.value}", err=True)
    sys.exit(1)


def _run_install(
    ctx: click.Context,
    family: OsFamily | None,
    args: tuple[str, ...],
    dry_run: bool,
    as_json: bool,
) -> None:
    from adaptive.core.services.install.resolver import install_for_host

    settings = _load_settings(dry_run, as_json)
    silent = as_json or ctx.obj.get("quiet")
    outcome = install_for_host(
        list(args),
        family=family,
        registry=_registry(settings),
        probe=_probe(),
        notify=None if silent else _notify,
    )
    _report(ctx, outcome, as_json)


@click.group()
@click.version_option(version=__version__, prog_name="adaptive")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, quiet: bool, debug: bool) -> None:
    """Adaptive shell — install packages with whatever manager this host has."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug

    setup_logging(
        level=resolve_level(debug=debug, verbose=verbose, quiet=quiet),
        log_file=os.environ.get("ADAPTIVE_LOG_FILE"),
        log_file_level=os.environ.get("ADAPTIVE_LOG_FILE_LEVEL"),
    )


@cli.command(context_settings=_PASSTHROUGH)
@click.option(
    "--os", "os_family",
    type=click.Choice(_FAMILIES),
    default=None,
    help="OS family to install for (default: detect).",
)
@click.option("--dry-run", is_flag=True, help="Query catalogs but only print install commands.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
@click.pass_context
def install(
    ctx: click.Context,
    os_family: str | None,
    dry_run: bool,
    as_json: bool,
    args: tuple[str, ...],
) -> None:
    """Install a package, trying each available package manager.

    ARGS are package names, most preferred first, with optional
    --prefer-nix / --prefer-cargo anywhere among them.

    Examples:

        adaptive install ripgrep rg

        adaptive install --prefer-cargo ripgrep
    """
    family = OsFamily(os_family) if os_family else None
    _run_install(ctx, family, args, dry_run, as_json)


def _family_command(family: OsFamily) -> click.Command:
    @click.command(f"install-on-{family.value}", context_settings=_PASSTHROUGH)
    @click.option("--dry-run", is_flag=True, help="Query catalogs but only print install commands.")
    @click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
    @click.argument("args", nargs=-1, type=click.UNPROCESSED)
    @click.pass_context
    def command(ctx: click.Context, dry_run: bool, as_json: bool, args: tuple[str, ...]) -> None:
        _run_install(ctx, family, args, dry_run, as_json)

    command.help = f"Install a package using the {family.value} package managers."
    return command


for _family in OsFamily:
    cli.add_command(_family_command(_family))


@cli.command("has-command")
@click.argument("name")
def has_command(name: str) -> None:
    """Exit 0 if NAME is an executable on PATH or a builtin (not a function)."""
    try:
        found = _probe().has_command(name)
    except ValueError as e:
        click.secho(f"❌ {e}", fg="red", err=True)
        sys.exit(2)
    sys.exit(0 if found else 1)


@cli.command("has-function")
@click.argument("name")
def has_function(name: str) -> None:
    """Exit 0 if NAME is a shell function exported by the calling shell."""
    try:
        found = _probe().has_function(name)
    except ValueError as e:
        click.secho(f"❌ {e}", fg="red", err=True)
        sys.exit(2)
    sys.exit(0 if found else 1)


@cli.command()
@click.option(
    "--os", "os_family",
    type=click.Choice(_FAMILIES),
    default=None,
    help="OS family (default: detect).",
)
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
def backends(os_family: str | None, as_json: bool) -> None:
    """Show the package managers tried for an OS family, in order."""
    from adaptive.core.services.detection.os_family import detect_os_family

    family = OsFamily(os_family) if os_family else detect_os_family()
    if family is None:
        click.secho("❌ Unsupported OS — pass --os", fg="red", err=True)
        sys.exit(1)

    status = _registry(_load_settings(dry_run=False)).backend_status(family, _probe())

    if as_json:
        click.echo(json.dumps({"family": family.value, "backends": status}, indent=2))
        return

    click.secho(f"📦 {family.value} package managers (in order):", fg="cyan", bold=True)
    for entry in status:
        icon = "✅" if entry["available"] else "❌"
        click.echo(f"   {icon} {entry['name']} ({entry['binary']})")


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
def detect(as_json: bool) -> None:
    """Detect the host OS and its package-manager family."""
    from adaptive.core.services.detection.os_family import detect_os

    info = detect_os()

    if as_json:
        click.echo(json.dumps(info, indent=2))
        return

    click.secho(f"🔍 {info['system']} {info['release']} ({info['machine']})", fg="cyan", bold=True)
    if info.get("distro"):
        click.echo(f"   Distro: {info['distro']}")
    if info.get("wsl"):
        click.echo("   WSL: yes")
    if info["family"]:
        click.echo(f"   Family: {info['family']}")
    else:
        click.secho("   Family: unsupported", fg="yellow")


if __name__ == "__main__":
    cli()
