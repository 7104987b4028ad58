"""
CLI commands that change what is installed.

install, uninstall, update and clean-install. Thin wrappers over
``jpd.core.use_cases.packages`` and ``jpd.core.use_cases.dispatch``.
"""

from __future__ import annotations

import click

from jpd.core.models.command import Flag, Verb
from jpd.ui.cli._context import announcer, render, session


def _flags(**switches: bool) -> set[Flag]:
    return {Flag(name.replace("_", "-")) for name, on in switches.items() if on}


@click.command()
@click.argument("packages", nargs=-1)
@click.option("--dev", "-D", is_flag=True, help="Save as a development dependency.")
@click.option("--global", "-g", "global_", is_flag=True, help="Install globally.")
@click.option("--production", "-P", is_flag=True, help="Skip development dependencies.")
@click.option("--frozen", "-F", is_flag=True, help="Fail instead of updating the lockfile.")
@click.option("--search", "-s", default=None, metavar="QUERY", help="Search the npm registry and pick packages.")
@click.option("--no-volta", is_flag=True, help="Do not wrap the command in 'volta run'.")
@click.pass_context
def install(
    ctx: click.Context,
    packages: tuple[str, ...],
    dev: bool,
    global_: bool,
    production: bool,
    frozen: bool,
    search: str | None,
    no_volta: bool,
) -> None:
    """Install dependencies, or add PACKAGES.

    Examples:

        jpd install

        jpd install -D typescript

        jpd install --search date
    """
    from jpd.core.use_cases.packages import install_packages

    s = session(ctx)
    flags = _flags(dev=dev, production=production, frozen=frozen, no_volta=no_volta)
    if global_:
        flags.add(Flag.GLOBAL)

    result = install_packages(s, packages, flags, search=search, announce=announcer(ctx))
    render(ctx, result)


@click.command()
@click.argument("packages", nargs=-1)
@click.option("--global", "-g", "global_", is_flag=True, help="Remove global packages.")
@click.option("--interactive", "-i", is_flag=True, help="Pick dependencies to remove.")
@click.pass_context
def uninstall(
    ctx: click.Context,
    packages: tuple[str, ...],
    global_: bool,
    interactive: bool,
) -> None:
    """Remove PACKAGES."""
    from jpd.core.use_cases.packages import uninstall_packages

    s = session(ctx)
    flags = _flags(interactive=interactive)
    if global_:
        flags.add(Flag.GLOBAL)

    result = uninstall_packages(s, packages, flags, announce=announcer(ctx))
    render(ctx, result)


@click.command()
@click.argument("packages", nargs=-1)
@click.option("--interactive", "-i", is_flag=True, help="Choose updates interactively.")
@click.option("--global", "-g", "global_", is_flag=True, help="Update global packages.")
@click.option("--latest", "-L", is_flag=True, help="Ignore semver ranges, go to latest.")
@click.pass_context
def update(
    ctx: click.Context,
    packages: tuple[str, ...],
    interactive: bool,
    global_: bool,
    latest: bool,
) -> None:
    """Update dependencies (all, or just PACKAGES)."""
    from jpd.core.use_cases.dispatch import dispatch_verb

    s = session(ctx)
    flags = _flags(interactive=interactive, latest=latest)
    if global_:
        flags.add(Flag.GLOBAL)

    result = dispatch_verb(s, Verb.UPDATE, flags, packages, announce=announcer(ctx))
    render(ctx, result)


@click.command("clean-install")
@click.pass_context
def clean_install(ctx: click.Context) -> None:
    """Install exactly what the lockfile says (CI mode)."""
    from jpd.core.use_cases.dispatch import dispatch_verb

    s = session(ctx)
    result = dispatch_verb(s, Verb.CLEAN_INSTALL, announce=announcer(ctx))
    render(ctx, result)
