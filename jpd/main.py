"""
jpd — CLI entrypoint.

Usage:
    jpd --help
    jpd install -D typescript
    jpd run dev
    jpd -C packages/web dlx cowsay hi
    python -m jpd.main --dry-run create vite my-app
"""

from __future__ import annotations

from pathlib import Path

import click

from jpd import __version__
from jpd.core.observability.logging_config import configure_logging

# alias → command name
ALIASES: dict[str, str] = {
    "i": "install",
    "add": "install",
    "r": "run",
    "s": "start",
    "e": "exec",
    "x": "dlx",
    "c": "create",
    "u": "update",
    "up": "update",
    "upgrade": "update",
    "un": "uninstall",
    "remove": "uninstall",
    "rm": "uninstall",
    "ci": "clean-install",
    "a": "agent",
}


class AliasedGroup(click.Group):
    """Group that also answers to the short verb aliases."""

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        return super().get_command(ctx, ALIASES.get(cmd_name, cmd_name))

    def resolve_command(self, ctx: click.Context, args: list[str]):
        _, cmd, rest = super().resolve_command(ctx, args)
        return cmd.name if cmd else None, cmd, rest


@click.group(cls=AliasedGroup)
@click.version_option(version=__version__, prog_name="jpd")
@click.option("--agent", "-a", default=None, metavar="NAME", help="Package manager to use: deno, bun, pnpm, yarn or npm.")
@click.option("--cwd", "-C", default=None, metavar="DIR", help="Run as if jpd was started in DIR.")
@click.option("--debug", "-d", is_flag=True, help="Enable debug logging (very verbose).")
@click.option("--verbose", "-v", is_flag=True, help="Log what jpd decides and runs.")
@click.option("--quiet", "-q", is_flag=True, help="Only log errors.")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to .jpd.yml (default: search upward from the target directory).",
)
@click.option("--dry-run", is_flag=True, help="Print the commands instead of running them.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Print the outcome as JSON.")
@click.pass_context
def cli(
    ctx: click.Context,
    agent: str | None,
    cwd: str | None,
    debug: bool,
    verbose: bool,
    quiet: bool,
    config_path: str | None,
    dry_run: bool,
    as_json: bool,
) -> None:
    """One set of verbs for npm, yarn, pnpm, bun and deno.

    jpd finds the package manager a project uses (lockfile, then PATH)
    and translates each verb into that manager's syntax.
    """
    ctx.ensure_object(dict)
    ctx.obj["agent"] = agent
    ctx.obj["cwd"] = cwd
    ctx.obj["debug"] = debug
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["config_path"] = Path(config_path) if config_path else None
    ctx.obj["dry_run"] = dry_run
    ctx.obj["as_json"] = as_json

    # ── Logging setup (once, at process start) ──────────────────
    configure_logging(debug, verbose, quiet, environ=ctx.obj.get("environ"))


# ── Register verbs from jpd/ui/cli/ ─────────────────────────────

from jpd.ui.cli.agent import agent
from jpd.ui.cli.packages import clean_install, install, uninstall, update
from jpd.ui.cli.runners import create, dlx, exec_
from jpd.ui.cli.scripts import run, start

cli.add_command(install)
cli.add_command(run)
cli.add_command(start)
cli.add_command(exec_)
cli.add_command(dlx)
cli.add_command(create)
cli.add_command(update)
cli.add_command(uninstall)
cli.add_command(clean_install)
cli.add_command(agent)


if __name__ == "__main__":
    cli()
