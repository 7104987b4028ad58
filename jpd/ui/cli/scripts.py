"""
CLI commands that run project scripts: run and start.

Options are recognised anywhere on the line (``jpd run test
--if-present``); unknown options and everything after ``--`` go to
the script.
"""

from __future__ import annotations

import click

from jpd.ui.cli._context import announcer, render, session

_SCRIPT_ARGS = {"ignore_unknown_options": True}


def _auto_install_option(fn):
    return click.option(
        "--auto-install/--no-auto-install",
        default=None,
        help="Install dependencies first when they look stale (dev/start only).",
    )(fn)


@click.command(context_settings=_SCRIPT_ARGS)
@click.argument("script", required=False)
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
@click.option("--if-present", is_flag=True, help="Do nothing if the script is not defined.")
@_auto_install_option
@click.option("--no-volta", is_flag=True, help="Do not wrap the install in 'volta run'.")
@click.pass_context
def run(
    ctx: click.Context,
    script: str | None,
    args: tuple[str, ...],
    if_present: bool,
    auto_install: bool | None,
    no_volta: bool,
) -> None:
    """Run SCRIPT from package.json (deno: a task from deno.json).

    Without SCRIPT, pick one from a list.

    Examples:

        jpd run build

        jpd run test -- --watch

        jpd run lint --if-present
    """
    from jpd.core.use_cases.run import run_script

    s = session(ctx)
    result = run_script(
        s,
        script=script,
        args=args,
        if_present=if_present,
        auto_install=auto_install,
        no_volta=no_volta,
        announce=announcer(ctx),
    )
    render(ctx, result)


@click.command(context_settings=_SCRIPT_ARGS)
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
@click.option("--if-present", is_flag=True, help="Do nothing if there is no start script.")
@_auto_install_option
@click.option("--no-volta", is_flag=True, help="Do not wrap the install in 'volta run'.")
@click.option("--reload-cache", is_flag=True, help="deno: re-download remote imports first.")
@click.pass_context
def start(
    ctx: click.Context,
    args: tuple[str, ...],
    if_present: bool,
    auto_install: bool | None,
    no_volta: bool,
    reload_cache: bool,
) -> None:
    """Run the start script, installing dependencies first if needed."""
    from jpd.core.use_cases.run import run_script

    s = session(ctx)
    result = run_script(
        s,
        script="start",
        args=args,
        if_present=if_present,
        auto_install=auto_install,
        no_volta=no_volta,
        reload_cache=reload_cache,
        announce=announcer(ctx),
    )
    render(ctx, result)
