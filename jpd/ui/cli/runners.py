"""
CLI commands that run binaries: exec, dlx and create.

Everything after the first argument is handed to the binary as is,
including options jpd itself would recognise.
"""

from __future__ import annotations

import click

from jpd.core.models.command import Verb
from jpd.ui.cli._context import PASSTHROUGH, announcer, render, session


def _dispatch(ctx: click.Context, verb: Verb, args: tuple[str, ...]) -> None:
    from jpd.core.use_cases.dispatch import dispatch_verb

    s = session(ctx)
    render(ctx, dispatch_verb(s, verb, (), args, announce=announcer(ctx)))


@click.command("exec", context_settings=PASSTHROUGH)
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
@click.pass_context
def exec_(ctx: click.Context, args: tuple[str, ...]) -> None:
    """Run a binary installed in the project.

        jpd exec eslint . --fix
    """
    _dispatch(ctx, Verb.EXEC, args)


@click.command(context_settings=PASSTHROUGH)
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
@click.pass_context
def dlx(ctx: click.Context, args: tuple[str, ...]) -> None:
    """Fetch a package and run it without installing it.

        jpd dlx cowsay hello
    """
    _dispatch(ctx, Verb.DLX, args)


@click.command(context_settings=PASSTHROUGH)
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
@click.pass_context
def create(ctx: click.Context, args: tuple[str, ...]) -> None:
    """Scaffold a project from a create-* starter (deno: a URL).

        jpd create vite my-app -- --template react
    """
    _dispatch(ctx, Verb.CREATE, args)
