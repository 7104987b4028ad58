"""CLI command for direct access to the resolved package manager."""

from __future__ import annotations

import click

from jpd.core.models.command import Verb
from jpd.ui.cli._context import PASSTHROUGH, announcer, render, session


@click.command(context_settings=PASSTHROUGH)
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
@click.pass_context
def agent(ctx: click.Context, args: tuple[str, ...]) -> None:
    """Run the detected package manager with ARGS untouched.

        jpd agent --version
    """
    from jpd.core.use_cases.dispatch import dispatch_verb

    s = session(ctx)
    render(ctx, dispatch_verb(s, Verb.AGENT, (), args, announce=announcer(ctx)))
