"""
Shared plumbing for the verb commands.

Every verb follows the same shape: open a session (resolve the agent),
call a use case, render its ``DispatchResult``. Resolution happens
here, inside the verb, so ``jpd <verb> --help`` never probes or prompts.
"""

from __future__ import annotations

import json
import sys
from typing import NoReturn

import click

from jpd.adapters.registry import Toolbox
from jpd.core.errors import JpdError
from jpd.core.models.command import TranslationResult
from jpd.core.use_cases.dispatch import DispatchResult
from jpd.core.use_cases.session import Session, open_session

# Passthrough verbs: everything after the first argument belongs to the child
PASSTHROUGH = {"ignore_unknown_options": True, "allow_interspersed_args": False}


def toolbox(ctx: click.Context) -> Toolbox:
    """The injected toolbox, or the real one built on first use."""
    obj = ctx.ensure_object(dict)
    if obj.get("toolbox") is None:
        obj["toolbox"] = Toolbox()
    return obj["toolbox"]


def session(ctx: click.Context) -> Session:
    """Resolve the agent for this invocation, or exit with the error."""
    obj = ctx.ensure_object(dict)
    try:
        return open_session(
            toolbox(ctx),
            target=obj.get("cwd"),
            explicit_agent=obj.get("agent"),
            config_path=obj.get("config_path"),
            dry_run=obj.get("dry_run", False),
            environ=obj.get("environ"),
        )
    except JpdError as e:
        fail(ctx, str(e), e.exit_code)


def announce(command: TranslationResult) -> None:
    """Dry-run output: the command line that would have been spawned."""
    click.echo(str(command))


def announcer(ctx: click.Context):
    obj = ctx.ensure_object(dict)
    if obj.get("as_json"):
        return None
    return announce


def fail(ctx: click.Context, message: str, exit_code: int = 1) -> NoReturn:
    obj = ctx.ensure_object(dict)
    if obj.get("as_json"):
        click.echo(json.dumps({"error": message, "exit_code": exit_code}, indent=2))
    else:
        click.secho(f"❌ {message}", fg="red", err=True)
    sys.exit(exit_code)


def render(ctx: click.Context, result: DispatchResult) -> None:
    """Print the outcome of a verb and exit non-zero on error."""
    obj = ctx.ensure_object(dict)

    if obj.get("as_json"):
        click.echo(json.dumps(result.to_dict(), indent=2))
        if result.error:
            sys.exit(result.exit_code)
        return

    if result.error:
        click.secho(f"❌ {result.error}", fg="red", err=True)
        sys.exit(result.exit_code)

    if result.skipped and result.message and not obj.get("quiet"):
        click.secho(f"⊘ {result.message}", fg="yellow", err=True)
