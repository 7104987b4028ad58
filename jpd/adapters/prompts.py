"""
Terminal prompts built on click.

Each prompt is shown with ``run()`` and read back with ``value()`` or
``values()``. Prompts write to stderr so a piped stdout stays clean.
Declining (Ctrl-C, Ctrl-D or an empty answer where one is required)
raises ``PromptCancelled``.
"""

from __future__ import annotations

import click

from jpd.adapters.base import CommandPrompt, MultiSelectPrompt, SelectPrompt
from jpd.core.errors import PromptCancelled
from jpd.core.models.agent import Manager


class InstallCommandPrompt(CommandPrompt):
    """Ask for a command that installs some package manager."""

    def __init__(self, hint: Manager | None = None):
        self._hint = hint
        self._value = ""

    def run(self) -> None:
        click.secho("⚠️  No JavaScript package manager was found.", fg="yellow", err=True)
        if self._hint:
            click.echo(
                f"   This project has a {self._hint} lockfile but {self._hint} is not installed.",
                err=True,
            )
            example = f"npm install -g {self._hint}"
        else:
            example = "npm install -g pnpm"

        self._value = _ask(
            f"   Command to install one (e.g. '{example}')",
            default="",
            show_default=False,
            err=True,
        ).strip()
        if not self._value:
            raise PromptCancelled("prompt cancelled")

    def value(self) -> str:
        return self._value


class ChoicePrompt(SelectPrompt):
    """Numbered single-choice list."""

    def __init__(self, title: str, options: list[str]):
        self._title = title
        self._options = options
        self._value = ""

    def run(self) -> None:
        if not self._options:
            raise PromptCancelled("prompt cancelled")

        click.secho(self._title, bold=True, err=True)
        for i, option in enumerate(self._options, start=1):
            click.echo(f"   {i:>2}. {option}", err=True)

        index = _ask(
            "   Select",
            type=click.IntRange(1, len(self._options)),
            err=True,
        )
        self._value = self._options[index - 1]

    def value(self) -> str:
        return self._value


class CheckboxPrompt(MultiSelectPrompt):
    """Numbered multi-choice list, answered as ``1,3,4`` or ``all``."""

    def __init__(self, title: str, options: list[str]):
        self._title = title
        self._options = options
        self._values: list[str] = []

    def run(self) -> None:
        if not self._options:
            raise PromptCancelled("prompt cancelled")

        click.secho(self._title, bold=True, err=True)
        for i, option in enumerate(self._options, start=1):
            click.echo(f"   {i:>2}. {option}", err=True)

        while True:
            raw = _ask(
                "   Select (comma separated, 'all' for everything)",
                default="",
                show_default=False,
                err=True,
            )
            try:
                self._values = parse_selection(raw, self._options)
                return
            except ValueError as e:
                click.secho(f"   {e}", fg="red", err=True)

    def values(self) -> list[str]:
        return list(self._values)


def parse_selection(raw: str, options: list[str]) -> list[str]:
    """Turn ``"1, 3"`` / ``"all"`` / ``""`` into the chosen options.

    Raises:
        ValueError: On a token that is not a valid option number.
    """
    text = raw.strip().lower()
    if not text:
        return []
    if text == "all":
        return list(options)

    chosen: list[str] = []
    for token in text.replace(" ", ",").split(","):
        if not token:
            continue
        if not token.isdigit() or not 1 <= int(token) <= len(options):
            raise ValueError(f"{token} is not between 1 and {len(options)}")
        option = options[int(token) - 1]
        if option not in chosen:
            chosen.append(option)
    return chosen


def _ask(text: str, **kwargs):
    try:
        return click.prompt(text, **kwargs)
    except click.Abort as e:
        raise PromptCancelled("prompt cancelled") from e
