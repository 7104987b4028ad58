"""
Adapter registry — the one place where jpd's capabilities are wired.

Verb handlers never construct a runner, prompt or version reporter
themselves; they ask the ``Toolbox`` stored on the click context. The
CLI builds the real one, tests pass their own through
``CliRunner.invoke(cli, ..., obj={"toolbox": ...})``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from jpd.adapters.base import (
    CommandPrompt,
    CommandRunner,
    MultiSelectPrompt,
    PathLookup,
    SelectPrompt,
    VersionReporter,
)
from jpd.core.models.agent import Manager

logger = logging.getLogger(__name__)


def _default_command_prompt(hint: Manager | None) -> CommandPrompt:
    from jpd.adapters.prompts import InstallCommandPrompt

    return InstallCommandPrompt(hint=hint)


def _default_select_prompt(title: str, options: list[str]) -> SelectPrompt:
    from jpd.adapters.prompts import ChoicePrompt

    return ChoicePrompt(title, options)


def _default_multi_select_prompt(title: str, options: list[str]) -> MultiSelectPrompt:
    from jpd.adapters.prompts import CheckboxPrompt

    return CheckboxPrompt(title, options)


def _default_version_reporter(manager: Manager, cwd: Path | None) -> VersionReporter:
    from jpd.adapters.languages.node import ManagerVersionReporter

    return ManagerVersionReporter(program=str(manager), cwd=cwd)


def _default_runner() -> CommandRunner:
    from jpd.adapters.shell.command import SubprocessRunner

    return SubprocessRunner()


def _default_path_lookup() -> PathLookup:
    from jpd.adapters.shell.command import ShutilPathLookup

    return ShutilPathLookup()


def _default_registry_search() -> Callable:
    from jpd.core.services.npm_registry import search_packages

    return search_packages


@dataclass
class Toolbox:
    """Capabilities available to one invocation.

    Prompt and reporter fields are factories because their arguments
    (hint, options, target directory) are only known mid-command.
    """

    runner: CommandRunner = field(default_factory=_default_runner)
    path: PathLookup = field(default_factory=_default_path_lookup)
    command_prompt: Callable[[Manager | None], CommandPrompt] = _default_command_prompt
    select_prompt: Callable[[str, list[str]], SelectPrompt] = _default_select_prompt
    multi_select_prompt: Callable[[str, list[str]], MultiSelectPrompt] = (
        _default_multi_select_prompt
    )
    version_reporter: Callable[[Manager, Path | None], VersionReporter] = (
        _default_version_reporter
    )
    registry_search: Callable = field(default_factory=_default_registry_search)

    def runtime_manager(self, enabled: bool = True) -> str | None:
        """Name of the JS runtime manager wrapper (Volta) if installed and enabled."""
        if not enabled:
            return None
        found = self.path.which("volta")
        if found:
            logger.debug("Volta found at %s", found)
            return "volta"
        return None
