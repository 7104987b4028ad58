"""
Adapter base — the capability contracts between jpd's core and the outside world.

The core never spawns a process, reads a terminal or searches PATH
directly. It asks one of these narrow capabilities, so every core
path can be driven in tests by a deterministic stand-in.

    CommandRunner       spawn a program (inherited stdio) or probe it quietly
    PathLookup          resolve an executable name on PATH
    VersionReporter     report a manager's version string
    CommandPrompt       free-text prompt (install command recovery)
    SelectPrompt        single choice (script / task picker)
    MultiSelectPrompt   multiple choice (packages to install / uninstall)
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from pathlib import Path

from jpd.core.models.command import Receipt


class CommandRunner(ABC):
    """Spawns manager processes.

    ``run`` NEVER raises for a failing child: a non-zero exit or an OS
    refusal is captured in the Receipt with status='failed', with the
    OS message preserved in ``error``.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Runner identifier (e.g. 'subprocess', 'mock')."""

    @abstractmethod
    def run(self, program: str, args: Sequence[str], cwd: Path | None = None) -> Receipt:
        """Run ``program args`` with the terminal attached and wait for it."""

    @abstractmethod
    def check(self, program: str, args: Sequence[str], cwd: Path | None = None) -> bool:
        """Run ``program args`` with output discarded; True on exit status 0."""

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"


class PathLookup(ABC):
    @abstractmethod
    def which(self, name: str) -> str | None:
        """Absolute path of ``name`` on PATH, or None."""


class VersionReporter(ABC):
    @abstractmethod
    def output(self) -> str:
        """Raw version report. Raises OSError or RuntimeError when unavailable."""


class CommandPrompt(ABC):
    """Asks the operator for a command line."""

    @abstractmethod
    def run(self) -> None:
        """Show the prompt. Raises PromptCancelled when the operator declines."""

    @abstractmethod
    def value(self) -> str:
        """The text entered by the last ``run``."""


class SelectPrompt(ABC):
    """Lets the operator pick one option."""

    @abstractmethod
    def run(self) -> None:
        """Show the prompt. Raises PromptCancelled when the operator declines."""

    @abstractmethod
    def value(self) -> str:
        """The option chosen by the last ``run``."""


class MultiSelectPrompt(ABC):
    """Lets the operator pick any number of options."""

    @abstractmethod
    def run(self) -> None:
        """Show the prompt. Raises PromptCancelled when the operator declines."""

    @abstractmethod
    def values(self) -> list[str]:
        """The options chosen by the last ``run`` (possibly empty)."""
