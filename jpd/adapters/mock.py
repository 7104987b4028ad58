"""
Mock adapters — deterministic stand-ins for every capability.

Used by the test-suite (injected through click's ``obj``) so that no
test spawns a process, searches the real PATH or waits on a terminal.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
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
from jpd.core.errors import PromptCancelled
from jpd.core.models.command import Receipt


@dataclass
class RecordedCall:
    program: str
    args: list[str]
    cwd: Path | None = None
    quiet: bool = False

    @property
    def argv(self) -> list[str]:
        return [self.program, *self.args]


class MockRunner(CommandRunner):
    """Records every command; succeeds unless told otherwise.

    Failures are keyed by program name (``set_failure("npm")``) or by
    the full argv joined with spaces (``set_failure("npm run dev")``).
    ``on_run`` hooks let a test simulate side effects such as an
    install creating node_modules.
    """

    def __init__(self, probe_result: bool = True):
        self._call_log: list[RecordedCall] = []
        self._failures: dict[str, tuple[str, int | None]] = {}
        self._probe_result = probe_result
        self._probe_results: dict[str, bool] = {}
        self._hooks: list = []

    @property
    def name(self) -> str:
        return "mock"

    @property
    def call_log(self) -> list[RecordedCall]:
        """All commands spawned through ``run`` (probes included, flagged quiet)."""
        return self._call_log

    @property
    def runs(self) -> list[list[str]]:
        """argv of every non-probe command, in order."""
        return [c.argv for c in self._call_log if not c.quiet]

    @property
    def probes(self) -> list[list[str]]:
        return [c.argv for c in self._call_log if c.quiet]

    @property
    def call_count(self) -> int:
        return len(self.runs)

    def set_failure(self, key: str, error: str = "mock failure", returncode: int | None = 1) -> None:
        """Configure a program (or exact command line) to fail."""
        self._failures[key] = (error, returncode)

    def set_probe_result(self, key: str, ok: bool) -> None:
        """Configure ``check`` for a program or exact command line."""
        self._probe_results[key] = ok

    def on_run(self, hook) -> None:
        """Register ``hook(program, args, cwd)`` called for each ``run``."""
        self._hooks.append(hook)

    def run(self, program: str, args: Sequence[str], cwd: Path | None = None) -> Receipt:
        self._call_log.append(RecordedCall(program=program, args=list(args), cwd=cwd))
        for hook in self._hooks:
            hook(program, list(args), cwd)

        line = " ".join([program, *args])
        failure = self._failures.get(line) or self._failures.get(program)
        if failure:
            error, returncode = failure
            return Receipt.failure(program=program, args=list(args), error=error, returncode=returncode)
        return Receipt.success(program=program, args=list(args))

    def check(self, program: str, args: Sequence[str], cwd: Path | None = None) -> bool:
        self._call_log.append(RecordedCall(program=program, args=list(args), cwd=cwd, quiet=True))
        line = " ".join([program, *args])
        if line in self._probe_results:
            return self._probe_results[line]
        return self._probe_results.get(program, self._probe_result)

    def reset(self) -> None:
        """Clear call log and configured failures."""
        self._call_log.clear()
        self._failures.clear()
        self._probe_results.clear()


class StaticPathLookup(PathLookup):
    """PATH that contains exactly the given executables."""

    def __init__(self, available: Iterable[str] = ()):
        self.available = set(available)
        self.queries: list[str] = []

    def which(self, name: str) -> str | None:
        self.queries.append(name)
        if name in self.available:
            return f"/usr/local/bin/{name}"
        return None


class StaticVersionReporter(VersionReporter):
    """Fixed version answer; ``fail`` makes it raise like a missing binary."""

    def __init__(self, version: str = "", fail: bool = False):
        self._version = version
        self._fail = fail
        self.calls = 0

    def output(self) -> str:
        self.calls += 1
        if self._fail:
            raise OSError(2, "No such file or directory")
        return self._version


# ── Scripted prompts ────────────────────────────────────────────


@dataclass
class ScriptedCommandPrompt(CommandPrompt):
    """Answers with ``answer``; None simulates the operator declining."""

    answer: str | None = None
    hint: str | None = None
    shown: int = 0

    def run(self) -> None:
        self.shown += 1
        if self.answer is None:
            raise PromptCancelled("prompt cancelled")

    def value(self) -> str:
        return self.answer or ""


@dataclass
class ScriptedSelectPrompt(SelectPrompt):
    answer: str | None = None
    options: list[str] = field(default_factory=list)
    shown: int = 0

    def run(self) -> None:
        self.shown += 1
        if self.answer is None:
            raise PromptCancelled("prompt cancelled")

    def value(self) -> str:
        return self.answer or ""


@dataclass
class ScriptedMultiSelectPrompt(MultiSelectPrompt):
    answers: list[str] | None = None
    options: list[str] = field(default_factory=list)
    shown: int = 0

    def run(self) -> None:
        self.shown += 1
        if self.answers is None:
            raise PromptCancelled("prompt cancelled")

    def values(self) -> list[str]:
        return list(self.answers or [])
