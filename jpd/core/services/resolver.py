"""
Package manager resolver — one ResolvedAgent per invocation.

Resolution is an ordered chain of steps. Each step either returns a
``ResolvedAgent`` or returns None to defer to the next one:

    1. override     --agent flag, then JPD_AGENT (invalid value is fatal)
    2. lockfile     marker in the target directory, confirmed on PATH
    3. path         first supported manager on PATH
    4. recovery     operator types an install command, jpd runs it

Every filesystem probe uses the target directory (``--cwd``), never
the process working directory. An explicit override is trusted as is
and never checked against PATH.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from pathlib import Path

from jpd.adapters.base import CommandPrompt, CommandRunner, PathLookup
from jpd.core.errors import (
    ConfigurationError,
    DetectionError,
    ExecutionError,
    PromptCancelled,
)
from jpd.core.models.agent import AgentSource, Manager, ResolvedAgent
from jpd.core.services.detection import (
    detect_lockfile,
    detect_on_path,
    is_installed,
    lockfiles_present,
)

logger = logging.getLogger(__name__)

AGENT_ENV_VAR = "JPD_AGENT"
NO_MANAGER_MESSAGE = "no supported javascript package manager found"

# program, sub-verb, target
MIN_INSTALL_COMMAND_WORDS = 3


@dataclass
class _Attempt:
    """Mutable scratch state shared by the steps of one resolution."""

    target_dir: Path
    explicit: str | None
    environ: Mapping[str, str]
    hint: Manager | None = None         # lockfile manager that is not installed
    hint_lockfile: str | None = None


class Resolver:
    """Resolve the package manager for a target directory.

    Args:
        path: PATH lookup capability.
        runner: Runs the operator's install command during recovery.
        command_prompt: Factory for the recovery prompt; receives the
            lockfile manager that was missing, if any. None disables
            recovery (resolution then fails after step 3).
    """

    def __init__(
        self,
        path: PathLookup,
        runner: CommandRunner | None = None,
        command_prompt: Callable[[Manager | None], CommandPrompt] | None = None,
    ):
        self._path = path
        self._runner = runner
        self._command_prompt = command_prompt

    def resolve(
        self,
        target_dir: Path,
        explicit: str | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> ResolvedAgent:
        """Run the chain and return the first agent found.

        Raises:
            ConfigurationError: The flag or JPD_AGENT names an unknown manager.
            DetectionError: Nothing found and recovery declined or failed.
            ExecutionError: The operator's install command failed.
        """
        attempt = _Attempt(
            target_dir=target_dir,
            explicit=explicit,
            environ=os.environ if environ is None else environ,
        )

        steps = (
            ("override", self._from_override),
            ("lockfile", self._from_lockfile),
            ("path", self._from_path),
            ("recovery", self._from_recovery),
        )
        for name, step in steps:
            agent = step(attempt)
            if agent is not None:
                logger.info("Using %s (%s)", agent.manager, agent.source)
                return agent
            logger.debug("Resolver step %s deferred", name)

        raise DetectionError(NO_MANAGER_MESSAGE)

    # ── Steps ───────────────────────────────────────────────────

    def _from_override(self, attempt: _Attempt) -> ResolvedAgent | None:
        if attempt.explicit:
            manager = Manager.parse(attempt.explicit)
            if manager is None:
                raise ConfigurationError(
                    f"invalid agent {attempt.explicit} use one of {', '.join(Manager.names())}"
                )
            return ResolvedAgent(manager=manager, source=AgentSource.EXPLICIT_FLAG)

        raw = attempt.environ.get(AGENT_ENV_VAR, "").strip()
        if raw:
            manager = Manager.parse(raw)
            if manager is None:
                raise ConfigurationError(
                    f"{AGENT_ENV_VAR} is set to {raw} use one of {', '.join(Manager.names())}"
                )
            return ResolvedAgent(manager=manager, source=AgentSource.ENVIRONMENT_VARIABLE)

        return None

    def _from_lockfile(self, attempt: _Attempt) -> ResolvedAgent | None:
        marker = detect_lockfile(attempt.target_dir)
        if marker is None:
            return None

        others = {m.manager for m in lockfiles_present(attempt.target_dir)} - {marker.manager}
        if others:
            logger.info(
                "Lockfiles for %s also present in %s, %s wins",
                ", ".join(sorted(others)), attempt.target_dir, marker.manager,
            )

        if is_installed(self._path, marker.manager):
            return ResolvedAgent(
                manager=marker.manager,
                source=AgentSource.LOCKFILE,
                lockfile=marker.filename,
            )

        attempt.hint = marker.manager
        attempt.hint_lockfile = marker.filename
        logger.warning(
            "%s points to %s but %s is not installed, falling back to PATH detection",
            marker.filename, marker.manager, marker.manager,
        )
        return None

    def _from_path(self, attempt: _Attempt) -> ResolvedAgent | None:
        manager = detect_on_path(self._path)
        if manager is None:
            return None
        if attempt.hint is not None:
            logger.warning("Using %s instead of %s", manager, attempt.hint)
        return ResolvedAgent(manager=manager, source=AgentSource.PATH)

    def _from_recovery(self, attempt: _Attempt) -> ResolvedAgent | None:
        if self._command_prompt is None or self._runner is None:
            return None

        prompt = self._command_prompt(attempt.hint)
        try:
            prompt.run()
        except PromptCancelled as e:
            raise DetectionError(NO_MANAGER_MESSAGE) from e

        words = prompt.value().split()
        if len(words) < MIN_INSTALL_COMMAND_WORDS:
            raise DetectionError(
                f"install command must have at least {MIN_INSTALL_COMMAND_WORDS} words "
                f"like npm install -g pnpm got {' '.join(words) or 'nothing'}"
            )
        if attempt.hint is not None and not _mentions(words, attempt.hint):
            raise DetectionError(
                f"install command must install {attempt.hint} to match {attempt.hint_lockfile}"
            )

        logger.info("Running install command: %s", " ".join(words))
        receipt = self._runner.run(words[0], words[1:], cwd=attempt.target_dir)
        if not receipt.ok:
            raise ExecutionError(receipt.error or "install command failed", receipt.returncode)

        if attempt.hint is not None and is_installed(self._path, attempt.hint):
            manager: Manager | None = attempt.hint
        else:
            manager = detect_on_path(self._path) or _named_manager(words)
        if manager is None:
            raise DetectionError(NO_MANAGER_MESSAGE)
        return ResolvedAgent(manager=manager, source=AgentSource.USER_INSTALLED)


def _package_name(word: str) -> str:
    """``pnpm@8`` → ``pnpm``; scoped names keep their leading ``@``."""
    if word.startswith("@"):
        return word
    return word.split("@", 1)[0]


def _mentions(words: list[str], manager: Manager) -> bool:
    return any(str(manager) in w.lower() for w in words)


def _named_manager(words: list[str]) -> Manager | None:
    """The last supported manager named in an install command."""
    for word in reversed(words):
        manager = Manager.parse(_package_name(word))
        if manager is not None:
            return manager
    return None
