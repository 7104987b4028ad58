"""
Node toolchain adapter — ask a package manager for its version.

Only yarn's version changes how jpd spells commands, but the
reporter works for any manager binary. It runs in the target
directory because yarn berry pins its version per project
(``.yarnrc.yml`` / ``packageManager``).
"""

from __future__ import annotations

import logging
from pathlib import Path

from jpd.adapters.base import VersionReporter
from jpd.adapters.shell.command import capture

logger = logging.getLogger(__name__)


class ManagerVersionReporter(VersionReporter):
    """Runs ``<manager> --version`` and returns its stdout."""

    def __init__(self, program: str = "yarn", cwd: Path | None = None, timeout: int = 10):
        self._program = program
        self._cwd = cwd
        self._timeout = timeout

    def output(self) -> str:
        out = capture([self._program, "--version"], cwd=self._cwd, timeout=self._timeout)
        logger.debug("%s --version → %s", self._program, out)
        return out

