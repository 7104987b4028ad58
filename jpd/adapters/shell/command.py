"""
Subprocess runner — spawn package managers with the terminal attached.

The manager's own output is the product here, so ``run`` never
captures stdout/stderr: the child inherits the terminal and its
output passes through unmodified. Interrupts are delivered to the
child by the OS process group; jpd just waits for it.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
import time
from collections.abc import Sequence
from pathlib import Path

from jpd.adapters.base import CommandRunner, PathLookup
from jpd.core.models.command import Receipt

logger = logging.getLogger(__name__)


class SubprocessRunner(CommandRunner):
    """Run commands with ``subprocess.run`` and inherited stdio."""

    def __init__(self, probe_timeout: int = 60):
        self._probe_timeout = probe_timeout

    @property
    def name(self) -> str:
        return "subprocess"

    def run(self, program: str, args: Sequence[str], cwd: Path | None = None) -> Receipt:
        argv = [program, *args]
        logger.debug("Executing: %s (cwd=%s)", argv, cwd)
        start = time.monotonic()

        try:
            result = subprocess.run(argv, cwd=cwd, check=False)
        except OSError as e:
            # Spawn refused: missing binary, bad cwd, permissions
            return Receipt.failure(
                program=program,
                args=list(args),
                cwd=str(cwd) if cwd else None,
                error=_os_message(e, program, cwd),
            )

        elapsed_ms = int((time.monotonic() - start) * 1000)
        if result.returncode == 0:
            return Receipt.success(
                program=program,
                args=list(args),
                cwd=str(cwd) if cwd else None,
                duration_ms=elapsed_ms,
            )

        return Receipt.failure(
            program=program,
            args=list(args),
            cwd=str(cwd) if cwd else None,
            error=f"{program} exited with status {result.returncode}",
            returncode=result.returncode,
            duration_ms=elapsed_ms,
        )

    def check(self, program: str, args: Sequence[str], cwd: Path | None = None) -> bool:
        argv = [program, *args]
        logger.debug("Probing: %s (cwd=%s)", argv, cwd)
        try:
            result = subprocess.run(
                argv,
                cwd=cwd,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                timeout=self._probe_timeout,
                check=False,
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            logger.debug("Probe %s failed: %s", argv, e)
            return False
        return result.returncode == 0


class ShutilPathLookup(PathLookup):
    """PATH lookup through ``shutil.which``."""

    def which(self, name: str) -> str | None:
        return shutil.which(name)


def capture(argv: Sequence[str], cwd: Path | None = None, timeout: int = 15) -> str:
    """Run a short command and return its stripped stdout.

    Raises:
        OSError: If the program cannot be started.
        RuntimeError: If it exits non-zero or times out.
    """
    try:
        result = subprocess.run(
            list(argv),
            cwd=cwd,
            capture_output=True,
            text=True,
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired as e:
        raise RuntimeError(f"{argv[0]} timed out after {timeout}s") from e

    if result.returncode != 0:
        raise RuntimeError(
            result.stderr.strip() or f"{argv[0]} exited with status {result.returncode}"
        )
    return result.stdout.strip()


def _os_message(err: OSError, program: str, cwd: Path | None) -> str:
    reason = (err.strerror or str(err)).lower()
    if cwd is not None and not Path(cwd).is_dir():
        return f"chdir {cwd}: {reason}"
    return f"exec {program}: {reason}"
