"""
Translation and execution models — the engine's I/O contract.

A ``TranslationRequest`` goes into the translation engine, a
``TranslationResult`` comes out, and the command runner turns the
result into a ``Receipt``. Requests and results are frozen values:
two equal requests always translate to two equal results.
"""

from __future__ import annotations

import shlex
from datetime import UTC, datetime
from enum import StrEnum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from jpd.core.models.agent import Manager, VersionClass


def _now_iso() -> str:
    """Current UTC time as ISO string."""
    return datetime.now(UTC).isoformat()


class Verb(StrEnum):
    """Uniform actions, independent of the manager that ends up running them."""

    INSTALL = "install"
    RUN = "run"
    EXEC = "exec"
    DLX = "dlx"
    CREATE = "create"
    UPDATE = "update"
    UNINSTALL = "uninstall"
    CLEAN_INSTALL = "clean-install"
    AGENT = "agent"


class Flag(StrEnum):
    """Manager-neutral intents a verb handler can pass to the engine."""

    DEV = "dev"
    GLOBAL = "global"
    PRODUCTION = "production"
    FROZEN = "frozen"
    INTERACTIVE = "interactive"
    LATEST = "latest"
    IF_PRESENT = "if-present"
    NO_VOLTA = "no-volta"


class TranslationRequest(BaseModel):
    """Everything the engine needs to spell one verb for one manager.

    ``runtime_manager`` is the detected Volta binary name (or None);
    detection happens before translation so the engine stays pure.
    """

    model_config = ConfigDict(frozen=True)

    verb: Verb
    manager: Manager
    version_class: VersionClass = VersionClass.CLASSIC
    flags: frozenset[Flag] = frozenset()
    args: tuple[str, ...] = ()
    runtime_manager: str | None = None

    def has(self, flag: Flag) -> bool:
        return flag in self.flags


class TranslationResult(BaseModel):
    """A concrete program and argument vector, ready to spawn."""

    model_config = ConfigDict(frozen=True)

    program: str
    args: tuple[str, ...] = ()

    @property
    def argv(self) -> list[str]:
        return [self.program, *self.args]

    def __str__(self) -> str:
        return shlex.join(self.argv)


class Receipt(BaseModel):
    """Result of one spawned command.

    Runners never raise for a non-zero exit: the failure is captured
    here and the dispatcher decides what it means.
    """

    program: str
    args: list[str] = Field(default_factory=list)
    cwd: str | None = None
    status: Literal["ok", "skipped", "failed"] = "ok"

    started_at: str = Field(default_factory=_now_iso)
    duration_ms: int = 0

    returncode: int | None = None
    output: str = ""
    error: str | None = None

    @property
    def ok(self) -> bool:
        """Whether the command succeeded."""
        return self.status == "ok"

    @property
    def failed(self) -> bool:
        """Whether the command failed."""
        return self.status == "failed"

    @classmethod
    def success(
        cls,
        program: str,
        args: list[str],
        output: str = "",
        **kwargs: Any,
    ) -> Receipt:
        """Create a success receipt."""
        return cls(
            program=program,
            args=args,
            status="ok",
            returncode=0,
            output=output,
            **kwargs,
        )

    @classmethod
    def failure(
        cls,
        program: str,
        args: list[str],
        error: str,
        **kwargs: Any,
    ) -> Receipt:
        """Create a failure receipt."""
        return cls(
            program=program,
            args=args,
            status="failed",
            error=error,
            **kwargs,
        )

    @classmethod
    def skip(
        cls,
        program: str,
        args: list[str],
        reason: str = "",
        **kwargs: Any,
    ) -> Receipt:
        """Create a skip receipt (dry run)."""
        return cls(
            program=program,
            args=args,
            status="skipped",
            output=reason,
            **kwargs,
        )
