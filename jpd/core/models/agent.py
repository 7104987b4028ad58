"""
Package manager identity models.

A ``Manager`` is one of the five supported tools. The resolver turns
probes and overrides into exactly one ``ResolvedAgent`` per
invocation; nothing downstream ever changes it.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict


class Manager(StrEnum):
    """Supported package managers, in detection priority order."""

    DENO = "deno"
    BUN = "bun"
    PNPM = "pnpm"
    YARN = "yarn"
    NPM = "npm"

    @property
    def volta_managed(self) -> bool:
        """Managers whose runtime Volta pins (deno and bun bring their own)."""
        return self in (Manager.NPM, Manager.YARN, Manager.PNPM)

    @classmethod
    def parse(cls, value: str) -> Manager | None:
        """Return the manager named ``value``, or None when it is not supported."""
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None

    @classmethod
    def names(cls) -> list[str]:
        return [m.value for m in cls]


class VersionClass(StrEnum):
    """Yarn generation. Everything that is not yarn is CLASSIC."""

    CLASSIC = "classic"
    MODERN = "modern"


class AgentSource(StrEnum):
    """Where the resolved manager came from."""

    EXPLICIT_FLAG = "explicit-flag"
    ENVIRONMENT_VARIABLE = "environment-variable"
    LOCKFILE = "lockfile"
    PATH = "path"
    USER_INSTALLED = "user-installed"


class LockfileMarker(BaseModel):
    """A marker file whose presence says which manager owns the project."""

    model_config = ConfigDict(frozen=True)

    filename: str
    manager: Manager


# Detection priority. The order is load-bearing: the first marker present wins.
LOCKFILE_CATALOG: tuple[LockfileMarker, ...] = (
    LockfileMarker(filename="deno.lock", manager=Manager.DENO),
    LockfileMarker(filename="deno.json", manager=Manager.DENO),
    LockfileMarker(filename="deno.jsonc", manager=Manager.DENO),
    LockfileMarker(filename="bun.lockb", manager=Manager.BUN),
    LockfileMarker(filename="bun.lock", manager=Manager.BUN),
    LockfileMarker(filename="pnpm-lock.yaml", manager=Manager.PNPM),
    LockfileMarker(filename="yarn.lock", manager=Manager.YARN),
    LockfileMarker(filename="package-lock.json", manager=Manager.NPM),
)


class ResolvedAgent(BaseModel):
    """The manager chosen for one invocation, and why."""

    model_config = ConfigDict(frozen=True)

    manager: Manager
    source: AgentSource
    lockfile: str | None = None     # marker that led here, if any

    def __str__(self) -> str:
        return f"{self.manager} ({self.source})"
