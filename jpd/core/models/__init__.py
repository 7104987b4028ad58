"""Domain models — the values that flow between resolver, engine and dispatcher."""

from jpd.core.models.agent import (
    AgentSource,
    LockfileMarker,
    Manager,
    ResolvedAgent,
    VersionClass,
)
from jpd.core.models.command import (
    Flag,
    Receipt,
    TranslationRequest,
    TranslationResult,
    Verb,
)

__all__ = [
    "AgentSource",
    "Flag",
    "LockfileMarker",
    "Manager",
    "Receipt",
    "ResolvedAgent",
    "TranslationRequest",
    "TranslationResult",
    "Verb",
    "VersionClass",
]
