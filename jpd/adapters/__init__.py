"""Adapters — bindings to processes, PATH, terminal prompts and tool versions.

Public re-exports for convenient access.
"""

from jpd.adapters.base import (
    CommandPrompt,
    CommandRunner,
    MultiSelectPrompt,
    PathLookup,
    SelectPrompt,
    VersionReporter,
)
from jpd.adapters.mock import MockRunner, StaticPathLookup, StaticVersionReporter
from jpd.adapters.registry import Toolbox

__all__ = [
    "CommandPrompt",
    "CommandRunner",
    "MockRunner",
    "MultiSelectPrompt",
    "PathLookup",
    "SelectPrompt",
    "StaticPathLookup",
    "StaticVersionReporter",
    "Toolbox",
    "VersionReporter",
]
