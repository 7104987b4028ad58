"""
Error taxonomy — every failure jpd reports to the operator.

All messages are lower case, single line and carry no trailing
period. The CLI prints ``str(err)`` verbatim, so the message is the
user-facing contract.

    JpdError
    ├── ConfigurationError   invalid override value, bad flag combination, bad .jpd.yml
    ├── DetectionError       no package manager found (after interactive recovery)
    ├── TranslationError     verb cannot be expressed for the resolved manager
    ├── ExecutionError       spawn refused by the OS or the child exited non-zero
    ├── ManifestError        package.json / deno.json unreadable or malformed
    ├── PreflightError       dependency hash could not be computed or stored
    └── PromptCancelled      the operator declined an interactive prompt
"""

from __future__ import annotations


class JpdError(Exception):
    """Base class for every error jpd raises on purpose."""

    exit_code = 1


class ConfigurationError(JpdError):
    """Invalid override, invalid flag combination or invalid config file."""


class DetectionError(JpdError):
    """No package manager could be resolved for the invocation."""


class TranslationError(JpdError):
    """A verb cannot be translated for the resolved package manager."""


class ExecutionError(JpdError):
    """The spawned process failed or could not be spawned at all.

    ``returncode`` is the child's exit status when it ran, None when
    the OS refused to start it.
    """

    def __init__(self, message: str, returncode: int | None = None):
        super().__init__(message)
        self.returncode = returncode
        if returncode:
            self.exit_code = returncode


class ManifestError(JpdError):
    """A manifest file exists but cannot be read or parsed."""


class PreflightError(JpdError):
    """The dependency preflight could not complete."""


class HashStorageUnavailable(PreflightError):
    """The dependency output directory is missing, so no hash record can live there."""


class PromptCancelled(JpdError):
    """The operator declined an interactive prompt."""
