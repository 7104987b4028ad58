"""
Session use case — everything resolved once per invocation.

A ``Session`` bundles the resolved agent, the target directory, the
settings and the toolbox. Probes that only some verbs need (yarn's
version, Volta on PATH) run lazily, the first time a request needs
them, and are cached for the rest of the invocation.
"""

from __future__ import annotations

import logging
import os
import stat
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path

from jpd.adapters.registry import Toolbox
from jpd.core.config.loader import Settings, load_settings
from jpd.core.errors import ExecutionError
from jpd.core.models.agent import Manager, ResolvedAgent, VersionClass
from jpd.core.models.command import Flag, TranslationRequest, Verb
from jpd.core.services.resolver import Resolver
from jpd.core.services.yarn_version import detect_version_class

logger = logging.getLogger(__name__)

# Verbs whose yarn spelling depends on classic vs modern
VERSION_SENSITIVE_VERBS = frozenset({Verb.INSTALL, Verb.DLX, Verb.CREATE, Verb.CLEAN_INSTALL})

# Verbs that may be wrapped in ``volta run``
VOLTA_VERBS = frozenset({Verb.INSTALL})


@dataclass
class Session:
    agent: ResolvedAgent
    target_dir: Path
    toolbox: Toolbox
    settings: Settings = field(default_factory=Settings)
    dry_run: bool = False

    _version_class: VersionClass | None = field(default=None, repr=False)
    _runtime_manager: str | None = field(default=None, repr=False)
    _runtime_checked: bool = field(default=False, repr=False)

    @property
    def manager(self) -> Manager:
        return self.agent.manager

    @property
    def version_class(self) -> VersionClass:
        if self._version_class is None:
            reporter = None
            if self.manager is Manager.YARN:
                reporter = self.toolbox.version_reporter(self.manager, self.target_dir)
            self._version_class = detect_version_class(self.manager, reporter)
        return self._version_class

    @property
    def runtime_manager(self) -> str | None:
        if not self._runtime_checked:
            if self.manager.volta_managed:
                self._runtime_manager = self.toolbox.runtime_manager(self.settings.volta)
            self._runtime_checked = True
        return self._runtime_manager

    def request(
        self,
        verb: Verb,
        flags: Iterable[Flag] = (),
        args: Iterable[str] = (),
    ) -> TranslationRequest:
        """Build a translation request, running only the probes ``verb`` needs."""
        flag_set = frozenset(flags)
        version_class = (
            self.version_class if verb in VERSION_SENSITIVE_VERBS else VersionClass.CLASSIC
        )
        runtime_manager = (
            self.runtime_manager
            if verb in VOLTA_VERBS and Flag.NO_VOLTA not in flag_set
            else None
        )
        return TranslationRequest(
            verb=verb,
            manager=self.manager,
            version_class=version_class,
            flags=flag_set,
            args=tuple(args),
            runtime_manager=runtime_manager,
        )


def check_target_dir(target: str | Path | None) -> Path:
    """Absolute target directory; the OS error is surfaced when it is unusable.

    Raises:
        ExecutionError: ``stat DIR: no such file or directory`` and friends.
    """
    if target is None:
        return Path.cwd()

    path = Path(target).expanduser()
    try:
        st = path.stat()
    except OSError as e:
        raise ExecutionError(f"stat {target}: {(e.strerror or str(e)).lower()}") from e

    if not stat.S_ISDIR(st.st_mode):
        raise ExecutionError(f"stat {target}: not a directory")
    return path.resolve()


def open_session(
    toolbox: Toolbox,
    target: str | Path | None = None,
    explicit_agent: str | None = None,
    config_path: Path | None = None,
    dry_run: bool = False,
    environ: Mapping[str, str] | None = None,
) -> Session:
    """Validate the target, load settings and resolve the agent.

    Raises:
        JpdError: Any configuration, detection or execution error met on the way.
    """
    env = os.environ if environ is None else environ
    target_dir = check_target_dir(target)
    settings = load_settings(start_dir=target_dir, config_path=config_path, environ=env)

    resolver = Resolver(
        path=toolbox.path,
        runner=toolbox.runner,
        command_prompt=toolbox.command_prompt,
    )
    agent = resolver.resolve(target_dir, explicit=explicit_agent, environ=env)
    logger.debug("Session: %s in %s", agent, target_dir)

    return Session(
        agent=agent,
        target_dir=target_dir,
        toolbox=toolbox,
        settings=settings,
        dry_run=dry_run,
    )
