"""
Package verbs that need the operator's input before they can translate.

``install --search`` asks the npm registry and lets the operator pick
hits; ``uninstall --interactive`` offers the project's declared
dependencies. Both end up as ordinary install/uninstall requests.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable

from jpd.core.errors import ConfigurationError, JpdError, TranslationError
from jpd.core.models.command import Flag, TranslationResult, Verb
from jpd.core.services.manifest import dependency_names
from jpd.core.use_cases.dispatch import DispatchResult, dispatch_verb
from jpd.core.use_cases.session import Session

logger = logging.getLogger(__name__)


def search_and_select(session: Session, query: str) -> list[str]:
    """Search the registry for ``query`` and return the names the operator picked.

    Raises:
        TranslationError: The search found nothing.
        ExecutionError: The registry could not be reached.
        PromptCancelled: The operator declined.
    """
    hits = session.toolbox.registry_search(query)
    if not hits:
        raise TranslationError(f"no packages found for {query}")

    by_label = {hit.label: hit.name for hit in hits}
    prompt = session.toolbox.multi_select_prompt(
        f"Packages matching {query!r}", list(by_label)
    )
    prompt.run()
    return [by_label[label] for label in prompt.values() if label in by_label]


def select_dependencies(session: Session) -> list[str]:
    """Let the operator pick declared dependencies (deno: import names).

    Raises:
        TranslationError: The manifest declares nothing.
        PromptCancelled: The operator declined.
    """
    names = dependency_names(session.target_dir, session.manager)
    if not names:
        raise TranslationError("no packages found for interactive uninstall")

    prompt = session.toolbox.multi_select_prompt("Select packages to uninstall", names)
    prompt.run()
    return prompt.values()


def install_packages(
    session: Session,
    packages: Iterable[str] = (),
    flags: Iterable[Flag] = (),
    search: str | None = None,
    announce: Callable[[TranslationResult], None] | None = None,
) -> DispatchResult:
    """Install ``packages`` (or the search picks) with the given flags."""
    packages = list(packages)
    flag_set = set(flags)

    if search is not None:
        if packages:
            return DispatchResult(agent=session.agent).fail(
                ConfigurationError("the search flag cannot be combined with package arguments")
            )
        try:
            packages = search_and_select(session, search)
        except JpdError as e:
            return DispatchResult(agent=session.agent).fail(e)
        flag_set.add(Flag.INTERACTIVE)
        logger.debug("Selected from registry: %s", packages)

    return dispatch_verb(session, Verb.INSTALL, flag_set, packages, announce=announce)


def uninstall_packages(
    session: Session,
    packages: Iterable[str] = (),
    flags: Iterable[Flag] = (),
    announce: Callable[[TranslationResult], None] | None = None,
) -> DispatchResult:
    """Remove ``packages``; with the interactive flag, ask which ones first."""
    packages = list(packages)
    flag_set = set(flags)

    if Flag.INTERACTIVE in flag_set and Flag.GLOBAL not in flag_set and not packages:
        try:
            packages = select_dependencies(session)
        except JpdError as e:
            return DispatchResult(agent=session.agent).fail(e)

    return dispatch_verb(session, Verb.UNINSTALL, flag_set, packages, announce=announce)
