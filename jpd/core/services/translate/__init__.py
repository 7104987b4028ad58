"""
Translation engine — (verb, manager, version class, flags, args) → command.

Every translator is a pure function of its ``TranslationRequest``: no
filesystem, PATH or network access. Anything environmental (Volta,
yarn's version) is detected beforehand and carried in the request.

    from jpd.core.services.translate import translate
    translate(TranslationRequest(verb=Verb.INSTALL, manager=Manager.PNPM, ...))
"""

from __future__ import annotations

from collections.abc import Callable

from jpd.core.errors import TranslationError
from jpd.core.models.command import TranslationRequest, TranslationResult, Verb
from jpd.core.services.translate.agent import translate_agent
from jpd.core.services.translate.clean_install import translate_clean_install
from jpd.core.services.translate.create import starter_name, translate_create
from jpd.core.services.translate.dlx import translate_dlx
from jpd.core.services.translate.install import translate_dependency_sync, translate_install
from jpd.core.services.translate.local_exec import translate_exec
from jpd.core.services.translate.run import translate_run
from jpd.core.services.translate.uninstall import translate_uninstall
from jpd.core.services.translate.update import translate_update

TRANSLATORS: dict[Verb, Callable[[TranslationRequest], TranslationResult]] = {
    Verb.INSTALL: translate_install,
    Verb.RUN: translate_run,
    Verb.EXEC: translate_exec,
    Verb.DLX: translate_dlx,
    Verb.CREATE: translate_create,
    Verb.UPDATE: translate_update,
    Verb.UNINSTALL: translate_uninstall,
    Verb.CLEAN_INSTALL: translate_clean_install,
    Verb.AGENT: translate_agent,
}


def translate(request: TranslationRequest) -> TranslationResult:
    """Translate one request.

    Raises:
        TranslationError: The verb cannot be expressed for the manager,
            a flag combination is invalid or a required argument is missing.
    """
    translator = TRANSLATORS.get(request.verb)
    if translator is None:
        raise TranslationError(f"unknown verb {request.verb}")
    return translator(request)


__all__ = [
    "TRANSLATORS",
    "starter_name",
    "translate",
    "translate_dependency_sync",
]
