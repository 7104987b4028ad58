"""
clean-install — reproduce node_modules exactly from the lockfile.

    npm           ci
    yarn classic  install --frozen-lockfile
    yarn modern   install --immutable
    pnpm          install --frozen-lockfile
    bun           install --frozen-lockfile
    deno          not supported
"""

from __future__ import annotations

from jpd.core.errors import TranslationError
from jpd.core.models.agent import Manager, VersionClass
from jpd.core.models.command import TranslationRequest, TranslationResult
from jpd.core.services.translate._common import result, unsupported


def translate_clean_install(request: TranslationRequest) -> TranslationResult:
    manager = request.manager

    if manager is Manager.NPM:
        return result("npm", "ci")
    if manager is Manager.YARN:
        if request.version_class is VersionClass.MODERN:
            return result("yarn", "install", "--immutable")
        return result("yarn", "install", "--frozen-lockfile")
    if manager in (Manager.PNPM, Manager.BUN):
        return result(str(manager), "install", "--frozen-lockfile")
    if manager is Manager.DENO:
        raise TranslationError("deno does not support clean-install")

    unsupported(manager, "clean-install")
