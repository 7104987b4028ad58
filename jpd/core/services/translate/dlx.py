"""
dlx — download a package and run it without adding it to the project.

    npm           npx pkg args
    pnpm          pnpm dlx pkg args
    yarn modern   yarn dlx pkg args
    yarn classic  not supported (yarn 1 has no dlx)
    bun           bunx pkg args
    deno          deno run url args
"""

from __future__ import annotations

from jpd.core.errors import TranslationError
from jpd.core.models.agent import Manager, VersionClass
from jpd.core.models.command import TranslationRequest, TranslationResult
from jpd.core.services.translate._common import is_url, result, unsupported


def translate_dlx(request: TranslationRequest) -> TranslationResult:
    if not request.args or not request.args[0]:
        raise TranslationError("package name is required for dlx command")

    package, *rest = request.args
    manager = request.manager

    if manager is Manager.NPM:
        return result("npx", package, rest)
    if manager is Manager.PNPM:
        return result("pnpm", "dlx", package, rest)
    if manager is Manager.YARN:
        if request.version_class is VersionClass.MODERN:
            return result("yarn", "dlx", package, rest)
        raise TranslationError("yarn classic does not support dlx use npm or upgrade yarn")
    if manager is Manager.BUN:
        return result("bunx", package, rest)
    if manager is Manager.DENO:
        if not is_url(package):
            raise TranslationError(f"deno dlx requires a url got {package}")
        return result("deno", "run", package, rest)

    unsupported(manager, "dlx")
