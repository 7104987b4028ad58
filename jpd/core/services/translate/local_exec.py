"""
exec — run a binary that is already installed in the project.

    npm   exec bin -- args
    pnpm  exec bin args
    yarn  bin args
    bun   x bin args
    deno  run bin args

Not to be confused with dlx, which fetches a package on the fly;
the two verbs share no code.
"""

from __future__ import annotations

from jpd.core.errors import TranslationError
from jpd.core.models.agent import Manager
from jpd.core.models.command import TranslationRequest, TranslationResult
from jpd.core.services.translate._common import result, unsupported


def translate_exec(request: TranslationRequest) -> TranslationResult:
    if not request.args or not request.args[0]:
        raise TranslationError("binary name is required for exec command")

    binary, *rest = request.args
    manager = request.manager

    if manager is Manager.NPM:
        return result("npm", "exec", binary, "--", rest)
    if manager is Manager.PNPM:
        return result("pnpm", "exec", binary, rest)
    if manager is Manager.YARN:
        return result("yarn", binary, rest)
    if manager is Manager.BUN:
        return result("bun", "x", binary, rest)
    if manager is Manager.DENO:
        return result("deno", "run", binary, rest)

    unsupported(manager, "exec")
