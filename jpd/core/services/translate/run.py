"""
run — execute a package.json script or a deno task.

    npm   run [--if-present] script [-- args]
    pnpm  run [--if-present] script [-- args]
    yarn  run script args
    bun   run script args
    deno  task script args

Whether the script exists is decided before translation; by the time
a request reaches here the first argument is the script name.
"""

from __future__ import annotations

from jpd.core.errors import TranslationError
from jpd.core.models.agent import Manager
from jpd.core.models.command import Flag, TranslationRequest, TranslationResult
from jpd.core.services.translate._common import result, unsupported


def translate_run(request: TranslationRequest) -> TranslationResult:
    if not request.args or not request.args[0]:
        raise TranslationError("script name is required")

    script, *rest = request.args
    if "--eval" in rest:
        raise TranslationError("don't pass --eval here use the exec command instead")

    manager = request.manager

    if manager in (Manager.NPM, Manager.PNPM):
        if_present = ["--if-present"] if request.has(Flag.IF_PRESENT) else []
        passthrough = ["--", *rest] if rest else []
        return result(str(manager), "run", if_present, script, passthrough)

    if manager is Manager.YARN:
        return result("yarn", "run", script, rest)

    if manager is Manager.BUN:
        return result("bun", "run", script, rest)

    if manager is Manager.DENO:
        return result("deno", "task", script, rest)

    unsupported(manager, "run")
