"""
uninstall — remove packages.

    npm             uninstall pkgs [--global]
    yarn/pnpm/bun   remove pkgs [--global]
    deno            remove pkgs | uninstall pkgs (global)

``--global`` and ``--interactive`` cannot be combined: the interactive
picker lists the project's own dependencies, not global ones.
"""

from __future__ import annotations

from jpd.core.errors import TranslationError
from jpd.core.models.agent import Manager
from jpd.core.models.command import Flag, TranslationRequest, TranslationResult
from jpd.core.services.translate._common import result, unsupported


def translate_uninstall(request: TranslationRequest) -> TranslationResult:
    if request.has(Flag.GLOBAL) and request.has(Flag.INTERACTIVE):
        raise TranslationError("global and interactive flags cannot be used together")
    if not request.args:
        if request.has(Flag.INTERACTIVE):
            raise TranslationError("no packages were selected")
        raise TranslationError("one or more packages is required")

    manager = request.manager
    pkgs = list(request.args)
    global_flag = ["--global"] if request.has(Flag.GLOBAL) else []

    if manager is Manager.NPM:
        return result("npm", "uninstall", pkgs, global_flag)
    if manager in (Manager.YARN, Manager.PNPM, Manager.BUN):
        return result(str(manager), "remove", pkgs, global_flag)
    if manager is Manager.DENO:
        if request.has(Flag.GLOBAL):
            return result("deno", "uninstall", pkgs)
        return result("deno", "remove", pkgs)

    unsupported(manager, "uninstall")
