"""
update — bring dependencies up to date.

    npm   update [pkgs] [--global]
          --latest with pkgs → install pkg@latest... [--global]
    yarn  upgrade | upgrade-interactive [pkgs] [--global] [--latest]
    pnpm  update [--interactive] [pkgs] [--global] [--latest]
    bun   update [pkgs] [--global] [--latest]
    deno  outdated [-i] [--global] [--latest] [pkgs]

npm and bun have no interactive mode and reject ``--interactive``.
"""

from __future__ import annotations

from jpd.core.errors import TranslationError
from jpd.core.models.agent import Manager
from jpd.core.models.command import Flag, TranslationRequest, TranslationResult
from jpd.core.services.translate._common import flag_tokens, result, unsupported

_TAIL_FLAGS = {
    Flag.GLOBAL: "--global",
    Flag.LATEST: "--latest",
}


def translate_update(request: TranslationRequest) -> TranslationResult:
    manager = request.manager
    pkgs = list(request.args)
    interactive = request.has(Flag.INTERACTIVE)
    global_flag = ["--global"] if request.has(Flag.GLOBAL) else []

    if manager is Manager.NPM:
        if interactive:
            raise TranslationError("npm does not support interactive updates")
        if request.has(Flag.LATEST) and pkgs:
            return result("npm", "install", [f"{p}@latest" for p in pkgs], global_flag)
        return result("npm", "update", pkgs, global_flag)

    if manager is Manager.YARN:
        verb = "upgrade-interactive" if interactive else "upgrade"
        return result("yarn", verb, pkgs, flag_tokens(request, _TAIL_FLAGS))

    if manager is Manager.PNPM:
        head = ["--interactive"] if interactive else []
        return result("pnpm", "update", head, pkgs, flag_tokens(request, _TAIL_FLAGS))

    if manager is Manager.BUN:
        if interactive:
            raise TranslationError("bun does not support interactive updates")
        return result("bun", "update", pkgs, flag_tokens(request, _TAIL_FLAGS))

    if manager is Manager.DENO:
        head = ["-i"] if interactive else []
        return result("deno", "outdated", head, flag_tokens(request, _TAIL_FLAGS), pkgs)

    unsupported(manager, "update")
