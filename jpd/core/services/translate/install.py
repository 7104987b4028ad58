"""
install — add packages, or install everything the manifest declares.

    npm   install [pkgs]  --save-dev --global --omit=dev --package-lock-only
    yarn  install | add pkgs  --dev --global --production --frozen-lockfile (modern: --immutable)
    pnpm  install | add pkgs  --save-dev --global --prod --frozen-lockfile
    bun   install | add pkgs  --development --global --production --frozen-lockfile
    deno  add pkgs [--dev] | install --global pkgs

npm, yarn and pnpm are wrapped in ``volta run`` when Volta is present.
"""

from __future__ import annotations

from jpd.core.errors import TranslationError
from jpd.core.models.agent import Manager, VersionClass
from jpd.core.models.command import Flag, TranslationRequest, TranslationResult
from jpd.core.services.translate._common import flag_tokens, result, unsupported, volta_wrap

_NPM_FLAGS = {
    Flag.DEV: "--save-dev",
    Flag.GLOBAL: "--global",
    Flag.PRODUCTION: "--omit=dev",
    Flag.FROZEN: "--package-lock-only",
}
_YARN_FLAGS = {
    Flag.DEV: "--dev",
    Flag.GLOBAL: "--global",
    Flag.PRODUCTION: "--production",
}
_PNPM_FLAGS = {
    Flag.DEV: "--save-dev",
    Flag.GLOBAL: "--global",
    Flag.PRODUCTION: "--prod",
    Flag.FROZEN: "--frozen-lockfile",
}
_BUN_FLAGS = {
    Flag.DEV: "--development",
    Flag.GLOBAL: "--global",
    Flag.PRODUCTION: "--production",
    Flag.FROZEN: "--frozen-lockfile",
}


def translate_install(request: TranslationRequest) -> TranslationResult:
    if request.has(Flag.INTERACTIVE) and not request.args:
        raise TranslationError("no packages were selected")
    return volta_wrap(request, _install(request))


def _install(request: TranslationRequest) -> TranslationResult:
    manager = request.manager
    pkgs = request.args
    verb = "add" if pkgs else "install"

    if manager is Manager.NPM:
        return result("npm", "install", pkgs, flag_tokens(request, _NPM_FLAGS))

    if manager is Manager.YARN:
        tokens = flag_tokens(request, _YARN_FLAGS)
        if request.has(Flag.FROZEN):
            if request.version_class is VersionClass.MODERN:
                tokens.append("--immutable")
            else:
                tokens.append("--frozen-lockfile")
        return result("yarn", verb, pkgs, tokens)

    if manager is Manager.PNPM:
        return result("pnpm", verb, pkgs, flag_tokens(request, _PNPM_FLAGS))

    if manager is Manager.BUN:
        return result("bun", verb, pkgs, flag_tokens(request, _BUN_FLAGS))

    if manager is Manager.DENO:
        if not pkgs:
            raise TranslationError("for deno one or more packages is required")
        if request.has(Flag.PRODUCTION):
            raise TranslationError("deno doesn't support prod")
        if request.has(Flag.GLOBAL):
            return result("deno", "install", "--global", pkgs)
        return result("deno", "add", pkgs, ["--dev"] if request.has(Flag.DEV) else [])

    unsupported(manager, "install")


def translate_dependency_sync(request: TranslationRequest, config_file: str = "deno.json") -> TranslationResult:
    """The install a preflight runs: everything declared, no packages added.

    Node managers use the plain install mapping; deno caches the
    imports of its config file instead.
    """
    if request.manager is Manager.DENO:
        return result("deno", "cache", config_file)
    plain = request.model_copy(update={"args": (), "flags": request.flags & {Flag.NO_VOLTA}})
    return volta_wrap(plain, _install(plain))
