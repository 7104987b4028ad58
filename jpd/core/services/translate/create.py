"""
create — scaffold a project from a ``create-*`` starter.

Starter names are normalised before dispatch: ``vite`` and
``create-vite`` both become ``create-vite``, ``vite@5`` becomes
``create-vite@5`` and scoped names (``@scope/pkg``) are left alone.
Only deno takes a URL, and it takes nothing else.

    npm           npm exec create-x -- args     (exactly one ``--``)
    pnpm          pnpm exec create-x args
    yarn modern   yarn dlx create-x args
    yarn classic  npx create-x args
    bun           bunx create-x args
    deno          deno run url args
"""

from __future__ import annotations

from jpd.core.errors import TranslationError
from jpd.core.models.agent import Manager, VersionClass
from jpd.core.models.command import TranslationRequest, TranslationResult
from jpd.core.services.translate._common import is_url, result, unsupported

CREATE_PREFIX = "create-"


def starter_name(name: str) -> str:
    """Prefix ``create-`` unless the name already has it or is scoped."""
    if name.startswith("@") or name.startswith(CREATE_PREFIX):
        return name
    return CREATE_PREFIX + name


def translate_create(request: TranslationRequest) -> TranslationResult:
    if not request.args or not request.args[0]:
        raise TranslationError("package name is required for create command")

    name, *rest = request.args
    manager = request.manager

    if manager is Manager.DENO:
        if not is_url(name):
            raise TranslationError(f"deno create requires a url got {name}")
        return result("deno", "run", name, rest)

    if is_url(name):
        raise TranslationError(f"urls are not supported for {manager} use deno instead")

    starter = starter_name(name)

    if manager is Manager.NPM:
        return result("npm", "exec", starter, "--", _drop_first_separator(rest))
    if manager is Manager.PNPM:
        return result("pnpm", "exec", starter, rest)
    if manager is Manager.YARN:
        if request.version_class is VersionClass.MODERN:
            return result("yarn", "dlx", starter, rest)
        return result("npx", starter, rest)
    if manager is Manager.BUN:
        return result("bunx", starter, rest)

    unsupported(manager, "create")


def _drop_first_separator(args: list[str]) -> list[str]:
    """npm gets its own ``--``; a user-typed one is dropped, later ones are the starter's."""
    if "--" not in args:
        return args
    i = args.index("--")
    return args[:i] + args[i + 1:]
