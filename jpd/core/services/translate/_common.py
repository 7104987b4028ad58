"""Helpers shared by the per-verb translators."""

from __future__ import annotations

from collections.abc import Iterable
from typing import NoReturn

from jpd.core.errors import TranslationError
from jpd.core.models.agent import Manager
from jpd.core.models.command import Flag, TranslationRequest, TranslationResult


def result(program: str, *parts: Iterable[str] | str) -> TranslationResult:
    """Build a result from a mix of single tokens and token sequences."""
    args: list[str] = []
    for part in parts:
        if isinstance(part, str):
            args.append(part)
        else:
            args.extend(part)
    return TranslationResult(program=program, args=tuple(args))


def flag_tokens(request: TranslationRequest, spelling: dict[Flag, str]) -> list[str]:
    """Manager spellings for the request's flags, in ``spelling`` order."""
    return [token for flag, token in spelling.items() if request.has(flag)]


def volta_wrap(request: TranslationRequest, translated: TranslationResult) -> TranslationResult:
    """Prefix ``<runtime-manager> run`` for the Node managers Volta pins.

    deno and bun manage their own runtime and are never wrapped;
    ``--no-volta`` or an absent runtime manager leaves the command as is.
    """
    if (
        request.runtime_manager
        and request.manager.volta_managed
        and not request.has(Flag.NO_VOLTA)
    ):
        return TranslationResult(
            program=request.runtime_manager,
            args=("run", translated.program, *translated.args),
        )
    return translated


def is_url(value: str) -> bool:
    return value.startswith(("http://", "https://"))


def unsupported(manager: Manager, verb: str) -> NoReturn:
    raise TranslationError(f"{verb} is not supported for {manager}")
