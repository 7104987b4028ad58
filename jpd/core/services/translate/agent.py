"""agent — hand the arguments to the resolved manager untouched."""

from __future__ import annotations

from jpd.core.models.command import TranslationRequest, TranslationResult
from jpd.core.services.translate._common import result


def translate_agent(request: TranslationRequest) -> TranslationResult:
    return result(str(request.manager), request.args)
