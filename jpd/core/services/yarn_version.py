"""
Yarn version classification — classic (v1) vs modern (berry, v2+).

The classification is fail-open: anything that cannot be read or
parsed is CLASSIC, the spelling every yarn understands.
"""

from __future__ import annotations

import logging
import re

from jpd.adapters.base import VersionReporter
from jpd.core.models.agent import Manager, VersionClass

logger = logging.getLogger(__name__)

_VERSION_RE = re.compile(r"(\d+)(?:\.(\d+))?")


def parse_version(raw: str) -> tuple[int, int] | None:
    """Extract (major, minor) from a version report.

    Accepts ``1.22.19``, ``v4.1.0``, ``berry-3.6.4`` and reports with
    leading noise; returns None when there is no number at all.
    """
    text = raw.strip()
    if text.startswith("berry-"):
        text = text[len("berry-"):]
    match = _VERSION_RE.search(text)
    if not match:
        return None
    return int(match.group(1)), int(match.group(2) or 0)


def classify(raw: str) -> VersionClass:
    parsed = parse_version(raw)
    if parsed is None or parsed[0] <= 1:
        return VersionClass.CLASSIC
    return VersionClass.MODERN


def detect_version_class(manager: Manager, reporter: VersionReporter | None) -> VersionClass:
    """Ask ``reporter`` for yarn's version; other managers are always CLASSIC.

    The reporter is only consulted for yarn, so npm/pnpm/bun/deno never
    pay for a version probe.
    """
    if manager is not Manager.YARN or reporter is None:
        return VersionClass.CLASSIC

    try:
        raw = reporter.output()
    except (OSError, RuntimeError) as e:
        logger.debug("yarn version report failed, assuming classic: %s", e)
        return VersionClass.CLASSIC

    version_class = classify(raw)
    logger.debug("yarn %s → %s", raw.strip(), version_class)
    return version_class
