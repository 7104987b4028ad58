"""
Detection service — lockfile and PATH probes.

Both probes walk the same priority order (deno, bun, pnpm, yarn, npm)
and return the first hit. Neither decides anything on its own: the
resolver combines them.
"""

from __future__ import annotations

import logging
from pathlib import Path

from jpd.adapters.base import PathLookup
from jpd.core.models.agent import LOCKFILE_CATALOG, LockfileMarker, Manager

logger = logging.getLogger(__name__)

# PATH probe order mirrors the lockfile catalog
PATH_ORDER: tuple[Manager, ...] = tuple(Manager)


def detect_lockfile(directory: Path) -> LockfileMarker | None:
    """Return the highest-priority marker file present in ``directory``.

    Only ``directory`` itself is checked; parents are not searched.
    A missing or unreadable directory simply has no markers.
    """
    for marker in LOCKFILE_CATALOG:
        candidate = directory / marker.filename
        try:
            if candidate.is_file():
                logger.debug("Lockfile %s → %s", candidate, marker.manager)
                return marker
        except OSError as e:
            logger.debug("Cannot stat %s: %s", candidate, e)
    return None


def detect_on_path(
    lookup: PathLookup,
    order: tuple[Manager, ...] = PATH_ORDER,
) -> Manager | None:
    """Return the first manager in ``order`` that resolves on PATH."""
    for manager in order:
        found = lookup.which(str(manager))
        if found:
            logger.debug("PATH: %s → %s", manager, found)
            return manager
    return None


def is_installed(lookup: PathLookup, manager: Manager) -> bool:
    return lookup.which(str(manager)) is not None


def lockfiles_present(directory: Path) -> list[LockfileMarker]:
    """Every catalog marker present in ``directory``, in priority order."""
    return [m for m in LOCKFILE_CATALOG if (directory / m.filename).is_file()]
