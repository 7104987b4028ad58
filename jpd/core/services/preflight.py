"""
Auto-install preflight — should ``run dev`` install dependencies first?

Only the ``dev`` and ``start`` scripts are guarded. The checks run in
a fixed order and stop at the first one that asks for an install:

    1. node_modules exists          (Node managers, skipped under Yarn PnP)
    2. manifest exists              (a missing package.json means "install")
    3. imports resolve              (deno: ``deno info --json`` per import)
    4. declared dependencies exist  (Node managers, skipped under Yarn PnP;
                                     scanning stops after N missing)
    5. dependency hash matches      (missing record counts as a mismatch)

The decision never installs anything itself; the run use case does,
then refreshes the hash record.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from jpd.adapters.base import CommandRunner
from jpd.core.config.loader import Settings
from jpd.core.errors import HashStorageUnavailable
from jpd.core.models.agent import Manager
from jpd.core.services.deps_hash import DEPS_DIR, compute_hash, read_hash
from jpd.core.services.manifest import (
    declared_dependencies,
    declared_imports,
    load_deno_config,
    load_package_json,
)

logger = logging.getLogger(__name__)

AUTO_INSTALL_SCRIPTS = frozenset({"dev", "start"})

# Yarn Plug'n'Play: dependencies live in the cache, node_modules is expected to be absent
PNP_MARKERS = (".pnp.cjs", ".pnp.js", ".pnp.data.json")


@dataclass
class PreflightDecision:
    """Outcome of the preflight checks."""

    install: bool
    reason: str
    checks: list[str] = field(default_factory=list)
    missing: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "install": self.install,
            "reason": self.reason,
            "checks": list(self.checks),
            "missing": list(self.missing),
        }


def is_guarded_script(script: str, enabled: bool = True) -> bool:
    """Whether ``script`` gets a preflight at all."""
    return enabled and script in AUTO_INSTALL_SCRIPTS


def is_pnp(directory: Path) -> bool:
    return any((directory / marker).is_file() for marker in PNP_MARKERS)


def missing_dependencies(directory: Path, package: dict, limit: int) -> list[str]:
    """Declared dependencies with no node_modules entry, at most ``limit`` of them."""
    missing: list[str] = []
    deps_dir = directory / DEPS_DIR
    for name in sorted(declared_dependencies(package)):
        if not (deps_dir / name).exists():
            missing.append(name)
            if len(missing) >= limit:
                logger.debug("Stopped dependency scan after %d missing", limit)
                break
    return missing


class Preflight:
    """Decide whether dependencies must be installed before a script runs.

    Args:
        runner: Used only for the quiet deno import probes.
        settings: Supplies the scan limits.
    """

    def __init__(self, runner: CommandRunner, settings: Settings | None = None):
        self._runner = runner
        self._settings = settings or Settings()

    def decide(self, directory: Path, manager: Manager) -> PreflightDecision:
        """Run the checks in order.

        Raises:
            ManifestError: If the manifest exists but is malformed.
        """
        decision = PreflightDecision(install=False, reason="dependencies are up to date")

        if manager is Manager.DENO:
            early = self._deno_checks(directory, decision)
        else:
            early = self._node_checks(directory, manager, decision)
        if early is not None:
            return early

        decision.checks.append("hash")
        current = compute_hash(directory, manager)
        try:
            stored = read_hash(directory)
        except HashStorageUnavailable as e:
            logger.debug("Hash check skipped: %s", e)
            return decision

        if not stored:
            return _install(decision, "no dependency hash recorded")
        if current is not None and stored != current:
            return _install(decision, "dependencies changed since the last install")
        return decision

    # ── Node managers ───────────────────────────────────────────

    def _node_checks(
        self, directory: Path, manager: Manager, decision: PreflightDecision
    ) -> PreflightDecision | None:
        pnp = manager is Manager.YARN and is_pnp(directory)
        if pnp:
            logger.debug("Yarn Plug'n'Play project, skipping node_modules checks")
        else:
            decision.checks.append("node_modules")
            if not (directory / DEPS_DIR).is_dir():
                return _install(decision, f"{DEPS_DIR} is missing")

        decision.checks.append("manifest")
        package = load_package_json(directory)
        if package is None:
            return _install(decision, "package.json is missing")

        if not pnp:
            decision.checks.append("dependencies")
            missing = missing_dependencies(
                directory, package, self._settings.missing_dependency_limit
            )
            if missing:
                decision.missing = missing
                return _install(decision, f"missing dependencies {', '.join(missing)}")
        return None

    # ── Deno ────────────────────────────────────────────────────

    def _deno_checks(self, directory: Path, decision: PreflightDecision) -> PreflightDecision | None:
        decision.checks.append("manifest")
        config = load_deno_config(directory)
        if config is None:
            # Nothing declared, nothing to cache
            decision.reason = "no deno config"
            return decision

        decision.checks.append("imports")
        specifiers = list(declared_imports(config).values())[: self._settings.import_probe_limit]
        for specifier in specifiers:
            if not self._runner.check("deno", ["info", "--json", specifier], cwd=directory):
                decision.missing = [specifier]
                return _install(decision, f"cannot resolve import {specifier}")
        return None


def _install(decision: PreflightDecision, reason: str) -> PreflightDecision:
    decision.install = True
    decision.reason = reason
    logger.info("Install needed: %s", reason)
    return decision
