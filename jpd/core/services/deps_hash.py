"""
Dependency hash record — the single file jpd persists in a project.

The record lives at ``node_modules/.jpd-deps-hash`` and holds one hex
sha256 digest followed by a newline. It is written atomically (temp
file in the same directory, then rename) and is never allowed to
create ``node_modules``: no directory, no record.

Two invocations racing on the same project can at worst cause one
redundant install or leave one stale record; there is no locking.
"""

from __future__ import annotations

import hashlib
import logging
import tempfile
from pathlib import Path

from jpd.core.errors import HashStorageUnavailable, PreflightError
from jpd.core.models.agent import Manager
from jpd.core.services.manifest import (
    declared_dependencies,
    declared_imports,
    load_deno_config,
    load_package_json,
)

logger = logging.getLogger(__name__)

DEPS_DIR = "node_modules"
HASH_FILE = ".jpd-deps-hash"

# Lockfiles whose content feeds the hash, per manager
_HASHED_LOCKFILES: dict[Manager, tuple[str, ...]] = {
    Manager.NPM: ("package-lock.json",),
    Manager.YARN: ("yarn.lock",),
    Manager.PNPM: ("pnpm-lock.yaml",),
    Manager.BUN: ("bun.lock", "bun.lockb"),
    Manager.DENO: ("deno.lock",),
}


def hash_path(directory: Path) -> Path:
    return directory / DEPS_DIR / HASH_FILE


def compute_hash(directory: Path, manager: Manager) -> str | None:
    """Digest of everything that decides what an install would produce.

    Node managers: sorted ``name@version`` lines of dependencies and
    devDependencies. Deno: sorted ``name=specifier`` lines of imports.
    Both add a ``lockfile:<name>:<sha256>`` line for the manager's
    lockfile when one exists.

    Returns None when the manifest does not exist.

    Raises:
        ManifestError: If the manifest is malformed.
    """
    if manager is Manager.DENO:
        config = load_deno_config(directory)
        if config is None:
            return None
        lines = sorted(f"{k}={v}" for k, v in declared_imports(config).items())
    else:
        package = load_package_json(directory)
        if package is None:
            return None
        lines = sorted(f"{k}@{v}" for k, v in declared_dependencies(package).items())

    for name in _HASHED_LOCKFILES[manager]:
        lockfile = directory / name
        if lockfile.is_file():
            digest = hashlib.sha256(lockfile.read_bytes()).hexdigest()
            lines.append(f"lockfile:{name}:{digest}")
            break

    return hashlib.sha256("\n".join(lines).encode("utf-8")).hexdigest()


def read_hash(directory: Path) -> str:
    """The recorded digest, or "" when there is no record yet.

    Raises:
        HashStorageUnavailable: If node_modules does not exist.
    """
    deps_dir = directory / DEPS_DIR
    if not deps_dir.is_dir():
        raise HashStorageUnavailable(f"{DEPS_DIR} does not exist in {directory}")

    path = deps_dir / HASH_FILE
    try:
        return path.read_text(encoding="utf-8").strip()
    except FileNotFoundError:
        return ""
    except OSError as e:
        raise PreflightError(f"cannot read {HASH_FILE}: {(e.strerror or str(e)).lower()}") from e


def write_hash(directory: Path, digest: str) -> None:
    """Record ``digest`` (atomic write).

    Raises:
        HashStorageUnavailable: If node_modules does not exist; it is
            never created here.
    """
    deps_dir = directory / DEPS_DIR
    if not deps_dir.is_dir():
        raise HashStorageUnavailable(f"{DEPS_DIR} does not exist in {directory}")

    path = deps_dir / HASH_FILE
    try:
        fd, tmp_path = tempfile.mkstemp(dir=deps_dir, prefix=".jpd_", suffix=".tmp")
        tmp = Path(tmp_path)
        try:
            with open(fd, "w", encoding="utf-8") as fh:
                fh.write(digest + "\n")
            tmp.replace(path)
            logger.debug("Dependency hash saved to %s", path)
        except Exception:
            tmp.unlink(missing_ok=True)
            raise
    except OSError as e:
        raise PreflightError(f"cannot write {HASH_FILE}: {(e.strerror or str(e)).lower()}") from e


def refresh_hash(directory: Path, manager: Manager) -> bool:
    """Recompute and store the digest if possible; True when a record was written.

    A missing node_modules or manifest skips the write silently; the
    next preflight will decide again.
    """
    digest = compute_hash(directory, manager)
    if digest is None:
        return False
    try:
        write_hash(directory, digest)
    except HashStorageUnavailable as e:
        logger.debug("Skipping hash record: %s", e)
        return False
    return True
