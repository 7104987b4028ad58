"""
Manifest readers — package.json and deno.json / deno.jsonc.

A missing manifest is reported as None; a manifest that exists but
cannot be parsed raises ``ManifestError``. Callers decide whether a
missing file is fatal (``run`` without a script) or a signal
(preflight treats it as "install needed").
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from jpd.core.errors import ManifestError
from jpd.core.models.agent import Manager

logger = logging.getLogger(__name__)

PACKAGE_JSON = "package.json"
DENO_CONFIGS = ("deno.json", "deno.jsonc")


def read_json_file(path: Path, jsonc: bool = False) -> dict | None:
    """Parse a JSON object file; None when it does not exist.

    Raises:
        ManifestError: If the file is unreadable, malformed or not an object.
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return None
    except OSError as e:
        raise ManifestError(f"cannot read {path.name}: {(e.strerror or str(e)).lower()}") from e

    if jsonc:
        raw = strip_jsonc(raw)

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ManifestError(f"invalid json in {path.name} at line {e.lineno}") from e

    if not isinstance(data, dict):
        raise ManifestError(f"expected a json object in {path.name}")
    return data


def load_package_json(directory: Path) -> dict | None:
    return read_json_file(directory / PACKAGE_JSON)


def find_deno_config(directory: Path) -> Path | None:
    """deno.json if present, else deno.jsonc, else None."""
    for name in DENO_CONFIGS:
        candidate = directory / name
        if candidate.is_file():
            return candidate
    return None


def load_deno_config(directory: Path) -> dict | None:
    path = find_deno_config(directory)
    if path is None:
        return None
    return read_json_file(path, jsonc=path.suffix == ".jsonc")


def _string_map(data: dict | None, key: str, where: str) -> dict[str, str]:
    if not data:
        return {}
    section = data.get(key) or {}
    if not isinstance(section, dict):
        raise ManifestError(f"{key} in {where} must be an object")
    result: dict[str, str] = {}
    for name, value in section.items():
        if isinstance(value, dict):
            # deno tasks may be objects: {"command": "...", "description": "..."}
            value = value.get("command", "")
        result[str(name)] = str(value)
    return result


# ── Scripts / tasks ─────────────────────────────────────────────


def manifest_name(manager: Manager) -> str:
    return "deno.json" if manager is Manager.DENO else PACKAGE_JSON


def load_scripts(directory: Path, manager: Manager) -> dict[str, str] | None:
    """Runnable entries for ``manager``: package.json scripts or deno tasks.

    Returns None when the manifest itself is missing.
    """
    if manager is Manager.DENO:
        config = load_deno_config(directory)
        if config is None:
            return None
        return _string_map(config, "tasks", "deno.json")

    package = load_package_json(directory)
    if package is None:
        return None
    return _string_map(package, "scripts", PACKAGE_JSON)


# ── Dependencies / imports ──────────────────────────────────────


def declared_dependencies(package: dict | None) -> dict[str, str]:
    """dependencies and devDependencies merged (devDependencies win on clash)."""
    deps = _string_map(package, "dependencies", PACKAGE_JSON)
    deps.update(_string_map(package, "devDependencies", PACKAGE_JSON))
    return deps


def declared_imports(config: dict | None) -> dict[str, str]:
    return _string_map(config, "imports", "deno.json")


def dependency_names(directory: Path, manager: Manager) -> list[str]:
    """Sorted names the operator can pick from for interactive uninstall."""
    if manager is Manager.DENO:
        return sorted(declared_imports(load_deno_config(directory)))
    return sorted(declared_dependencies(load_package_json(directory)))


# ── JSONC ───────────────────────────────────────────────────────


def strip_jsonc(text: str) -> str:
    """Remove ``//`` and ``/* */`` comments and trailing commas.

    String literals are copied untouched, so URLs such as
    ``"https://deno.land/x"`` survive.
    """
    return _strip_trailing_commas(_strip_comments(text))


def _strip_comments(text: str) -> str:
    out: list[str] = []
    i, n = 0, len(text)
    in_string = False

    while i < n:
        ch = text[i]
        if in_string:
            out.append(ch)
            if ch == "\\" and i + 1 < n:
                out.append(text[i + 1])
                i += 2
                continue
            if ch == '"':
                in_string = False
            i += 1
            continue

        if ch == '"':
            in_string = True
            out.append(ch)
            i += 1
        elif text.startswith("//", i):
            end = text.find("\n", i)
            i = n if end == -1 else end
        elif text.startswith("/*", i):
            end = text.find("*/", i + 2)
            i = n if end == -1 else end + 2
        else:
            out.append(ch)
            i += 1

    return "".join(out)


def _strip_trailing_commas(text: str) -> str:
    out: list[str] = []
    i, n = 0, len(text)
    in_string = False

    while i < n:
        ch = text[i]
        if in_string:
            out.append(ch)
            if ch == "\\" and i + 1 < n:
                out.append(text[i + 1])
                i += 2
                continue
            if ch == '"':
                in_string = False
            i += 1
            continue

        if ch == '"':
            in_string = True
        elif ch == ",":
            j = i + 1
            while j < n and text[j].isspace():
                j += 1
            if j < n and text[j] in "}]":
                i += 1
                continue
        out.append(ch)
        i += 1

    return "".join(out)
