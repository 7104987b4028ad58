"""
Configuration loader — reads .jpd.yml and JPD_* variables into Settings.

The file is optional: a project without one gets the defaults. When
present it is found by walking up from the target directory, so a
monorepo can keep one file at its root. Environment variables win
over the file, CLI flags win over both (applied by the verb handlers).
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError

from jpd.core.errors import ConfigurationError

logger = logging.getLogger(__name__)

# Default config filename
CONFIG_FILE = ".jpd.yml"

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}


class ConfigError(ConfigurationError):
    """Raised when .jpd.yml or a JPD_* variable is invalid."""


class Settings(BaseModel):
    """Tunables for one jpd invocation."""

    auto_install: bool = True
    # Stop scanning declared dependencies after this many are found missing
    missing_dependency_limit: int = Field(default=10, ge=1)
    # Deno imports probed with ``deno info`` before giving up
    import_probe_limit: int = Field(default=5, ge=1)
    volta: bool = True

    source: str | None = None       # file the settings came from, if any


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Search for .jpd.yml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to .jpd.yml, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / CONFIG_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def load_settings(
    start_dir: Path | None = None,
    config_path: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> Settings:
    """Load settings from .jpd.yml (if any) and the environment.

    Args:
        start_dir: Directory to search upward from.
        config_path: Explicit config file; must exist when given.
        environ: Environment mapping (default: ``os.environ``).

    Raises:
        ConfigError: If the file or an environment override is invalid.
    """
    env = os.environ if environ is None else environ

    if config_path is not None and not config_path.is_file():
        raise ConfigError(f"config file not found: {config_path}")

    path = config_path or find_project_config(start_dir)
    data: dict = _read_yaml(path) if path else {}

    data.update(_env_overrides(env))

    try:
        settings = Settings.model_validate(data)
    except ValidationError as e:
        first = e.errors()[0]
        where = ".".join(str(p) for p in first["loc"]) or "settings"
        raise ConfigError(f"invalid {where} in {path or 'environment'}: {first['msg'].lower()}") from e

    if path:
        settings.source = str(path)
        logger.debug("Loaded settings from %s", path)
    return settings


def find_project_config(start_dir: Path | None) -> Path | None:
    if start_dir is not None and not start_dir.is_dir():
        return None
    return find_config_file(start_dir)


def _read_yaml(path: Path) -> dict:
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"cannot read {path}: {e.strerror.lower() if e.strerror else e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml in {path}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"expected a yaml mapping in {path} got {type(data).__name__}")
    return data


def _env_overrides(env: Mapping[str, str]) -> dict:
    overrides: dict = {}

    if "JPD_AUTO_INSTALL" in env:
        overrides["auto_install"] = _parse_bool("JPD_AUTO_INSTALL", env["JPD_AUTO_INSTALL"])

    if "JPD_NO_VOLTA" in env and _parse_bool("JPD_NO_VOLTA", env["JPD_NO_VOLTA"]):
        overrides["volta"] = False

    raw_limit = env.get("JPD_MISSING_DEPS_LIMIT")
    if raw_limit:
        try:
            overrides["missing_dependency_limit"] = int(raw_limit)
        except ValueError as e:
            raise ConfigError(
                f"JPD_MISSING_DEPS_LIMIT must be a whole number got {raw_limit}"
            ) from e

    return overrides


def _parse_bool(name: str, value: str) -> bool:
    v = value.strip().lower()
    if v in _TRUE:
        return True
    if v in _FALSE:
        return False
    raise ConfigError(f"{name} must be true or false got {value}")
