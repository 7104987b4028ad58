"""
Shared test fixtures and configuration.

Every test that goes near a verb uses a ``Toolbox`` built from the
mock adapters: no real processes, PATH, prompts or network.
"""

import json
from pathlib import Path

import pytest

from jpd.adapters.mock import (
    MockRunner,
    ScriptedCommandPrompt,
    ScriptedMultiSelectPrompt,
    ScriptedSelectPrompt,
    StaticPathLookup,
    StaticVersionReporter,
)
from jpd.adapters.registry import Toolbox
from jpd.core.models.agent import AgentSource, Manager, ResolvedAgent
from jpd.core.use_cases.session import Session


class FakeTerminal:
    """Scripted answers for every prompt kind, plus what was asked."""

    def __init__(self):
        self.command = ScriptedCommandPrompt()
        self.select = ScriptedSelectPrompt()
        self.multi = ScriptedMultiSelectPrompt()
        self.hints: list = []

    def command_prompt(self, hint):
        self.hints.append(hint)
        self.command.hint = hint
        return self.command

    def select_prompt(self, title, options):
        self.select.options = list(options)
        return self.select

    def multi_select_prompt(self, title, options):
        self.multi.options = list(options)
        return self.multi


class FakeRegistry:
    def __init__(self, hits=None):
        self.hits = list(hits or [])
        self.queries: list[str] = []

    def __call__(self, query):
        self.queries.append(query)
        return self.hits


@pytest.fixture
def runner() -> MockRunner:
    return MockRunner()


@pytest.fixture
def terminal() -> FakeTerminal:
    return FakeTerminal()


@pytest.fixture
def registry() -> FakeRegistry:
    return FakeRegistry()


@pytest.fixture
def make_toolbox(runner, terminal, registry):
    """Build a Toolbox whose PATH holds ``available`` and whose yarn reports ``yarn_version``."""

    def _make(available=("npm", "pnpm", "yarn", "bun", "deno"), yarn_version="1.22.19"):
        return Toolbox(
            runner=runner,
            path=StaticPathLookup(available),
            command_prompt=terminal.command_prompt,
            select_prompt=terminal.select_prompt,
            multi_select_prompt=terminal.multi_select_prompt,
            version_reporter=lambda manager, cwd: StaticVersionReporter(yarn_version),
            registry_search=registry,
        )

    return _make


@pytest.fixture
def make_session(make_toolbox, tmp_path: Path):
    """Session for ``manager`` rooted at ``tmp_path`` (or ``directory``)."""

    def _make(manager=Manager.NPM, directory: Path | None = None, dry_run=False, **toolbox_kwargs):
        return Session(
            agent=ResolvedAgent(manager=Manager(manager), source=AgentSource.EXPLICIT_FLAG),
            target_dir=directory or tmp_path,
            toolbox=make_toolbox(**toolbox_kwargs),
            dry_run=dry_run,
        )

    return _make


@pytest.fixture
def write_package_json(tmp_path: Path):
    """Write a package.json into ``tmp_path`` (or ``directory``)."""

    def _write(scripts=None, dependencies=None, dev_dependencies=None, directory: Path | None = None):
        data: dict = {"name": "demo", "version": "1.0.0"}
        if scripts is not None:
            data["scripts"] = scripts
        if dependencies is not None:
            data["dependencies"] = dependencies
        if dev_dependencies is not None:
            data["devDependencies"] = dev_dependencies
        path = (directory or tmp_path) / "package.json"
        path.write_text(json.dumps(data, indent=2))
        return path

    return _write


@pytest.fixture
def install_modules(tmp_path: Path):
    """Create node_modules entries for the given package names."""

    def _install(*names: str, directory: Path | None = None) -> Path:
        modules = (directory or tmp_path) / "node_modules"
        modules.mkdir(exist_ok=True)
        for name in names:
            (modules / name).mkdir(parents=True, exist_ok=True)
        return modules

    return _install


@pytest.fixture(autouse=True)
def _clean_jpd_env(monkeypatch):
    """Keep the developer's JPD_* variables out of the tests."""
    for var in ("JPD_AGENT", "JPD_AUTO_INSTALL", "JPD_NO_VOLTA", "JPD_MISSING_DEPS_LIMIT",
                "JPD_LOG_LEVEL", "JPD_LOG_FILE", "JPD_LOG_FILE_LEVEL"):
        monkeypatch.delenv(var, raising=False)
