"""
Tests for detection — lockfile markers, PATH probes and the yarn version class.
"""

from pathlib import Path

import pytest

from jpd.adapters.mock import StaticPathLookup, StaticVersionReporter
from jpd.core.models.agent import Manager, VersionClass
from jpd.core.services.detection import (
    detect_lockfile,
    detect_on_path,
    is_installed,
    lockfiles_present,
)
from jpd.core.services.yarn_version import classify, detect_version_class, parse_version


# ── Lockfiles ───────────────────────────────────────────────────


class TestDetectLockfile:
    @pytest.mark.parametrize("filename, manager", [
        ("deno.lock", Manager.DENO),
        ("deno.json", Manager.DENO),
        ("deno.jsonc", Manager.DENO),
        ("bun.lockb", Manager.BUN),
        ("bun.lock", Manager.BUN),
        ("pnpm-lock.yaml", Manager.PNPM),
        ("yarn.lock", Manager.YARN),
        ("package-lock.json", Manager.NPM),
    ])
    def test_each_marker(self, tmp_path: Path, filename, manager):
        (tmp_path / filename).write_text("")
        marker = detect_lockfile(tmp_path)
        assert marker is not None
        assert marker.manager is manager
        assert marker.filename == filename

    def test_empty_directory(self, tmp_path: Path):
        assert detect_lockfile(tmp_path) is None

    def test_missing_directory(self, tmp_path: Path):
        assert detect_lockfile(tmp_path / "nope") is None

    def test_priority_deno_over_npm(self, tmp_path: Path):
        (tmp_path / "deno.json").write_text("{}")
        (tmp_path / "package-lock.json").write_text("{}")
        assert detect_lockfile(tmp_path).manager is Manager.DENO

    def test_priority_pnpm_over_yarn(self, tmp_path: Path):
        (tmp_path / "yarn.lock").write_text("")
        (tmp_path / "pnpm-lock.yaml").write_text("")
        assert detect_lockfile(tmp_path).manager is Manager.PNPM

    def test_parents_not_searched(self, tmp_path: Path):
        (tmp_path / "yarn.lock").write_text("")
        child = tmp_path / "packages" / "web"
        child.mkdir(parents=True)
        assert detect_lockfile(child) is None

    def test_directory_named_like_marker_ignored(self, tmp_path: Path):
        (tmp_path / "yarn.lock").mkdir()
        assert detect_lockfile(tmp_path) is None

    def test_lockfiles_present(self, tmp_path: Path):
        (tmp_path / "yarn.lock").write_text("")
        (tmp_path / "bun.lockb").write_text("")
        assert [m.manager for m in lockfiles_present(tmp_path)] == [Manager.BUN, Manager.YARN]


# ── PATH ────────────────────────────────────────────────────────


class TestDetectOnPath:
    def test_priority_order(self):
        assert detect_on_path(StaticPathLookup(["npm", "yarn", "bun"])) is Manager.BUN

    def test_npm_only(self):
        assert detect_on_path(StaticPathLookup(["npm"])) is Manager.NPM

    def test_nothing(self):
        assert detect_on_path(StaticPathLookup()) is None

    def test_is_installed(self):
        lookup = StaticPathLookup(["pnpm"])
        assert is_installed(lookup, Manager.PNPM)
        assert not is_installed(lookup, Manager.YARN)


# ── Yarn version class ──────────────────────────────────────────


class TestYarnVersion:
    @pytest.mark.parametrize("raw, expected", [
        ("1.22.19\n", (1, 22)),
        ("v4.1.0", (4, 1)),
        ("berry-3.6.4", (3, 6)),
        ("2", (2, 0)),
        ("no version here", None),
    ])
    def test_parse(self, raw, expected):
        assert parse_version(raw) == expected

    @pytest.mark.parametrize("raw, expected", [
        ("1.22.19", VersionClass.CLASSIC),
        ("0.27.5", VersionClass.CLASSIC),
        ("2.4.3", VersionClass.MODERN),
        ("4.5.0", VersionClass.MODERN),
        ("", VersionClass.CLASSIC),
    ])
    def test_classify(self, raw, expected):
        assert classify(raw) is expected

    def test_only_yarn_is_probed(self):
        reporter = StaticVersionReporter("4.0.0")
        assert detect_version_class(Manager.PNPM, reporter) is VersionClass.CLASSIC
        assert reporter.calls == 0

    def test_yarn_modern(self):
        assert detect_version_class(Manager.YARN, StaticVersionReporter("4.0.0")) is VersionClass.MODERN

    def test_failure_is_classic(self):
        reporter = StaticVersionReporter(fail=True)
        assert detect_version_class(Manager.YARN, reporter) is VersionClass.CLASSIC
        assert reporter.calls == 1
