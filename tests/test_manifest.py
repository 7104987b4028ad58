"""
Tests for manifest readers — package.json, deno.json and JSONC.
"""

import json
import textwrap
from pathlib import Path

import pytest

from jpd.core.errors import ManifestError
from jpd.core.models.agent import Manager
from jpd.core.services.manifest import (
    declared_dependencies,
    dependency_names,
    find_deno_config,
    load_deno_config,
    load_scripts,
    read_json_file,
    strip_jsonc,
)


class TestReadJson:
    def test_missing_is_none(self, tmp_path: Path):
        assert read_json_file(tmp_path / "package.json") is None

    def test_malformed(self, tmp_path: Path):
        path = tmp_path / "package.json"
        path.write_text('{\n  "name": "x",\n  oops\n}')
        with pytest.raises(ManifestError, match="invalid json in package.json at line 3"):
            read_json_file(path)

    def test_not_an_object(self, tmp_path: Path):
        path = tmp_path / "package.json"
        path.write_text("[1, 2]")
        with pytest.raises(ManifestError, match="expected a json object"):
            read_json_file(path)


class TestScripts:
    def test_package_json_scripts(self, tmp_path: Path, write_package_json):
        write_package_json(scripts={"build": "tsc", "dev": "vite"})
        assert load_scripts(tmp_path, Manager.NPM) == {"build": "tsc", "dev": "vite"}

    def test_no_scripts_section(self, tmp_path: Path, write_package_json):
        write_package_json()
        assert load_scripts(tmp_path, Manager.PNPM) == {}

    def test_missing_manifest(self, tmp_path: Path):
        assert load_scripts(tmp_path, Manager.YARN) is None

    def test_scripts_must_be_object(self, tmp_path: Path):
        (tmp_path / "package.json").write_text(json.dumps({"scripts": ["build"]}))
        with pytest.raises(ManifestError, match="scripts in package.json must be an object"):
            load_scripts(tmp_path, Manager.NPM)

    def test_deno_tasks_string_and_object(self, tmp_path: Path):
        (tmp_path / "deno.json").write_text(json.dumps({
            "tasks": {
                "dev": "deno run --watch main.ts",
                "check": {"command": "deno check main.ts", "description": "type check"},
            }
        }))
        assert load_scripts(tmp_path, Manager.DENO) == {
            "dev": "deno run --watch main.ts",
            "check": "deno check main.ts",
        }


class TestDependencies:
    def test_dev_dependencies_merged(self, write_package_json):
        path = write_package_json(
            dependencies={"react": "^18.0.0"}, dev_dependencies={"vite": "^5.0.0"}
        )
        package = json.loads(path.read_text())
        assert declared_dependencies(package) == {"react": "^18.0.0", "vite": "^5.0.0"}

    def test_dependency_names_sorted(self, tmp_path: Path, write_package_json):
        write_package_json(dependencies={"zod": "3", "axios": "1"}, dev_dependencies={"jest": "29"})
        assert dependency_names(tmp_path, Manager.NPM) == ["axios", "jest", "zod"]

    def test_deno_import_names(self, tmp_path: Path):
        (tmp_path / "deno.json").write_text(json.dumps({
            "imports": {"@std/path": "jsr:@std/path@^1", "chalk": "npm:chalk@5"}
        }))
        assert dependency_names(tmp_path, Manager.DENO) == ["@std/path", "chalk"]

    def test_nothing_declared(self, tmp_path: Path):
        assert dependency_names(tmp_path, Manager.NPM) == []


# ── JSONC ───────────────────────────────────────────────────────


class TestJsonc:
    def test_comments_and_trailing_commas(self):
        text = textwrap.dedent("""\
            {
              // line comment
              "a": 1, /* block */
              "b": [1, 2,],
            }
        """)
        assert json.loads(strip_jsonc(text)) == {"a": 1, "b": [1, 2]}

    def test_strings_untouched(self):
        text = '{"url": "https://deno.land/x", "s": "a /* b */ c,}"}'
        assert json.loads(strip_jsonc(text)) == {"url": "https://deno.land/x", "s": "a /* b */ c,}"}

    def test_escaped_quote(self):
        text = '{"q": "say \\"hi\\" // not a comment"}'
        assert json.loads(strip_jsonc(text)) == {"q": 'say "hi" // not a comment'}

    def test_deno_json_preferred(self, tmp_path: Path):
        (tmp_path / "deno.jsonc").write_text("{}")
        assert find_deno_config(tmp_path).name == "deno.jsonc"
        (tmp_path / "deno.json").write_text("{}")
        assert find_deno_config(tmp_path).name == "deno.json"

    def test_load_jsonc_config(self, tmp_path: Path):
        (tmp_path / "deno.jsonc").write_text('{\n  // tasks\n  "tasks": {"dev": "deno run main.ts",},\n}')
        assert load_deno_config(tmp_path) == {"tasks": {"dev": "deno run main.ts"}}
