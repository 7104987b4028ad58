"""
Tests for configuration loading — .jpd.yml parsing and JPD_* overrides.
"""

import textwrap
from pathlib import Path

import pytest

from jpd.core.config.loader import ConfigError, find_config_file, load_settings


@pytest.fixture
def project_yml(tmp_path: Path) -> Path:
    """Create a .jpd.yml in a temp directory."""
    content = textwrap.dedent("""\
        auto_install: false
        missing_dependency_limit: 3
        import_probe_limit: 2
        volta: false
    """)
    path = tmp_path / ".jpd.yml"
    path.write_text(content)
    return path


class TestFindConfig:
    def test_found_in_dir(self, project_yml: Path):
        assert find_config_file(project_yml.parent) == project_yml

    def test_found_in_parent(self, project_yml: Path):
        child = project_yml.parent / "packages" / "web"
        child.mkdir(parents=True)
        assert find_config_file(child) == project_yml


class TestLoadSettings:
    def test_defaults(self, tmp_path: Path):
        settings = load_settings(start_dir=tmp_path / "isolated", environ={})
        assert settings.auto_install is True
        assert settings.missing_dependency_limit == 10
        assert settings.import_probe_limit == 5
        assert settings.volta is True

    def test_from_file(self, project_yml: Path):
        settings = load_settings(start_dir=project_yml.parent, environ={})
        assert settings.auto_install is False
        assert settings.missing_dependency_limit == 3
        assert settings.import_probe_limit == 2
        assert settings.volta is False
        assert settings.source == str(project_yml)

    def test_explicit_path(self, tmp_path: Path, project_yml: Path):
        elsewhere = tmp_path / "elsewhere"
        elsewhere.mkdir()
        settings = load_settings(start_dir=elsewhere, config_path=project_yml, environ={})
        assert settings.missing_dependency_limit == 3

    def test_explicit_path_missing(self, tmp_path: Path):
        with pytest.raises(ConfigError, match="config file not found"):
            load_settings(config_path=tmp_path / "nope.yml", environ={})

    def test_env_beats_file(self, project_yml: Path):
        settings = load_settings(
            start_dir=project_yml.parent,
            environ={"JPD_AUTO_INSTALL": "yes", "JPD_MISSING_DEPS_LIMIT": "7"},
        )
        assert settings.auto_install is True
        assert settings.missing_dependency_limit == 7

    def test_no_volta_env(self, tmp_path: Path):
        assert load_settings(start_dir=tmp_path, environ={"JPD_NO_VOLTA": "true"}).volta is False
        assert load_settings(start_dir=tmp_path, environ={"JPD_NO_VOLTA": "0"}).volta is True

    def test_empty_file(self, tmp_path: Path):
        (tmp_path / ".jpd.yml").write_text("")
        assert load_settings(start_dir=tmp_path, environ={}).auto_install is True


class TestInvalid:
    def test_not_a_mapping(self, tmp_path: Path):
        (tmp_path / ".jpd.yml").write_text("- a\n- b\n")
        with pytest.raises(ConfigError, match="expected a yaml mapping"):
            load_settings(start_dir=tmp_path, environ={})

    def test_bad_yaml(self, tmp_path: Path):
        (tmp_path / ".jpd.yml").write_text("auto_install: [\n")
        with pytest.raises(ConfigError, match="invalid yaml"):
            load_settings(start_dir=tmp_path, environ={})

    def test_limit_must_be_positive(self, tmp_path: Path):
        (tmp_path / ".jpd.yml").write_text("missing_dependency_limit: 0\n")
        with pytest.raises(ConfigError, match="invalid missing_dependency_limit"):
            load_settings(start_dir=tmp_path, environ={})

    def test_bad_bool_env(self, tmp_path: Path):
        with pytest.raises(ConfigError, match="JPD_AUTO_INSTALL must be true or false got maybe"):
            load_settings(start_dir=tmp_path, environ={"JPD_AUTO_INSTALL": "maybe"})

    def test_bad_limit_env(self, tmp_path: Path):
        with pytest.raises(ConfigError, match="whole number"):
            load_settings(start_dir=tmp_path, environ={"JPD_MISSING_DEPS_LIMIT": "ten"})
