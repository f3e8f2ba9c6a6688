"""Unit tests for treediff CLI configuration management.

This module tests the configuration system including file discovery, loading,
per-kind resolution, and priority handling.
"""

import json
from pathlib import Path

import pytest

from treediff.cli.config import (
    _load_pyproject_section,
    discover_config_file,
    find_config_in_parents,
    load_config_file,
    load_config_with_priority,
    merge_configs,
    options_for_kind,
)
from treediff.exceptions import ConfigError


@pytest.mark.unit
@pytest.mark.cli
class TestConfigDiscovery:
    """Test configuration file discovery functionality."""

    def test_discover_config_in_cwd(self, tmp_path):
        """Test discovering config file in the start directory."""
        config_file = tmp_path / ".treediff.toml"
        config_file.write_text('mode = "ordered"\n')
        assert find_config_in_parents(tmp_path) == config_file

    def test_discover_config_in_parent(self, tmp_path):
        """Test discovering config file in a parent directory."""
        config_file = tmp_path / ".treediff.yaml"
        config_file.write_text("mode: exact\n")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        assert find_config_in_parents(nested) == config_file

    def test_toml_preferred_over_json(self, tmp_path):
        (tmp_path / ".treediff.json").write_text("{}")
        (tmp_path / ".treediff.toml").write_text("")
        assert find_config_in_parents(tmp_path).name == ".treediff.toml"

    def test_pyproject_with_section(self, tmp_path):
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text('[project]\nname = "x"\n\n[tool.treediff]\nmode = "ordered"\n')
        assert find_config_in_parents(tmp_path) == pyproject

    def test_pyproject_without_section_is_skipped(self, tmp_path):
        (tmp_path / "pyproject.toml").write_text('[project]\nname = "x"\n')
        nested = tmp_path / "sub"
        nested.mkdir()
        assert discover_config_file(nested, home=tmp_path / "nohome") is None

    def test_invalid_pyproject_is_skipped(self, tmp_path):
        (tmp_path / "pyproject.toml").write_text("[tool.treediff\n")
        assert discover_config_file(tmp_path, home=tmp_path / "nohome") is None

    def test_home_directory_fallback(self, tmp_path):
        home = tmp_path / "home"
        home.mkdir()
        work = tmp_path / "work"
        work.mkdir()
        config_file = home / ".treediff.json"
        config_file.write_text("{}")
        assert discover_config_file(work, home=home) == config_file


@pytest.mark.unit
@pytest.mark.cli
class TestConfigLoading:
    """Test loading of each supported format."""

    def test_load_toml(self, tmp_path):
        path = tmp_path / "c.toml"
        path.write_text('mode = "ordered"\n\n[csv]\nignore_header = true\n')
        assert load_config_file(path) == {"mode": "ordered", "csv": {"ignore_header": True}}

    def test_load_json(self, tmp_path):
        path = tmp_path / "c.json"
        path.write_text(json.dumps({"mode": "exact"}))
        assert load_config_file(str(path)) == {"mode": "exact"}

    def test_load_yaml(self, tmp_path):
        path = tmp_path / "c.yml"
        path.write_text("xml:\n  orderSensitive: true\n")
        assert load_config_file(path) == {"xml": {"orderSensitive": True}}

    def test_empty_yaml_is_empty_config(self, tmp_path):
        path = tmp_path / "c.yaml"
        path.write_text("")
        assert load_config_file(path) == {}

    def test_load_pyproject_section(self, tmp_path):
        path = tmp_path / "pyproject.toml"
        path.write_text('[tool.treediff]\ndelimiter = ";"\n')
        assert _load_pyproject_section(path) == {"delimiter": ";"}
        assert load_config_file(path) == {"delimiter": ";"}

    def test_pyproject_section_must_be_table(self, tmp_path):
        path = tmp_path / "pyproject.toml"
        path.write_text('[tool]\ntreediff = "yes"\n')
        with pytest.raises(ConfigError, match="must be a table"):
            _load_pyproject_section(path)

    @pytest.mark.parametrize(
        "name,content,match",
        [
            ("bad.json", "{", "Invalid JSON"),
            ("list.json", "[1]", "must contain a table of options"),
            ("bad.toml", "mode = ", "Invalid TOML"),
            ("bad.yaml", "a: [1", "Invalid YAML"),
            ("list.yaml", "- a\n", "must contain a table of options"),
            ("conf.ini", "[x]", "Unsupported config file format"),
        ],
    )
    def test_invalid_files(self, tmp_path, name, content, match):
        path = tmp_path / name
        path.write_text(content)
        with pytest.raises(ConfigError, match=match) as exc_info:
            load_config_file(path)
        assert exc_info.value.config_path == str(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="does not exist"):
            load_config_file(tmp_path / "absent.toml")

    def test_directory_is_rejected(self, tmp_path):
        with pytest.raises(ConfigError, match="not a file"):
            load_config_file(tmp_path)


@pytest.mark.unit
@pytest.mark.cli
class TestConfigPriority:
    """Test priority between explicit, environment and discovered configs."""

    def test_explicit_path_wins(self, isolated_config):
        explicit = isolated_config / "explicit.json"
        explicit.write_text('{"mode": "exact"}')
        env = isolated_config / "env.json"
        env.write_text('{"mode": "ordered"}')
        (isolated_config / ".treediff.json").write_text('{"mode": "full"}')
        assert load_config_with_priority(str(explicit), str(env)) == {"mode": "exact"}

    def test_env_path_before_discovery(self, isolated_config):
        env = isolated_config / "env.json"
        env.write_text('{"mode": "ordered"}')
        (isolated_config / ".treediff.json").write_text('{"mode": "full"}')
        assert load_config_with_priority(None, str(env)) == {"mode": "ordered"}

    def test_discovered_config(self, isolated_config):
        (isolated_config / ".treediff.json").write_text('{"mode": "full"}')
        assert load_config_with_priority() == {"mode": "full"}

    def test_no_config(self, isolated_config):
        assert load_config_with_priority() == {}

    def test_home_config_via_environment(self, isolated_config):
        home = Path.home()
        (home / ".treediff.yaml").write_text("mode: ordered\n")
        assert load_config_with_priority() == {"mode": "ordered"}


@pytest.mark.unit
class TestConfigMerging:
    """Test merge_configs() and options_for_kind()."""

    def test_deep_merge(self):
        base = {"mode": "full", "csv": {"delimiter": ";", "ignore_header": False}}
        override = {"csv": {"ignore_header": True}}
        assert merge_configs(base, override) == {
            "mode": "full",
            "csv": {"delimiter": ";", "ignore_header": True},
        }

    def test_merge_does_not_mutate(self):
        base = {"csv": {"delimiter": ";"}}
        merge_configs(base, {"csv": {"delimiter": ","}})
        assert base == {"csv": {"delimiter": ";"}}

    def test_kind_table_overrides_shared_values(self):
        config = {"mode": "full", "ignore_header": True, "xml": {"mode": "ordered"}, "csv": {"delimiter": ";"}}
        assert options_for_kind(config, "xml") == {"mode": "ordered", "ignore_header": True}

    def test_kind_without_table(self):
        assert options_for_kind({"mode": "exact", "xml": {"mode": "ordered"}}, "json") == {"mode": "exact"}
