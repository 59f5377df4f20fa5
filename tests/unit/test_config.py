"""Tests for configuration discovery and loading."""

import json
import logging
from pathlib import Path

import pytest

from md2tg.config import (
    discover_config_file,
    find_config_in_parents,
    load_config_file,
    load_config_with_priority,
    merge_configs,
    options_from_config,
)
from md2tg.exceptions import ConfigError


@pytest.fixture
def isolated_home(tmp_path, monkeypatch) -> Path:
    """Point the home directory at an empty temporary directory."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setattr(Path, "home", classmethod(lambda cls: home))
    return home


@pytest.mark.unit
class TestLoadConfigFile:
    """Tests for loading the supported file formats."""

    def test_toml(self, tmp_path):
        path = tmp_path / ".md2tg.toml"
        path.write_text("[compose]\nprimary_budget = 900\n", encoding="utf-8")
        assert load_config_file(path) == {"compose": {"primary_budget": 900}}

    def test_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("render:\n  default_bullet: '*'\n", encoding="utf-8")
        assert load_config_file(str(path)) == {"render": {"default_bullet": "*"}}

    def test_empty_yaml(self, tmp_path):
        path = tmp_path / "config.yml"
        path.write_text("", encoding="utf-8")
        assert load_config_file(path) == {}

    def test_json(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"compose": {"overflow_budget": 3000}}), encoding="utf-8")
        assert load_config_file(path) == {"compose": {"overflow_budget": 3000}}

    def test_pyproject_section(self, tmp_path):
        path = tmp_path / "pyproject.toml"
        path.write_text('[project]\nname = "x"\n\n[tool.md2tg.compose]\nprimary_budget = 800\n', encoding="utf-8")
        assert load_config_file(path) == {"compose": {"primary_budget": 800}}

    def test_pyproject_without_section(self, tmp_path):
        path = tmp_path / "pyproject.toml"
        path.write_text('[project]\nname = "x"\n', encoding="utf-8")
        assert load_config_file(path) == {}

    @pytest.mark.parametrize(
        "name, content",
        [
            ("bad.toml", "[compose\n"),
            ("bad.json", "{not json"),
            ("bad.yaml", "a: [1, 2"),
            ("list.json", "[1, 2]"),
            ("config.ini", "[compose]"),
        ],
    )
    def test_invalid_files(self, tmp_path, name, content):
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        with pytest.raises(ConfigError):
            load_config_file(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="does not exist"):
            load_config_file(tmp_path / "missing.toml")

    def test_directory(self, tmp_path):
        with pytest.raises(ConfigError, match="not a file"):
            load_config_file(tmp_path)


@pytest.mark.unit
class TestDiscovery:
    """Tests for configuration file discovery."""

    def test_found_in_parent(self, tmp_path):
        config = tmp_path / ".md2tg.yaml"
        config.write_text("compose: {}\n", encoding="utf-8")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        assert find_config_in_parents(nested) == config.resolve()

    def test_dedicated_file_before_pyproject(self, tmp_path):
        (tmp_path / "pyproject.toml").write_text("[tool.md2tg.compose]\nprimary_budget = 800\n", encoding="utf-8")
        config = tmp_path / ".md2tg.toml"
        config.write_text("", encoding="utf-8")
        assert find_config_in_parents(tmp_path) == config.resolve()

    def test_pyproject_needs_section(self, tmp_path, isolated_home):
        (tmp_path / "pyproject.toml").write_text('[project]\nname = "x"\n', encoding="utf-8")
        assert discover_config_file(tmp_path) is None

        (tmp_path / "pyproject.toml").write_text("[tool.md2tg.render]\ndefault_bullet = '*'\n", encoding="utf-8")
        assert discover_config_file(tmp_path) == (tmp_path / "pyproject.toml").resolve()

    def test_home_fallback(self, tmp_path, isolated_home):
        project = tmp_path / "project"
        project.mkdir()
        config = isolated_home / ".md2tg.json"
        config.write_text("{}", encoding="utf-8")
        assert discover_config_file(project) == config

    def test_nothing_found(self, tmp_path, isolated_home):
        assert discover_config_file(tmp_path) is None


@pytest.mark.unit
class TestMergeAndPriority:
    """Tests for merging and priority handling."""

    def test_deep_merge(self):
        base = {"compose": {"primary_budget": 900, "tags_label": "Tags"}, "render": {"default_bullet": "*"}}
        override = {"compose": {"primary_budget": 800}}
        assert merge_configs(base, override) == {
            "compose": {"primary_budget": 800, "tags_label": "Tags"},
            "render": {"default_bullet": "*"},
        }
        assert base["compose"]["primary_budget"] == 900

    def test_explicit_path_wins(self, tmp_path):
        explicit = tmp_path / "explicit.json"
        explicit.write_text('{"compose": {"primary_budget": 1}}', encoding="utf-8")
        env = tmp_path / "env.json"
        env.write_text('{"compose": {"primary_budget": 2}}', encoding="utf-8")
        assert load_config_with_priority(str(explicit), str(env)) == {"compose": {"primary_budget": 1}}
        assert load_config_with_priority(None, str(env)) == {"compose": {"primary_budget": 2}}

    def test_discovered_from_cwd(self, tmp_path, isolated_home, monkeypatch):
        (tmp_path / ".md2tg.toml").write_text("[compose]\noverflow_budget = 2048\n", encoding="utf-8")
        monkeypatch.chdir(tmp_path)
        assert load_config_with_priority() == {"compose": {"overflow_budget": 2048}}

    def test_no_config(self, tmp_path, isolated_home, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert load_config_with_priority() == {}

    def test_missing_explicit_path(self, tmp_path):
        with pytest.raises(ConfigError):
            load_config_with_priority(str(tmp_path / "missing.yaml"))


@pytest.mark.unit
class TestOptionsFromConfig:
    """Tests for building options from configuration."""

    def test_empty(self):
        options = options_from_config({})
        assert options.primary_budget == 1024

    def test_tables(self):
        options = options_from_config(
            {
                "compose": {"primary-budget": 900, "summary_lengths": [200, 100], "read_more_label": "more"},
                "render": {"default_bullet": "*", "accept_bare_domains": False},
            }
        )
        assert options.primary_budget == 900
        assert options.summary_lengths == (200, 100)
        assert options.read_more_label == "more"
        assert options.render_options.default_bullet == "*"
        assert not options.render_options.accept_bare_domains

    def test_overrides(self):
        options = options_from_config({"compose": {"primary_budget": 900}}, primary_budget=500, overflow_budget=None)
        assert options.primary_budget == 500
        assert options.overflow_budget == 4096

    def test_unknown_section_is_ignored(self, caplog):
        with caplog.at_level(logging.WARNING, logger="md2tg"):
            options_from_config({"bot": {"token": "x"}})
        assert "unknown configuration section 'bot'" in caplog.text

    @pytest.mark.parametrize(
        "config",
        [
            {"compose": {"primary_budget": 0}},
            {"compose": {"primary_budget": 5000}},
            {"render": {"default_bullet": "•"}},
            {"compose": "not a table"},
        ],
    )
    def test_invalid(self, config):
        with pytest.raises(ConfigError):
            options_from_config(config)
