"""Tests for configuration loading and path resolution."""

import os
from pathlib import Path

import pytest

from node_merger.domain.entities import MB, MergerConfiguration
from node_merger.infrastructure.config_loader import (
    ConfigError,
    JsonConfigLoader,
    expand_path,
    load_merger_configuration,
    resolve_relative_path,
)

from conftest import write_config


class TestPathHelpers:
    def test_expand_home_prefix(self, monkeypatch, tmp_path):
        monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))
        assert expand_path("~/projects") == os.path.join(str(tmp_path), "projects")
        assert expand_path("~projects") == os.path.join(str(tmp_path), "projects")

    def test_expand_leaves_other_paths(self):
        assert expand_path("relative/dir") == "relative/dir"
        assert expand_path("/abs/dir") == "/abs/dir"

    def test_resolve_relative(self, tmp_path):
        assert resolve_relative_path(tmp_path, "out") == tmp_path / "out"

    def test_resolve_absolute_untouched(self, tmp_path):
        absolute = str(tmp_path / "elsewhere")
        assert resolve_relative_path(tmp_path / "cfg", absolute) == Path(absolute)


class TestJsonConfigLoader:
    def test_relative_output_resolved_against_config_dir(self, tmp_path, monkeypatch):
        config_file = write_config(
            tmp_path / "cfg" / "config.json",
            {"root_folder": "projects", "output_folder": "out"},
        )
        # working directory must not matter
        monkeypatch.chdir(tmp_path)

        config = load_merger_configuration(config_file)

        assert Path(config.output_folder) == tmp_path / "cfg" / "out"
        assert Path(config.root_folder) == tmp_path / "cfg" / "projects"

    def test_relative_config_path_uses_cwd_once(self, tmp_path, monkeypatch):
        write_config(tmp_path / "config.json", {"output_folder": "out"})
        monkeypatch.chdir(tmp_path)

        config = JsonConfigLoader(Path("config.json")).load_configuration()

        assert Path(config.output_folder) == tmp_path / "out"

    def test_absolute_paths_kept(self, tmp_path):
        root = tmp_path / "somewhere"
        config_file = write_config(
            tmp_path / "cfg" / "config.json",
            {"root_folder": str(root), "output_folder": str(tmp_path / "o")},
        )

        config = load_merger_configuration(config_file)

        assert Path(config.root_folder) == root
        assert Path(config.output_folder) == tmp_path / "o"

    def test_tilde_expanded_for_both_folders(self, tmp_path, monkeypatch):
        monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path / "home"))
        config_file = write_config(
            tmp_path / "cfg" / "config.json",
            {"root_folder": "~/code", "output_folder": "~/merged"},
        )

        config = load_merger_configuration(config_file)

        assert Path(config.root_folder) == tmp_path / "home" / "code"
        assert Path(config.output_folder) == tmp_path / "home" / "merged"

    def test_all_fields_parsed(self, tmp_path):
        config_file = write_config(
            tmp_path / "config.json",
            {
                "root_folder": "/r",
                "output_folder": "out",
                "max_file_size_mb": 3,
                "blacklisted_folders": ["node_modules", ".git"],
                "ignored_file_types": [".png", ".lock"],
                "unknown_field": {"ignored": True},
            },
        )

        config = load_merger_configuration(config_file)

        assert config.max_file_size_mb == 3
        assert config.max_file_size_bytes == 3 * MB
        assert config.blacklisted_folders == ["node_modules", ".git"]
        assert config.ignored_file_types == [".png", ".lock"]

    def test_missing_fields_take_defaults(self, tmp_path):
        config_file = write_config(tmp_path / "config.json", {})

        config = load_merger_configuration(config_file)

        assert config.max_file_size_mb == 0
        assert config.blacklisted_folders == []
        assert config.ignored_file_types == []
        assert Path(config.output_folder) == tmp_path

    def test_null_fields_take_defaults(self, tmp_path):
        config_file = write_config(
            tmp_path / "config.json",
            {"blacklisted_folders": None, "max_file_size_mb": None},
        )

        config = load_merger_configuration(config_file)

        assert config.blacklisted_folders == []
        assert config.max_file_size_mb == 0

    def test_yaml_config(self, tmp_path):
        config_file = tmp_path / "config.yml"
        config_file.write_text(
            "root_folder: projects\n"
            "output_folder: out\n"
            "max_file_size_mb: 2\n"
            "blacklisted_folders:\n"
            "  - node_modules\n",
            encoding="utf-8",
        )

        config = load_merger_configuration(config_file)

        assert Path(config.output_folder) == tmp_path / "out"
        assert config.max_file_size_mb == 2
        assert config.blacklisted_folders == ["node_modules"]

    def test_configuration_is_frozen(self, tmp_path):
        config_file = write_config(tmp_path / "config.json", {"max_file_size_mb": 1})
        config = load_merger_configuration(config_file)

        with pytest.raises(Exception):
            config.max_file_size_mb = 5


class TestConfigErrors:
    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            load_merger_configuration(tmp_path / "nope.json")

    def test_invalid_json(self, tmp_path):
        config_file = tmp_path / "config.json"
        config_file.write_text("{not json", encoding="utf-8")

        with pytest.raises(ConfigError, match="Invalid JSON"):
            load_merger_configuration(config_file)

    def test_invalid_yaml(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("root_folder: [unclosed\n", encoding="utf-8")

        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_merger_configuration(config_file)

    def test_top_level_must_be_object(self, tmp_path):
        config_file = tmp_path / "config.json"
        config_file.write_text("[1, 2, 3]", encoding="utf-8")

        with pytest.raises(ConfigError, match="must be an object"):
            load_merger_configuration(config_file)

    @pytest.mark.parametrize(
        "data",
        [
            {"max_file_size_mb": "5"},
            {"max_file_size_mb": 1.5},
            {"blacklisted_folders": "node_modules"},
            {"ignored_file_types": [1, 2]},
        ],
    )
    def test_wrong_shape(self, tmp_path, data):
        config_file = write_config(tmp_path / "config.json", data)

        with pytest.raises(ConfigError, match="Invalid configuration"):
            load_merger_configuration(config_file)

    def test_directory_instead_of_file(self, tmp_path):
        (tmp_path / "config.json").mkdir()

        with pytest.raises(ConfigError):
            load_merger_configuration(tmp_path / "config.json")


class TestMergerConfiguration:
    def test_zero_value_defaults(self):
        config = MergerConfiguration()
        assert config.root_folder == ""
        assert config.max_file_size_bytes == 0
