"""
Tests for runtime_compat.config.config.
"""

import json

import pytest
import yaml

from runtime_compat.config.config import (
    DEFAULT_EXCLUDE,
    Config,
    TargetConfig,
    default_config_data,
)
from runtime_compat.core.expansion import ExpansionKey
from runtime_compat.exceptions import ConfigError


def write_config(path, data):
    path.write_text(yaml.dump(data))
    return path


class TestDefaults:
    def test_default_values(self):
        config = Config()
        assert config.baseline == "baseline.json"
        assert config.version_map == "versionMap.json"
        assert config.exclude == DEFAULT_EXCLUDE
        assert config.expansion_key is ExpansionKey.PATH
        assert config.placeholder == "—"
        assert config.target_ids()[:3] == ["node22", "node20", "node18"]

    def test_target_file_defaults_to_id(self):
        assert TargetConfig(id="bun", title="bun").filename == "bun.json"
        assert TargetConfig(id="bun", title="bun", file="b.json").filename == "b.json"

    def test_default_config_data_round_trips(self):
        data = default_config_data()
        assert data["expansion_key"] == "path"
        assert Config(**data).targets == Config().targets

    def test_defaults_are_not_shared(self):
        first = Config()
        first.exclude.append("fs")
        assert "fs" not in Config().exclude


class TestFromFile:
    def test_loads_yaml(self, tmp_path):
        path = write_config(
            tmp_path / "compat.yaml",
            {
                "targets": [{"id": "bun", "title": "bun"}],
                "expansion_key": "name",
                "exclude": [],
            },
        )
        config = Config.from_file(path)

        assert config.target_ids() == ["bun"]
        assert config.expansion_key is ExpansionKey.NAME
        assert config.exclude == []
        assert config.source_path == path

    def test_relative_data_dir_follows_config_file(self, tmp_path):
        (tmp_path / "conf").mkdir()
        path = write_config(tmp_path / "conf" / "compat.yaml", {"data_dir": "../data"})
        config = Config.from_file(path)
        assert config.resolve_data_dir() == (tmp_path / "data").resolve()

    def test_absolute_data_dir(self, tmp_path):
        path = write_config(tmp_path / "compat.yaml", {"data_dir": str(tmp_path / "x")})
        assert Config.from_file(path).resolve_data_dir() == tmp_path / "x"

    def test_empty_file_uses_defaults(self, tmp_path):
        path = tmp_path / "compat.yaml"
        path.write_text("")
        assert Config.from_file(path).baseline == "baseline.json"

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            Config.from_file(tmp_path / "nope.yaml")

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "compat.yaml"
        path.write_text("targets: [unclosed")
        with pytest.raises(ConfigError, match="Invalid YAML"):
            Config.from_file(path)

    def test_root_must_be_mapping(self, tmp_path):
        path = tmp_path / "compat.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigError, match="mapping"):
            Config.from_file(path)

    def test_duplicate_target_ids(self, tmp_path):
        path = write_config(
            tmp_path / "compat.yaml",
            {"targets": [{"id": "bun", "title": "a"}, {"id": "bun", "title": "b"}]},
        )
        with pytest.raises(ConfigError, match="Duplicate target id"):
            Config.from_file(path)

    def test_invalid_expansion_key(self, tmp_path):
        path = write_config(tmp_path / "compat.yaml", {"expansion_key": "depth"})
        with pytest.raises(ConfigError):
            Config.from_file(path)


class TestPrecedence:
    def test_environment_overrides_file(self, tmp_path, monkeypatch):
        path = write_config(tmp_path / "compat.yaml", {"sort_keys": False, "baseline": "a.json"})
        monkeypatch.setenv("COMPAT_SORT_KEYS", "true")

        config = Config.from_file(path)

        assert config.sort_keys is True
        assert config.baseline == "a.json"

    def test_environment_targets_as_json(self, monkeypatch):
        monkeypatch.setenv(
            "COMPAT_TARGETS", json.dumps([{"id": "deno", "title": "deno"}])
        )
        assert Config().target_ids() == ["deno"]

    def test_overrides_win(self, tmp_path, monkeypatch):
        path = write_config(tmp_path / "compat.yaml", {"placeholder": "-"})
        monkeypatch.setenv("COMPAT_PLACEHOLDER", "n/a")

        config = Config.from_file(path).with_overrides(placeholder="?", sort_keys=None)

        assert config.placeholder == "?"
        assert config.sort_keys is False
        assert config.source_path == path

    def test_no_overrides_returns_same_instance(self):
        config = Config()
        assert config.with_overrides() is config
