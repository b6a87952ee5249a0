"""Tests for configuration loading."""

import pytest
import yaml

from auto_merge_bot.config import (
    ApprovalsRequired,
    AutoMergeConfig,
    MergeTimeout,
    WatchSettings,
    load_config,
)


class TestFromDict:
    """Test building config from parsed YAML."""

    def test_full_config(self):
        """Test every section is read."""
        config = AutoMergeConfig.from_dict(
            {
                "mergeTimeout": {"collaborator": "1 day", "contributor": "2 weeks"},
                "approvalsRequired": {"collaborator": 0, "contributor": 3},
                "watch": {"monitor": ["my-org/app"], "ignore": ["my-org/old"]},
            }
        )

        assert config.merge_timeout == MergeTimeout("1 day", "2 weeks")
        assert config.approvals_required == ApprovalsRequired(0, 3)
        assert config.watch == WatchSettings(monitor=("my-org/app",), ignore=("my-org/old",))

    def test_defaults(self):
        """Test an empty document uses defaults."""
        assert AutoMergeConfig.from_dict(None) == AutoMergeConfig()
        assert AutoMergeConfig.from_dict({}) == AutoMergeConfig()

    def test_partial_section(self):
        """Test missing keys inside a section fall back to defaults."""
        config = AutoMergeConfig.from_dict({"mergeTimeout": {"contributor": "10 days"}})

        assert config.merge_timeout.collaborator == MergeTimeout().collaborator
        assert config.merge_timeout.contributor == "10 days"

    def test_single_watch_string(self):
        """Test a lone string is accepted as a one-item list."""
        config = AutoMergeConfig.from_dict({"watch": {"monitor": "my-org"}})
        assert config.watch.monitor == ("my-org",)

    def test_invalid_duration_raises(self):
        """Test invalid durations are rejected at load time."""
        with pytest.raises(ValueError, match="Invalid duration"):
            AutoMergeConfig.from_dict({"mergeTimeout": {"collaborator": "soon"}})

    @pytest.mark.parametrize("count", [-1, "two", 1.5, True])
    def test_invalid_approvals_raise(self, count):
        """Test approval counts must be non-negative integers."""
        with pytest.raises(ValueError, match="approvalsRequired.contributor"):
            AutoMergeConfig.from_dict({"approvalsRequired": {"contributor": count}})

    def test_non_mapping_section_raises(self):
        """Test sections must be mappings."""
        with pytest.raises(ValueError, match="mergeTimeout"):
            AutoMergeConfig.from_dict({"mergeTimeout": "3 days"})


class TestLoadConfig:
    """Test reading config files."""

    def test_load_file(self, tmp_path):
        """Test a YAML file is parsed."""
        path = tmp_path / "auto-merge.yml"
        path.write_text(
            "mergeTimeout:\n  collaborator: 12h\napprovalsRequired:\n  contributor: 1\n"
        )

        config = load_config(path)

        assert config.merge_timeout.collaborator == "12h"
        assert config.approvals_required.contributor == 1

    def test_default_path_missing_uses_defaults(self, tmp_path, monkeypatch):
        """Test no config file at the default location means defaults."""
        monkeypatch.chdir(tmp_path)
        assert load_config() == AutoMergeConfig()

    def test_default_path_is_read(self, tmp_path, monkeypatch):
        """Test .github/auto-merge.yml is picked up automatically."""
        monkeypatch.chdir(tmp_path)
        (tmp_path / ".github").mkdir()
        (tmp_path / ".github" / "auto-merge.yml").write_text("watch:\n  ignore: [my-org/x]\n")

        assert load_config().watch.ignore == ("my-org/x",)

    def test_explicit_missing_path_raises(self, tmp_path):
        """Test an explicit path must exist."""
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.yml")

    def test_invalid_yaml_raises(self, tmp_path):
        """Test malformed YAML is reported."""
        path = tmp_path / "bad.yml"
        path.write_text("mergeTimeout: [unclosed\n")

        with pytest.raises(yaml.YAMLError):
            load_config(path)
