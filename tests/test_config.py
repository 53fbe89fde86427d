"""
Tests for configuration loading.
"""

from pathlib import Path

import pytest

from calstats.config import AppConfig
from calstats.domain.exceptions import ConfigError
from calstats.domain.models import WindowPolicy


class TestAppConfig:
    """Tests for AppConfig."""

    def test_defaults(self):
        config = AppConfig()

        assert config.exclude_days == [5, 6]
        assert config.window.policy == WindowPolicy.ELAPSED_HOURS
        assert config.window.start_hour == 7
        assert config.window.duration_hours == 168
        assert config.workday.slot_hours == 6
        assert config.workday.workweek_hours == 40
        assert config.hiring_markers == ["https://hire.lever.co/interviews"]
        assert config.get_token_file() == Path.home() / ".calstats_token.json"

    def test_load_from_yaml(self, tmp_path):
        config_path = tmp_path / "calstats.yaml"
        config_path.write_text(
            "calendars: [a@x.com, ' b@x.com ']\n"
            "exclude_days: [6, 5, 6]\n"
            "window:\n"
            "  policy: business_days\n"
            "  days: 5\n"
            "workday:\n"
            "  workweek_hours: 32\n",
            encoding="utf-8",
        )

        config = AppConfig.load_from_yaml(config_path)

        assert config.calendars == ["a@x.com", "b@x.com"]
        assert config.exclude_days == [6, 5]
        assert config.window.policy == WindowPolicy.BUSINESS_DAYS
        assert config.window.days == 5
        assert config.workday.workweek_hours == 32

    @pytest.mark.parametrize(
        "content",
        [
            "exclude_days: [7]\n",
            "exclude_days: [0, 1, 2, 3, 4, 5, 6]\n",
            "window:\n  start_hour: 24\n",
            "window:\n  duration_hours: 0\n",
            "workday:\n  slot_hours: 13\n",
            "window:\n  policy: fortnightly\n",
            "hiring_markers: ['', '  ']\n",
        ],
    )
    def test_invalid_values_raise_config_error(self, tmp_path, content):
        config_path = tmp_path / "calstats.yaml"
        config_path.write_text(content, encoding="utf-8")

        with pytest.raises(ConfigError):
            AppConfig.load_from_yaml(config_path)

    def test_invalid_yaml(self, tmp_path):
        config_path = tmp_path / "calstats.yaml"
        config_path.write_text("calendars: [unterminated\n", encoding="utf-8")

        with pytest.raises(ConfigError, match="Invalid YAML"):
            AppConfig.load_from_yaml(config_path)

    def test_non_mapping_root(self, tmp_path):
        config_path = tmp_path / "calstats.yaml"
        config_path.write_text("- a\n- b\n", encoding="utf-8")

        with pytest.raises(ConfigError, match="mapping"):
            AppConfig.load_from_yaml(config_path)

    def test_explicit_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            AppConfig.load(tmp_path / "nope.yaml")

    def test_load_without_file_uses_defaults(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        assert AppConfig.load() == AppConfig()

    def test_load_picks_up_file_in_working_directory(self, tmp_path, monkeypatch):
        (tmp_path / "calstats.yaml").write_text("calendars: [me@x.com]\n", encoding="utf-8")
        monkeypatch.chdir(tmp_path)

        assert AppConfig.load().calendars == ["me@x.com"]

    def test_empty_hiring_markers_are_dropped(self):
        config = AppConfig(hiring_markers=["", "  ", "greenhouse.io"])

        assert config.hiring_markers == ["greenhouse.io"]
