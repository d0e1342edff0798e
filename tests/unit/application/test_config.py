"""Tests for Config sources and defaults."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from lodge.config import Config, SchedulerConfig


class TestConfigSources:
    def test_env_overrides_nested_values(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LODGE_NOTIFICATIONS__MAX_CONCURRENCY", "4")
        monkeypatch.setenv("LODGE_SCHEDULER__ENABLED", "false")

        config = Config()

        assert config.notifications.max_concurrency == 4
        assert config.scheduler.enabled is False

    def test_yaml_file_is_read(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        config_file = tmp_path / "lodge.yaml"
        config_file.write_text(
            "notifications:\n"
            "  reminder_days: [7, 1]\n"
            "scheduler:\n"
            "  program_reminder_cron: '30 8 * * *'\n"
        )
        monkeypatch.setenv("LODGE_CONFIG_FILE", str(config_file))

        config = Config()

        assert config.notifications.reminder_days == [7, 1]
        assert config.scheduler.program_reminder_cron == "30 8 * * *"

    def test_env_beats_yaml(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        config_file = tmp_path / "lodge.yaml"
        config_file.write_text("logging:\n  level: DEBUG\n")
        monkeypatch.setenv("LODGE_CONFIG_FILE", str(config_file))
        monkeypatch.setenv("LODGE_LOGGING__LEVEL", "WARNING")

        assert Config().logging.level == "WARNING"

    def test_missing_yaml_file_is_ignored(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        monkeypatch.setenv("LODGE_CONFIG_FILE", str(tmp_path / "absent.yaml"))

        assert Config().scheduler == SchedulerConfig()


class TestDatabaseUrl:
    def test_derived_from_data_dir(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.delenv("LODGE_DATABASE__URL", raising=False)
        monkeypatch.setenv("LODGE_DATA_DIR", str(tmp_path))

        config = Config()

        assert config.database.url == f"sqlite+aiosqlite:///{tmp_path / 'lodge.db'}"

    def test_explicit_url_kept(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LODGE_DATABASE__URL", "postgresql+asyncpg://lodge@db/lodge")

        assert Config().database.url == "postgresql+asyncpg://lodge@db/lodge"


class TestValidation:
    def test_concurrency_must_be_positive(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LODGE_NOTIFICATIONS__MAX_CONCURRENCY", "0")

        with pytest.raises(ValidationError):
            Config()
