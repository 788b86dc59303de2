"""Tests for config module."""

from pathlib import Path

import pytest

from gradle_project_config.config import Config, create_default_config, get_config_path, load_config
from gradle_project_config.persistence import (
    DefaultProjectConfigurationPersistence,
    LegacyCleaningProjectConfigurationPersistence,
    create_persistence,
)
from tests.helpers import _write_config


class TestConfig:
    """Tests for Config model."""

    def test_default_config(self) -> None:
        """Test the packaged default configuration."""
        config = create_default_config()

        assert config.metadata_dir.is_absolute()
        assert "~" not in str(config.metadata_dir)
        assert config.legacy.location == ".settings/gradle.prefs"
        assert config.legacy.node_name == "gradle"
        assert config.legacy.enabled is True
        assert config.logging.level == "WARNING"
        assert config.meta.schema_version == 1

    def test_path_expansion(self) -> None:
        """Test that ~ is expanded in the metadata directory."""
        config = Config.model_validate({"workspace": {"metadata_dir": "~/workspace"}})

        assert "~" not in str(config.metadata_dir)
        assert config.metadata_dir.is_absolute()

    def test_legacy_location_must_be_relative(self) -> None:
        """Test that an absolute legacy location is rejected."""
        with pytest.raises(ValueError):
            Config.model_validate(
                {"workspace": {"metadata_dir": "/tmp/ws"}, "legacy": {"location": "/etc/gradle.prefs"}}
            )

    def test_log_level_validation(self) -> None:
        """Test that log levels are normalized and validated."""
        config = Config.model_validate({"workspace": {"metadata_dir": "/tmp/ws"}, "logging": {"level": "debug"}})
        assert config.logging.level == "DEBUG"

        with pytest.raises(ValueError):
            Config.model_validate({"workspace": {"metadata_dir": "/tmp/ws"}, "logging": {"level": "LOUD"}})

    def test_save_and_load_roundtrip(self, tmp_path: Path) -> None:
        """Test that config can be saved and loaded correctly."""
        config_file = tmp_path / "nested" / "config.toml"
        original = Config.model_validate(
            {
                "workspace": {"metadata_dir": str(tmp_path / "ws")},
                "legacy": {"enabled": False, "node_name": "legacy"},
            }
        )

        original.save(config_file)
        loaded = load_config(config_file)

        assert loaded.metadata_dir == tmp_path / "ws"
        assert loaded.legacy.enabled is False
        assert loaded.legacy.node_name == "legacy"


class TestGetConfigPath:
    """Tests for get_config_path function."""

    def test_get_config_path_default(self, monkeypatch) -> None:
        """Test default config path when no env var is set."""
        monkeypatch.delenv("GRADLE_PROJECT_CONFIG", raising=False)

        path = get_config_path()

        assert path.is_absolute()
        assert str(path).endswith(".config/gradle-project-config/config.toml")

    def test_get_config_path_from_env(self, monkeypatch, tmp_path: Path) -> None:
        """Test that GRADLE_PROJECT_CONFIG env var takes priority."""
        custom_path = tmp_path / "custom-config.toml"
        monkeypatch.setenv("GRADLE_PROJECT_CONFIG", str(custom_path))

        assert get_config_path() == custom_path


class TestLoadConfig:
    """Tests for load_config function."""

    def test_partial_user_config_merges_defaults(self, tmp_path: Path) -> None:
        """Test that missing sections fall back to packaged defaults."""
        config_file = tmp_path / "config.toml"
        _write_config(config_file, tmp_path / "ws")

        config = load_config(config_file)

        assert config.metadata_dir == tmp_path / "ws"
        assert config.legacy.location == ".settings/gradle.prefs"
        assert config.logging.level == "WARNING"

    def test_missing_config_is_created(self, tmp_path: Path) -> None:
        """Test that a missing config file is created from the template."""
        config_file = tmp_path / "new" / "config.toml"

        config = load_config(config_file)

        assert config_file.exists()
        assert config.legacy.enabled is True

    def test_invalid_config_raises(self, tmp_path: Path) -> None:
        """Test that invalid values raise ValueError."""
        config_file = tmp_path / "config.toml"
        config_file.write_text('[legacy]\nnode_name = ""\n', encoding="utf-8")

        with pytest.raises(ValueError):
            load_config(config_file)


class TestCreatePersistence:
    """Tests for create_persistence."""

    def test_legacy_enabled(self, tmp_path: Path) -> None:
        """Test that the default store is wrapped by the legacy persistence."""
        config_file = tmp_path / "config.toml"
        _write_config(config_file, tmp_path / "ws")

        persistence = create_persistence(load_config(config_file))

        assert isinstance(persistence, LegacyCleaningProjectConfigurationPersistence)
        assert isinstance(persistence.delegate, DefaultProjectConfigurationPersistence)

    def test_legacy_disabled(self, tmp_path: Path) -> None:
        """Test that the bare default store is used when legacy handling is off."""
        config_file = tmp_path / "config.toml"
        _write_config(config_file, tmp_path / "ws", legacy_enabled=False)

        persistence = create_persistence(load_config(config_file))

        assert isinstance(persistence, DefaultProjectConfigurationPersistence)
