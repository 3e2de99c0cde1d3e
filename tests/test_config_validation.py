"""Tests for configuration validation with Pydantic."""

import pytest
import yaml
from pydantic import ValidationError

from waitfor.domain.config import AppConfig, HttpProbeConfig, WaitConfig
from waitfor.infrastructure.config.config_manager import ConfigManager, ConfigurationError


class TestWaitConfigValidation:
    """Tests for WaitConfig validation."""

    def test_defaults_match_wait_for_defaults(self):
        """Test that CLI defaults mirror the library defaults"""
        config = WaitConfig()
        assert config.limit == 1800
        assert config.min_interval == 1.0
        assert config.max_interval == 60.0
        assert config.backoff == 1.02
        assert config.reports == 30
        assert config.description is None
        assert config.exit_on_error is False

    def test_backoff_below_one(self):
        """Test backoff must be at least 1.0"""
        with pytest.raises(ValidationError, match="backoff"):
            WaitConfig(backoff=0.5)

    def test_negative_limit(self):
        """Test limit must be non-negative"""
        with pytest.raises(ValidationError, match="limit"):
            WaitConfig(limit=-1)

    def test_negative_reports(self):
        """Test reports must be non-negative"""
        with pytest.raises(ValidationError, match="reports"):
            WaitConfig(reports=-3)


class TestHttpProbeConfigValidation:
    """Tests for HttpProbeConfig validation."""

    def test_default_status(self):
        """Test that 200 is the default accepted status"""
        assert HttpProbeConfig().expected_status == [200]

    def test_timeout_must_be_positive(self):
        """Test timeout must be positive"""
        with pytest.raises(ValidationError, match="timeout"):
            HttpProbeConfig(timeout=0)


class TestAppConfig:
    """Tests for AppConfig."""

    def test_unknown_section_rejected(self):
        """Test extra sections are rejected"""
        with pytest.raises(ValidationError):
            AppConfig(unknown={})


class TestConfigManager:
    """Tests for ConfigManager loading."""

    def test_defaults_without_file(self, tmp_path, monkeypatch):
        """Test defaults when no config file exists"""
        monkeypatch.chdir(tmp_path)
        manager = ConfigManager()
        assert manager.config_path is None
        assert manager.get_wait_config() == WaitConfig()

    def test_load_from_file(self, tmp_path):
        """Test values from .waitfor.yml"""
        config_file = tmp_path / ".waitfor.yml"
        config_file.write_text(
            yaml.dump({"wait": {"limit": 120, "backoff": 1.1}, "http": {"expected_status": [204]}}),
            encoding="utf-8",
        )
        manager = ConfigManager(config_path=config_file)
        assert manager.get_wait_config().limit == 120
        assert manager.get_wait_config().backoff == 1.1
        assert manager.get_wait_config().reports == 30
        assert manager.get_http_config().expected_status == [204]

    def test_file_found_in_parent_directory(self, tmp_path, monkeypatch):
        """Test that the config file is searched upwards"""
        (tmp_path / ".waitfor.yml").write_text("wait:\n  reports: 5\n", encoding="utf-8")
        child = tmp_path / "a" / "b"
        child.mkdir(parents=True)
        monkeypatch.chdir(child)
        manager = ConfigManager()
        assert manager.config_path == tmp_path / ".waitfor.yml"
        assert manager.get_wait_config().reports == 5

    def test_env_overrides_file(self, tmp_path, monkeypatch):
        """Test that WAITFOR_* variables win over the file"""
        config_file = tmp_path / ".waitfor.yml"
        config_file.write_text("wait:\n  limit: 120\n", encoding="utf-8")
        monkeypatch.setenv("WAITFOR_LIMIT", "15")
        monkeypatch.setenv("WAITFOR_DESCRIPTION", "cache warm")
        manager = ConfigManager(config_path=config_file)
        assert manager.get_wait_config().limit == 15
        assert manager.get_wait_config().description == "cache warm"

    def test_invalid_env_value(self, tmp_path, monkeypatch):
        """Test that an unparsable env value is a configuration error"""
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("WAITFOR_REPORTS", "many")
        with pytest.raises(ConfigurationError, match="WAITFOR_REPORTS"):
            ConfigManager()

    def test_invalid_value_in_file(self, tmp_path):
        """Test that validation errors are reported per field"""
        config_file = tmp_path / ".waitfor.yml"
        config_file.write_text("wait:\n  backoff: 0.5\n", encoding="utf-8")
        with pytest.raises(ConfigurationError, match="wait.backoff"):
            ConfigManager(config_path=config_file)

    def test_unknown_key_in_file(self, tmp_path):
        """Test that unknown sections fail validation"""
        config_file = tmp_path / ".waitfor.yml"
        config_file.write_text("bogus:\n  x: 1\n", encoding="utf-8")
        with pytest.raises(ConfigurationError, match="bogus"):
            ConfigManager(config_path=config_file)

    def test_non_mapping_file(self, tmp_path):
        """Test that a YAML list at top level is rejected"""
        config_file = tmp_path / ".waitfor.yml"
        config_file.write_text("- 1\n- 2\n", encoding="utf-8")
        with pytest.raises(ConfigurationError, match="mapping"):
            ConfigManager(config_path=config_file)

    def test_broken_yaml_falls_back_to_defaults(self, tmp_path):
        """Test that unreadable YAML logs a warning and uses defaults"""
        config_file = tmp_path / ".waitfor.yml"
        config_file.write_text("wait: [unclosed\n", encoding="utf-8")
        manager = ConfigManager(config_path=config_file)
        assert manager.get_wait_config() == WaitConfig()
