"""
Unit tests for Crieur configuration.

Tests config defaults, validation, YAML merging and environment overrides.

Usage:
    pytest tests/unit/test_config.py
"""

import pytest
import yaml
from pydantic import ValidationError

from crieur.config import CrieurConfig, get_settings, load_config
from crieur.constants import DEVNET_RPC, PROGRAM_ID


def _write_yaml(path, data) -> None:
    path.write_text(yaml.safe_dump(data))


class TestCrieurConfig:
    """Unit tests for Crieur configuration system."""

    def test_default_config(self, monkeypatch):
        """Test default configuration values."""
        self.reporter.info("Testing default config values", context="Test")

        monkeypatch.delenv("CRIEUR_SOLANA_RPC_URL", raising=False)
        config = CrieurConfig()

        assert config.solana_rpc_url == DEVNET_RPC
        assert config.solana_network == "devnet"
        assert config.program_id == PROGRAM_ID
        assert config.log_level == "info"
        assert config.cache.maxsize is None
        assert config.cache.ttl_seconds is None
        assert config.resilience.retry.max_attempts == 3

        self.reporter.info("Default config values correct", context="Test")

    def test_values_normalised(self):
        """Test log level and network are lower-cased."""
        self.reporter.info("Testing value normalisation", context="Test")

        config = CrieurConfig(log_level="DEBUG", solana_network="Mainnet-Beta")

        assert config.log_level == "debug"
        assert config.solana_network == "mainnet-beta"

        self.reporter.info("Values normalised", context="Test")

    def test_invalid_values_rejected(self):
        """Test validation of log level, network and program ids."""
        self.reporter.info("Testing config validation", context="Test")

        with pytest.raises(ValidationError):
            CrieurConfig(log_level="verbose")

        with pytest.raises(ValidationError):
            CrieurConfig(solana_network="moonnet")

        with pytest.raises(ValidationError):
            CrieurConfig(program_id="not-a-program")

        with pytest.raises(ValidationError):
            CrieurConfig(cache={"maxsize": 0})

        self.reporter.info("Invalid values rejected", context="Test")

    def test_load_config_merges_yaml(self, tmp_path, monkeypatch):
        """Test environment YAML deep-merges over default YAML."""
        self.reporter.info("Testing YAML merge", context="Test")

        monkeypatch.delenv("CRIEUR_CONFIG", raising=False)
        monkeypatch.setenv("ENV", "development")
        _write_yaml(
            tmp_path / "default.yaml",
            {
                "log_level": "info",
                "resilience": {"retry": {"max_attempts": 4, "initial_delay": 0.2}},
            },
        )
        _write_yaml(
            tmp_path / "development.yaml",
            {"log_level": "debug", "resilience": {"retry": {"max_attempts": 1}}},
        )

        config = load_config(config_dir=tmp_path)

        assert config.log_level == "debug"
        assert config.resilience.retry.max_attempts == 1
        assert config.resilience.retry.initial_delay == 0.2

        self.reporter.info("YAML files merged", context="Test")

    def test_env_overrides_yaml(self, tmp_path, monkeypatch):
        """Test CRIEUR_* environment variables win over YAML."""
        self.reporter.info("Testing environment override", context="Test")

        _write_yaml(
            tmp_path / "default.yaml",
            {"solana_rpc_url": "http://yaml:8899", "cache": {"ttl_seconds": 30}},
        )
        monkeypatch.setenv("CRIEUR_SOLANA_RPC_URL", "http://env:8899")
        monkeypatch.setenv("CRIEUR_CACHE__MAXSIZE", "50")

        config = load_config("missing.yaml", config_dir=tmp_path)

        assert config.solana_rpc_url == "http://env:8899"
        assert config.cache.maxsize == 50
        assert config.cache.ttl_seconds == 30

        self.reporter.info("Environment wins over YAML", context="Test")

    def test_missing_files_use_defaults(self, tmp_path, monkeypatch):
        """Test an empty config directory yields model defaults."""
        self.reporter.info("Testing missing YAML files", context="Test")

        monkeypatch.delenv("CRIEUR_SOLANA_RPC_URL", raising=False)
        config = load_config(config_dir=tmp_path)

        assert config.solana_rpc_url == DEVNET_RPC

        self.reporter.info("Defaults used", context="Test")

    def test_repository_test_config(self, monkeypatch):
        """Test the shipped test.yaml loads and validates."""
        self.reporter.info("Testing shipped test config", context="Test")

        monkeypatch.setenv("ENV", "test")
        monkeypatch.delenv("CRIEUR_CONFIG", raising=False)
        monkeypatch.delenv("CRIEUR_CONFIG_DIR", raising=False)

        config = load_config()

        assert config.log_level == "warning"
        assert config.resilience.retry.max_attempts == 1
        assert config.cache.maxsize == 128

        self.reporter.info("Shipped test config valid", context="Test")

    def test_get_settings_is_singleton(self):
        """Test get_settings caches one instance."""
        self.reporter.info("Testing settings singleton", context="Test")

        assert get_settings() is get_settings()

        self.reporter.info("Settings cached", context="Test")
