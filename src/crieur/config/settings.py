"""
Crieur configuration with hybrid YAML + ENV support.

Priority: Environment variables > environment YAML > default YAML > Pydantic defaults
"""

import os
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Type

import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from crieur.constants import DEVNET_RPC, PROGRAM_ID, TOKEN_METADATA_PROGRAM_ID
from crieur.utils.validation import validate_solana_address


class CircuitBreakerSettings(BaseModel):
    """Circuit breaker configuration for the RPC endpoint."""

    failure_threshold: int = Field(default=5, ge=1, le=100)
    success_threshold: int = Field(default=2, ge=1, le=10)
    timeout: float = Field(default=30.0, ge=1.0, le=600.0)


class RetrySettings(BaseModel):
    """Retry configuration for transient RPC failures."""

    max_attempts: int = Field(default=3, ge=1, le=10)
    initial_delay: float = Field(default=0.5, ge=0.0, le=10.0)
    max_delay: float = Field(default=5.0, ge=0.1, le=300.0)
    exponential_base: float = Field(default=2.0, ge=1.0, le=10.0)
    jitter: bool = Field(default=True)


class TimeoutSettings(BaseModel):
    """Timeout configuration for outbound calls (seconds)."""

    rpc_call: float = Field(default=10.0, ge=1.0, le=60.0)
    offchain_fetch: float = Field(default=10.0, ge=1.0, le=60.0)


class ResilienceSettings(BaseModel):
    """Resilience patterns configuration."""

    circuit_breaker: CircuitBreakerSettings = Field(
        default_factory=CircuitBreakerSettings
    )
    retry: RetrySettings = Field(default_factory=RetrySettings)
    timeouts: TimeoutSettings = Field(default_factory=TimeoutSettings)


class CacheSettings(BaseModel):
    """
    Metadata cache policy.

    maxsize None means unbounded for the process lifetime;
    ttl_seconds None means entries never expire.
    """

    maxsize: Optional[int] = Field(default=None, ge=1)
    ttl_seconds: Optional[float] = Field(default=None, gt=0)


class CrieurConfig(BaseSettings):
    """Crieur configuration schema."""

    model_config = SettingsConfigDict(
        env_prefix="CRIEUR_",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    # Logging
    log_level: str = Field(default="info")
    log_dir: Optional[str] = Field(default=None)

    # Blockchain configuration
    solana_rpc_url: str = Field(default=DEVNET_RPC)
    solana_network: str = Field(default="devnet")
    program_id: str = Field(default=PROGRAM_ID)
    metadata_program_id: str = Field(default=TOKEN_METADATA_PROGRAM_ID)

    resilience: ResilienceSettings = Field(default_factory=ResilienceSettings)
    cache: CacheSettings = Field(default_factory=CacheSettings)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: Type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> Tuple[PydanticBaseSettingsSource, ...]:
        """Environment variables override values loaded from YAML."""
        return (env_settings, init_settings, dotenv_settings, file_secret_settings)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        allowed = ["debug", "info", "warning", "error", "critical"]
        v_lower = v.lower()
        if v_lower not in allowed:
            raise ValueError(f"Invalid log_level. Must be one of: {allowed}")
        return v_lower

    @field_validator("solana_network")
    @classmethod
    def validate_network(cls, v: str) -> str:
        """Validate Solana network."""
        allowed = ["devnet", "testnet", "mainnet-beta", "localnet"]
        v_lower = v.lower()
        if v_lower not in allowed:
            raise ValueError(f"Invalid network. Must be one of: {allowed}")
        return v_lower

    @field_validator("program_id", "metadata_program_id")
    @classmethod
    def validate_program_id(cls, v: str) -> str:
        """Validate program ids are base-58 addresses."""
        if not validate_solana_address(v):
            raise ValueError(f"Invalid program id: {v}")
        return v


def _read_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    with open(path, "r") as f:
        loaded = yaml.safe_load(f)
    return loaded or {}


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(
    config_file: Optional[str] = None,
    config_dir: Optional[Path] = None,
) -> CrieurConfig:
    """
    Load configuration from YAML files.

    Priority: Environment variables > environment-specific YAML > default YAML

    Args:
        config_file: Optional YAML filename override
        config_dir: Optional config directory (defaults to <project>/config)

    Returns:
        CrieurConfig instance
    """
    env = os.getenv("ENV", "production")

    config_map = {
        "production": "production.yaml",
        "development": "development.yaml",
        "test": "test.yaml",
    }

    if config_dir is None:
        config_dir = Path(
            os.getenv(
                "CRIEUR_CONFIG_DIR",
                Path(__file__).resolve().parents[3] / "config",
            )
        )

    merged = _read_yaml(config_dir / "default.yaml")

    if config_file is None:
        config_file = os.getenv("CRIEUR_CONFIG") or config_map.get(
            env, "production.yaml"
        )

    merged = _deep_merge(merged, _read_yaml(config_dir / config_file))

    return CrieurConfig(**merged)


_settings: Optional[CrieurConfig] = None


def get_settings() -> CrieurConfig:
    """
    Get singleton settings instance.

    Returns:
        CrieurConfig instance
    """
    global _settings
    if _settings is None:
        _settings = load_config()
    return _settings


def reset_settings() -> None:
    """Drop the cached settings instance (used by tests)."""
    global _settings
    _settings = None
