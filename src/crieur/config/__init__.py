"""Configuration for Crieur."""

from crieur.config.settings import (
    CacheSettings,
    CircuitBreakerSettings,
    CrieurConfig,
    ResilienceSettings,
    RetrySettings,
    TimeoutSettings,
    get_settings,
    load_config,
    reset_settings,
)

__all__ = [
    "CacheSettings",
    "CircuitBreakerSettings",
    "CrieurConfig",
    "ResilienceSettings",
    "RetrySettings",
    "TimeoutSettings",
    "get_settings",
    "load_config",
    "reset_settings",
]
