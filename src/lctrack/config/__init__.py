"""Configuration package for lctrack."""

from lctrack.config.app_config import (
    AppConfig,
    BankConfig,
    DatabaseConfig,
    ResolverConfig,
    clear_config_cache,
    load_app_config,
)

__all__ = [
    "AppConfig",
    "BankConfig",
    "DatabaseConfig",
    "ResolverConfig",
    "clear_config_cache",
    "load_app_config",
]
