"""Application configuration loader.

Loads configuration from data/config/lctrack.yaml, falling back to
built-in defaults when the file is absent.

Usage:
    from lctrack.config.app_config import load_app_config

    config = load_app_config()
    db_path = config.database.path
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import structlog
import yaml

logger = structlog.get_logger(__name__)

# Config file path (relative to project root)
CONFIG_FILE = Path("data/config/lctrack.yaml")

DEFAULT_GRAPHQL_URL = "https://leetcode.com/graphql"


@dataclass
class DatabaseConfig:
    """SQLite database location."""

    path: Path = Path("lc_tracking.db")


@dataclass
class ResolverConfig:
    """Settings for the GraphQL ID resolver."""

    graphql_url: str = DEFAULT_GRAPHQL_URL


@dataclass
class BankConfig:
    """Where problem bank JSON files live."""

    dir: Path = Path("static")


@dataclass
class AppConfig:
    """Application-wide configuration."""

    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    resolver: ResolverConfig = field(default_factory=ResolverConfig)
    bank: BankConfig = field(default_factory=BankConfig)


# Module-level cache
_cached_config: AppConfig | None = None


def _get_defaults() -> dict[str, Any]:
    """Get default configuration values."""
    return {
        "database": {"path": "lc_tracking.db"},
        "resolver": {"graphql_url": DEFAULT_GRAPHQL_URL},
        "bank": {"dir": "static"},
    }


def _parse_config(data: dict[str, Any]) -> AppConfig:
    """Parse configuration dictionary into AppConfig object."""
    defaults = _get_defaults()

    db_data = data.get("database") or {}
    resolver_data = data.get("resolver") or {}
    bank_data = data.get("bank") or {}

    return AppConfig(
        database=DatabaseConfig(
            path=Path(db_data.get("path", defaults["database"]["path"])),
        ),
        resolver=ResolverConfig(
            graphql_url=resolver_data.get(
                "graphql_url", defaults["resolver"]["graphql_url"]
            ),
        ),
        bank=BankConfig(
            dir=Path(bank_data.get("dir", defaults["bank"]["dir"])),
        ),
    )


def load_app_config(
    config_path: Path | None = None,
    force_reload: bool = False,
) -> AppConfig:
    """Load application config.

    Args:
        config_path: Explicit YAML file. Defaults to CONFIG_FILE.
        force_reload: If True, ignore cached config and reload from file.

    Returns:
        AppConfig object with all settings.
    """
    global _cached_config

    if _cached_config is not None and not force_reload and config_path is None:
        return _cached_config

    path = config_path or CONFIG_FILE
    data: dict[str, Any]

    if path.exists():
        logger.debug("loading_app_config", source=str(path))
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    else:
        logger.debug("using_default_config", missing=str(path))
        data = _get_defaults()

    config = _parse_config(data)
    if config_path is None:
        _cached_config = config
    return config


def clear_config_cache() -> None:
    """Clear the configuration cache.

    Useful for testing or when config is modified at runtime.
    """
    global _cached_config
    _cached_config = None
