"""Application configuration helpers."""

from __future__ import annotations

from .budget import BudgetConfig, get_budget_config
from .errors import ConfigurationError
from .logging import configure_logging
from .storage import DatabaseConfig, StorageConfig, get_database_config, get_storage_config

__all__ = [
    "BudgetConfig",
    "ConfigurationError",
    "DatabaseConfig",
    "StorageConfig",
    "configure_logging",
    "get_budget_config",
    "get_database_config",
    "get_storage_config",
]
