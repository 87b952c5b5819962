"""Configuration loading, schema, and persisted state."""

from sastview.config.loader import ConfigError, load_config
from sastview.config.schema import SastViewConfig
from sastview.config.store import REPO_KEY, StateStore, StoreError

__all__ = [
    "REPO_KEY",
    "ConfigError",
    "SastViewConfig",
    "StateStore",
    "StoreError",
    "load_config",
]
