"""Configuration module for managing query settings."""

from config.settings import (
    QueryConfig,
    Config,
)

__all__ = [
    'QueryConfig',
    'Config',
]
