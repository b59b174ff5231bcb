"""
Core module initialization.
Exports configuration and error types.
"""

from app.core.config import get_settings, setup_logging, Settings, EnvironmentMode
from app.core.errors import (
    OrderingError,
    ValidationError,
    NotFoundError,
    ItemNotFoundError,
    StorageError,
)

__all__ = [
    "get_settings",
    "setup_logging",
    "Settings",
    "EnvironmentMode",
    "OrderingError",
    "ValidationError",
    "NotFoundError",
    "ItemNotFoundError",
    "StorageError",
]
