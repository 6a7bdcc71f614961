"""
Core module initialization.
Exports configuration, logging and error utilities.
"""

from rollhouse.core.config import get_settings, setup_logging, Settings, EnvironmentMode
from rollhouse.core.exceptions import (
    OrderServiceError,
    InvalidRequestError,
    OrderNotFoundError,
)

__all__ = [
    "get_settings",
    "setup_logging",
    "Settings",
    "EnvironmentMode",
    "OrderServiceError",
    "InvalidRequestError",
    "OrderNotFoundError",
]
