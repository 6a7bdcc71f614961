"""
Order Store Factory

Builds the order store from DATABASE_URL. Without a URL the application
runs in degraded mode: orders are logged and notified but not persisted.
"""

import logging
from typing import Optional

from rollhouse.core.config import Settings
from rollhouse.services.store.base import BaseOrderStore, OrderDocument
from rollhouse.services.store.sql import SqlOrderStore

logger = logging.getLogger(__name__)


def create_order_store(settings: Settings) -> Optional[BaseOrderStore]:
    """Build the configured order store, or None when unconfigured."""
    if not settings.store_configured:
        logger.warning("Order store not configured - orders will not be persisted")
        return None

    store = SqlOrderStore(settings.database_url, echo=settings.database_echo)
    logger.info(f"Order Store: Using SqlOrderStore ({store.provider_name})")
    return store


__all__ = [
    "create_order_store",
    "BaseOrderStore",
    "OrderDocument",
    "SqlOrderStore",
]
