"""
Notification Service Factory

Returns Mock or Real notification service based on ENV_MODE.
"""

import logging

from rollhouse.core.config import Settings
from rollhouse.services.notifications.base import (
    BaseNotificationService,
    NotificationResult,
)
from rollhouse.services.notifications.mock import MockNotificationService
from rollhouse.services.notifications.real import RealNotificationService

logger = logging.getLogger(__name__)


def create_notification_service(settings: Settings) -> BaseNotificationService:
    """Build the notification service for the configured environment."""
    if settings.is_development:
        logger.info("Notification Service: Using MockNotificationService (development mode)")
        return MockNotificationService(
            country_code=settings.default_country_code,
            min_latency=0.05,
            max_latency=0.2,
        )

    logger.info(f"Notification Service: Using RealNotificationService ({settings.env_mode.value} mode)")
    return RealNotificationService(settings)


__all__ = [
    "create_notification_service",
    "BaseNotificationService",
    "NotificationResult",
    "MockNotificationService",
    "RealNotificationService",
]
