"""
Notification Service Abstract Base Class

Defines the interface for sending SMS, email and push notifications.

Every implementation must contain its own failures: a send never raises.
Errors and missing configuration come back as an unsuccessful
NotificationResult and are logged by the implementation.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional


@dataclass
class NotificationResult:
    """Result from sending a notification."""
    success: bool
    message_id: Optional[str] = None
    error_message: Optional[str] = None
    provider: str = "unknown"
    skipped: bool = False


class BaseNotificationService(ABC):
    """Abstract base class for notification services."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Return the provider name."""
        pass

    @abstractmethod
    async def send_sms(
        self,
        to_phone: Optional[str],
        message: str,
    ) -> NotificationResult:
        """Send an SMS message."""
        pass

    @abstractmethod
    async def send_email(
        self,
        to_email: Optional[str],
        subject: str,
        body_html: str,
    ) -> NotificationResult:
        """Send an HTML email."""
        pass

    @abstractmethod
    async def send_push(
        self,
        title: str,
        options: Optional[dict[str, Any]] = None,
    ) -> NotificationResult:
        """Send a browser push notification."""
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Report whether the service can deliver every channel it sends on."""
        pass
