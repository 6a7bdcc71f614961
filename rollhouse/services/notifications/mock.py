"""
Mock Notification Service

Simulates SMS, email and push sending for development.
No actual messages are sent - just logged.
"""

import asyncio
import random
import uuid
import logging
from typing import Any, Optional

from rollhouse.services.notifications.base import (
    BaseNotificationService,
    NotificationResult,
)
from rollhouse.services.phone import format_phone_e164

logger = logging.getLogger(__name__)


class MockNotificationService(BaseNotificationService):
    """Mock notification service for development."""

    def __init__(
        self,
        country_code: str = "+34",
        failure_rate: float = 0.0,
        min_latency: float = 0.0,
        max_latency: float = 0.0,
    ):
        self.country_code = country_code
        self.failure_rate = failure_rate
        self.min_latency = min_latency
        self.max_latency = max_latency
        logger.info(f"MockNotificationService initialized (failure_rate={failure_rate:.0%})")

    @property
    def provider_name(self) -> str:
        return "mock"

    async def _simulate_latency(self) -> None:
        """Simulate network latency."""
        if self.max_latency > 0:
            await asyncio.sleep(random.uniform(self.min_latency, self.max_latency))

    def _should_fail(self) -> bool:
        return random.random() < self.failure_rate

    async def send_sms(
        self,
        to_phone: Optional[str],
        message: str,
    ) -> NotificationResult:
        """Simulate sending SMS."""
        if not to_phone:
            logger.info("SMS skipped - no recipient phone")
            return NotificationResult(success=False, skipped=True, provider="mock")

        await self._simulate_latency()
        formatted = format_phone_e164(to_phone, self.country_code)

        if self._should_fail():
            logger.error(f"SMS error: simulated failure to {formatted}")
            return NotificationResult(
                success=False,
                error_message="Simulated SMS failure",
                provider="mock"
            )

        message_id = f"sms_mock_{uuid.uuid4().hex[:12]}"
        logger.info(f"Mock SMS sent to {formatted}: {message[:50]!r} (ID: {message_id})")

        return NotificationResult(
            success=True,
            message_id=message_id,
            provider="mock"
        )

    async def send_email(
        self,
        to_email: Optional[str],
        subject: str,
        body_html: str,
    ) -> NotificationResult:
        """Simulate sending email."""
        if not to_email:
            logger.info("Email skipped - no recipient address")
            return NotificationResult(success=False, skipped=True, provider="mock")

        await self._simulate_latency()

        if self._should_fail():
            logger.error(f"Email error: simulated failure to {to_email}")
            return NotificationResult(
                success=False,
                error_message="Simulated email failure",
                provider="mock"
            )

        message_id = f"email_mock_{uuid.uuid4().hex[:12]}"
        logger.info(f"Mock email sent to {to_email}: {subject} (ID: {message_id})")

        return NotificationResult(
            success=True,
            message_id=message_id,
            provider="mock"
        )

    async def send_push(
        self,
        title: str,
        options: Optional[dict[str, Any]] = None,
    ) -> NotificationResult:
        """Log the push payload."""
        logger.info(f"Mock push notification: {title} {options or {}}")
        return NotificationResult(success=True, provider="mock")

    async def health_check(self) -> bool:
        """Mock always returns healthy."""
        return True
