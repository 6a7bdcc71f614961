"""
Real Notification Service

Production implementation using:
- Twilio for SMS
- SendGrid for Email
- A logging stub for browser push

Both SDKs are blocking, so each call runs in a worker thread.
"""

import asyncio
import logging
from typing import Any, Optional

from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Mail
from twilio.rest import Client as TwilioClient
from twilio.base.exceptions import TwilioException

from rollhouse.core.config import Settings
from rollhouse.services.notifications.base import (
    BaseNotificationService,
    NotificationResult,
)
from rollhouse.services.phone import format_phone_e164

logger = logging.getLogger(__name__)


class RealNotificationService(BaseNotificationService):
    """Production notification service using Twilio and SendGrid."""

    def __init__(self, settings: Settings):
        self.country_code = settings.default_country_code
        self.push_enabled = settings.push_configured

        # Initialize Twilio
        if settings.twilio_configured:
            self.twilio_client = TwilioClient(
                settings.twilio_account_sid,
                settings.twilio_auth_token
            )
            self.twilio_from_number = settings.twilio_phone_number
        else:
            self.twilio_client = None
            self.twilio_from_number = None
            logger.warning("Twilio credentials not configured")

        # Initialize SendGrid
        if settings.sendgrid_configured:
            self.sendgrid_client = SendGridAPIClient(settings.sendgrid_api_key)
        else:
            self.sendgrid_client = None
            logger.warning("SendGrid credentials not configured")
        self.sendgrid_from_email = settings.email_from

        logger.info("RealNotificationService initialized")

    @property
    def provider_name(self) -> str:
        return "real"

    async def send_sms(
        self,
        to_phone: Optional[str],
        message: str,
    ) -> NotificationResult:
        """Send SMS via Twilio."""
        if not self.twilio_client:
            logger.info("SMS skipped - Twilio not configured")
            return NotificationResult(
                success=False,
                skipped=True,
                error_message="Twilio not configured",
                provider="twilio"
            )

        if not to_phone:
            logger.info("SMS skipped - no recipient phone")
            return NotificationResult(success=False, skipped=True, provider="twilio")

        try:
            formatted_phone = format_phone_e164(to_phone, self.country_code)

            result = await asyncio.to_thread(
                self.twilio_client.messages.create,
                body=message,
                from_=self.twilio_from_number,
                to=formatted_phone,
            )

            logger.info(f"SMS sent to {formatted_phone}: {result.sid}")

            return NotificationResult(
                success=True,
                message_id=result.sid,
                provider="twilio"
            )

        except TwilioException as e:
            logger.error(f"Twilio error: {e}")
            return NotificationResult(
                success=False,
                error_message=str(e),
                provider="twilio"
            )
        except Exception as e:
            logger.error(f"SMS error: {e}")
            return NotificationResult(
                success=False,
                error_message=str(e),
                provider="twilio"
            )

    async def send_email(
        self,
        to_email: Optional[str],
        subject: str,
        body_html: str,
    ) -> NotificationResult:
        """Send email via SendGrid."""
        if not self.sendgrid_client:
            logger.info("Email skipped - SendGrid not configured")
            return NotificationResult(
                success=False,
                skipped=True,
                error_message="SendGrid not configured",
                provider="sendgrid"
            )

        if not to_email:
            logger.info("Email skipped - no recipient address")
            return NotificationResult(success=False, skipped=True, provider="sendgrid")

        try:
            message = Mail(
                from_email=self.sendgrid_from_email,
                to_emails=to_email,
                subject=subject,
                html_content=body_html,
            )

            response = await asyncio.to_thread(self.sendgrid_client.send, message)

            logger.info(f"Email sent to {to_email}: {response.status_code}")

            return NotificationResult(
                success=response.status_code in [200, 201, 202],
                message_id=response.headers.get('X-Message-Id'),
                provider="sendgrid"
            )

        except Exception as e:
            logger.error(f"SendGrid error: {e}")
            return NotificationResult(
                success=False,
                error_message=str(e),
                provider="sendgrid"
            )

    async def send_push(
        self,
        title: str,
        options: Optional[dict[str, Any]] = None,
    ) -> NotificationResult:
        """
        Browser push stub.

        There is no subscription registry yet, so the payload is only logged.
        """
        if not self.push_enabled:
            logger.info("Push notification skipped - push service not configured")
            return NotificationResult(success=False, skipped=True, provider="push")

        logger.info(f"Push notification: {title} {options or {}}")
        return NotificationResult(success=True, provider="push")

    async def health_check(self) -> bool:
        """True when both Twilio and SendGrid are configured."""
        return self.twilio_client is not None and self.sendgrid_client is not None
