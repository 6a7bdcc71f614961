"""Tests for the notification services.

Twilio and SendGrid clients are replaced with mocks; nothing leaves the
process.
"""

import asyncio
import logging
from unittest.mock import MagicMock

import pytest
from twilio.base.exceptions import TwilioException

from rollhouse.core.config import Settings
from rollhouse.services.notifications import (
    MockNotificationService,
    RealNotificationService,
    create_notification_service,
)


def _settings(**overrides) -> Settings:
    return Settings(_env_file=None, env_mode="production", **overrides)


@pytest.fixture
def configured():
    service = RealNotificationService(_settings(
        twilio_account_sid="AC" + "0" * 32,
        twilio_auth_token="token",
        twilio_phone_number="+34911000000",
        sendgrid_api_key="SG.test",
        push_server_key="push-key",
    ))
    service.twilio_client = MagicMock()
    service.sendgrid_client = MagicMock()
    return service


class TestFactory:

    def test_development_uses_mock(self):
        service = create_notification_service(Settings(_env_file=None, env_mode="development"))
        assert isinstance(service, MockNotificationService)

    @pytest.mark.parametrize("mode", ["staging", "production"])
    def test_other_modes_use_real(self, mode):
        service = create_notification_service(Settings(_env_file=None, env_mode=mode))
        assert isinstance(service, RealNotificationService)


class TestUnconfigured:

    def test_everything_is_skipped(self, caplog):
        service = RealNotificationService(_settings())
        caplog.set_level(logging.INFO)

        sms = asyncio.run(service.send_sms("612345678", "hi"))
        email = asyncio.run(service.send_email("a@example.com", "s", "<p>b</p>"))
        push = asyncio.run(service.send_push("title", {"tag": "x"}))

        assert sms.skipped and not sms.success
        assert email.skipped and not email.success
        assert push.skipped and not push.success
        assert "SMS skipped - Twilio not configured" in caplog.text
        assert "Email skipped - SendGrid not configured" in caplog.text

    def test_twilio_needs_sender_number(self):
        service = RealNotificationService(_settings(
            twilio_account_sid="AC" + "0" * 32,
            twilio_auth_token="token",
        ))
        assert service.twilio_client is None


class TestSms:

    def test_sends_normalized_number(self, configured):
        configured.twilio_client.messages.create.return_value = MagicMock(sid="SM123")

        result = asyncio.run(configured.send_sms("0612 345 678", "Order confirmed"))

        assert result.success
        assert result.message_id == "SM123"
        configured.twilio_client.messages.create.assert_called_once_with(
            body="Order confirmed",
            from_="+34911000000",
            to="+34612345678",
        )

    def test_missing_recipient_is_skipped(self, configured):
        result = asyncio.run(configured.send_sms(None, "hi"))
        assert result.skipped
        configured.twilio_client.messages.create.assert_not_called()

    @pytest.mark.parametrize("error", [TwilioException("bad number"), ConnectionError("down")])
    def test_failures_are_contained(self, configured, caplog, error):
        configured.twilio_client.messages.create.side_effect = error

        result = asyncio.run(configured.send_sms("612345678", "hi"))

        assert not result.success
        assert result.error_message == str(error)
        assert any(r.levelno == logging.ERROR for r in caplog.records)


class TestEmail:

    def test_sends_html_email(self, configured):
        configured.sendgrid_client.send.return_value = MagicMock(
            status_code=202, headers={"X-Message-Id": "msg-1"}
        )

        result = asyncio.run(configured.send_email("a@example.com", "Subject", "<p>Body</p>"))

        assert result.success
        assert result.message_id == "msg-1"
        mail = configured.sendgrid_client.send.call_args.args[0]
        assert mail.subject.subject == "Subject"
        assert mail.from_email.email == "noreply@locodhaasu.com"

    def test_rejected_status_is_not_success(self, configured):
        configured.sendgrid_client.send.return_value = MagicMock(status_code=400, headers={})
        result = asyncio.run(configured.send_email("a@example.com", "Subject", "<p>Body</p>"))
        assert not result.success

    def test_failures_are_contained(self, configured):
        configured.sendgrid_client.send.side_effect = RuntimeError("relay down")

        result = asyncio.run(configured.send_email("a@example.com", "Subject", "<p>Body</p>"))

        assert not result.success
        assert result.error_message == "relay down"

    def test_missing_recipient_is_skipped(self, configured):
        result = asyncio.run(configured.send_email(None, "Subject", "<p>Body</p>"))
        assert result.skipped
        configured.sendgrid_client.send.assert_not_called()


class TestPush:

    def test_push_is_logged(self, configured, caplog):
        caplog.set_level(logging.INFO)
        result = asyncio.run(configured.send_push("New Order Received", {"tag": "ORDER_1_x"}))
        assert result.success
        assert "New Order Received" in caplog.text


class TestMockService:

    def test_logs_instead_of_sending(self, caplog):
        caplog.set_level(logging.INFO)
        service = MockNotificationService(country_code="+34")

        sms = asyncio.run(service.send_sms("0612345678", "hello"))
        email = asyncio.run(service.send_email("a@example.com", "Subject", "<p/>"))

        assert sms.success and email.success
        assert "+34612345678" in caplog.text

    def test_simulated_failures_are_results(self):
        service = MockNotificationService(failure_rate=1.0)
        result = asyncio.run(service.send_sms("612345678", "hello"))
        assert not result.success
        assert result.error_message == "Simulated SMS failure"

    def test_mock_is_always_healthy(self):
        assert asyncio.run(MockNotificationService().health_check())


class TestHealthCheck:

    def test_healthy_when_twilio_and_sendgrid_configured(self, configured):
        assert asyncio.run(configured.health_check())

    def test_unhealthy_without_credentials(self):
        assert not asyncio.run(RealNotificationService(_settings()).health_check())

    def test_unhealthy_with_sms_only(self):
        service = RealNotificationService(_settings(
            twilio_account_sid="AC" + "0" * 32,
            twilio_auth_token="token",
            twilio_phone_number="+34911000000",
        ))
        assert not asyncio.run(service.health_check())
