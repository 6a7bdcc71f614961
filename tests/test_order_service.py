"""Tests for order service internals: ids, timestamps, message bodies and the dashboard day."""

import asyncio
import os
import re
import time
from datetime import datetime, timedelta, timezone

import pytest

from rollhouse.core.exceptions import InvalidRequestError
from rollhouse.models import OrderStatus
from rollhouse.schemas import OrderCreate
from rollhouse.services import messages
from rollhouse.services.orders import OrderService, format_timestamp, generate_order_id
from tests.fakes import FakeClock, FakeOrderStore, RecordingNotificationService, order_payload


MOMENT = datetime(2026, 10, 19, 12, 0, 0, 123000, tzinfo=timezone.utc)


class TestIdentifiersAndTimestamps:

    def test_order_id_embeds_epoch_millis(self):
        order_id = generate_order_id(MOMENT)
        assert re.fullmatch(r"ORDER_1792411200123_[a-z0-9]{9}", order_id)

    def test_timestamp_is_utc_millis_with_z(self):
        assert format_timestamp(MOMENT) == "2026-10-19T12:00:00.123Z"

    def test_timestamp_converts_to_utc(self):
        madrid = timezone(timedelta(hours=2))
        assert format_timestamp(MOMENT.astimezone(madrid)) == "2026-10-19T12:00:00.123Z"


class TestMessages:

    ORDER = {
        "orderId": "ORDER_1_abcdefghi",
        "customer": {
            "name": "Lucia <b>",
            "phone": "612345678",
            "email": "lucia@example.com",
            "address": "Calle Mayor 12",
            "zone": "centro",
        },
        "items": [
            {"rollType": "Chicken Tikka Roll", "quantity": 2, "price": 8.5},
            {"rollType": "Paneer Roll", "quantity": 1, "price": 7.5},
        ],
        "delivery": {"timeWindow": "20:00 - 20:30"},
        "total": 24.5,
        "createdAt": "2026-10-19T12:00:00.000Z",
    }

    def test_item_summary(self):
        assert messages.summarize_items(self.ORDER["items"]) == (
            "2x Chicken Tikka Roll (€17.00), 1x Paneer Roll (€7.50)"
        )

    def test_admin_sms(self):
        assert messages.admin_order_sms(self.ORDER) == (
            "🌯 NEW ORDER - ORDER_1_abcdefghi\n\n"
            "Lucia <b>\n"
            "2x Chicken Tikka Roll (€17.00), 1x Paneer Roll (€7.50)\n"
            "Total: €24.50\n"
            "Zone: centro\n"
            "Delivery: 20:00 - 20:30"
        )

    def test_customer_sms(self):
        text = messages.customer_order_sms(self.ORDER, "LOCO DHAASU", "locodhaasu.com/orders")
        assert text.startswith("🌯 LOCO DHAASU - Order confirmed!")
        assert "Order ID: ORDER_1_abcdefghi" in text
        assert "Total: €24.50" in text
        assert text.endswith("Track updates at: locodhaasu.com/orders")

    def test_admin_email_escapes_customer_input(self):
        subject, body = messages.admin_order_email(self.ORDER)
        assert subject == "New Order - ORDER_1_abcdefghi"
        assert "Lucia &lt;b&gt;" in body
        assert "<li>2x Chicken Tikka Roll - €17.00</li>" in body
        assert "Special Instructions" not in body

    def test_admin_email_includes_instructions(self):
        order = {**self.ORDER, "specialInstructions": "Ring twice"}
        _, body = messages.admin_order_email(order)
        assert "<strong>Special Instructions:</strong> Ring twice" in body

    def test_customer_email(self):
        subject, body = messages.customer_order_email(self.ORDER, "LOCO DHAASU")
        assert subject == "Order Confirmed - LOCO DHAASU"
        assert "<li>1x Paneer Roll</li>" in body
        assert "20:00 - 20:30" in body

    def test_status_messages_cover_progress_statuses_only(self):
        assert set(messages.STATUS_MESSAGES) == {
            OrderStatus.CONFIRMED,
            OrderStatus.PREPARING,
            OrderStatus.OUT_FOR_DELIVERY,
            OrderStatus.DELIVERED,
        }


class TestCreateOrderService:

    def test_push_payload(self, order_service, notifier):
        order = asyncio.run(order_service.create_order(OrderCreate(**order_payload())))
        assert notifier.pushes == [(
            "New Order Received",
            {
                "body": "Lucia Fernandez ordered 2x Chicken Tikka Roll (€17.00), 1x Paneer Roll (€7.50)",
                "tag": order["orderId"],
            },
        )]

    def test_notifications_in_order(self, order_service, notifier):
        asyncio.run(order_service.create_order(OrderCreate(**order_payload())))
        admin_sms, customer_sms = notifier.sms
        assert admin_sms[1].startswith("🌯 NEW ORDER")
        assert "Order confirmed!" in customer_sms[1]
        assert notifier.emails[0][1].startswith("New Order - ")
        assert notifier.emails[1][1] == "Order Confirmed - LOCO DHAASU"

    def test_validation_raises(self, order_service, store):
        with pytest.raises(InvalidRequestError):
            asyncio.run(order_service.create_order(OrderCreate(**order_payload(items=[]))))
        assert store.writes == 0


@pytest.fixture
def madrid_tz():
    """Run with the process local time zone set to Europe/Madrid."""
    previous = os.environ.get("TZ")
    os.environ["TZ"] = "Europe/Madrid"
    time.tzset()
    yield
    if previous is None:
        os.environ.pop("TZ", None)
    else:
        os.environ["TZ"] = previous
    time.tzset()


@pytest.mark.skipif(not hasattr(time, "tzset"), reason="needs time.tzset")
class TestDashboardDayBoundaries:

    # Summer time ends in Madrid at 01:00 UTC on 2026-10-25.
    def _stats_for(self, settings, created_at: list[datetime], asked_at: datetime) -> dict:
        clock = FakeClock()
        service = OrderService(FakeOrderStore(), RecordingNotificationService(), settings, clock=clock)

        async def scenario():
            for moment in created_at:
                clock.now = moment
                await service.create_order(OrderCreate(**order_payload(total=2.0)))
            clock.now = asked_at
            return await service.dashboard_stats()

        return asyncio.run(scenario())

    def test_clock_change_day_runs_midnight_to_midnight(self, madrid_tz, settings):
        stats = self._stats_for(
            settings,
            created_at=[
                datetime(2026, 10, 24, 21, 30, tzinfo=timezone.utc),  # 23:30 local on the 24th
                datetime(2026, 10, 24, 22, 30, tzinfo=timezone.utc),  # 00:30 local on the 25th
                datetime(2026, 10, 25, 22, 30, tzinfo=timezone.utc),  # 23:30 local on the 25th
                datetime(2026, 10, 25, 23, 30, tzinfo=timezone.utc),  # 00:30 local on the 26th
            ],
            asked_at=datetime(2026, 10, 25, 11, 0, tzinfo=timezone.utc),
        )
        assert stats["total_orders"] == 2
        assert stats["total_revenue"] == "4.00"

    def test_summer_day_starts_at_local_midnight(self, madrid_tz, settings):
        stats = self._stats_for(
            settings,
            created_at=[
                datetime(2026, 7, 14, 21, 59, tzinfo=timezone.utc),  # 23:59 local on the 14th
                datetime(2026, 7, 14, 22, 0, tzinfo=timezone.utc),   # 00:00 local on the 15th
            ],
            asked_at=datetime(2026, 7, 15, 9, 0, tzinfo=timezone.utc),
        )
        assert stats["total_orders"] == 1
