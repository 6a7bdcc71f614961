"""
Order Service

Order intake, queries, status transitions and dashboard statistics.

Notifications are a best-effort side channel: every send is awaited in
turn, but the outcome never changes what the caller is told. A successful
response does not mean any SMS or email was delivered.
"""

import logging
import random
import string
from datetime import datetime, time, timedelta, timezone
from typing import Any, Callable, Optional

from rollhouse.core.config import Settings
from rollhouse.core.exceptions import InvalidRequestError, OrderNotFoundError
from rollhouse.models import OrderStatus, OPEN_STATUSES
from rollhouse.schemas import OrderCreate
from rollhouse.services import messages
from rollhouse.services.notifications import BaseNotificationService
from rollhouse.services.store import BaseOrderStore, OrderDocument

logger = logging.getLogger(__name__)

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
ORDER_ID_ALPHABET = string.ascii_lowercase + string.digits
ORDER_ID_SUFFIX_LENGTH = 9

MISSING_FIELDS_MESSAGE = "Missing required fields: customer name, phone, or items"
STORE_NOT_CONFIGURED = "Order store not configured"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(moment: datetime) -> str:
    """ISO-8601 in UTC with millisecond precision: ``2026-10-19T08:15:30.123Z``."""
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def generate_order_id(moment: datetime) -> str:
    """
    ``ORDER_<epoch millis>_<9 random [a-z0-9]>``.

    Uniqueness is probabilistic; the store is not consulted.
    """
    millis = (moment - EPOCH) // timedelta(milliseconds=1)
    suffix = "".join(random.choices(ORDER_ID_ALPHABET, k=ORDER_ID_SUFFIX_LENGTH))
    return f"ORDER_{millis}_{suffix}"


class OrderService:
    """
    Handlers behind the order API.

    Args:
        store: Order store, or None to run without persistence
        notifier: SMS / email / push sender
        settings: Admin contacts and message settings
        clock: Returns the current time; replaced in tests
    """

    def __init__(
        self,
        store: Optional[BaseOrderStore],
        notifier: BaseNotificationService,
        settings: Settings,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.store = store
        self.notifier = notifier
        self.settings = settings
        self.clock = clock

    # =========================================================================
    # INTAKE
    # =========================================================================

    async def create_order(self, payload: OrderCreate) -> OrderDocument:
        """
        Validate, persist and announce a new order.

        Raises:
            InvalidRequestError: customer name, phone or items missing
        """
        customer = payload.customer
        if (
            customer is None
            or not (customer.name or "").strip()
            or not (customer.phone or "").strip()
            or not payload.items
        ):
            raise InvalidRequestError(MISSING_FIELDS_MESSAGE)

        now = self.clock()
        timestamp = format_timestamp(now)

        order = payload.model_dump(by_alias=True, exclude_none=True)
        order.update(
            orderId=generate_order_id(now),
            orderStatus=OrderStatus.PENDING.value,
            createdAt=timestamp,
            updatedAt=timestamp,
            paymentStatus="pending",
        )

        if self.store is not None:
            await self.store.save(order)
            logger.info(f"Order {order['orderId']} saved")
        else:
            logger.warning(f"Order store not configured, order logged only: {order}")

        await self._announce_new_order(order)
        return order

    async def _announce_new_order(self, order: OrderDocument) -> None:
        customer = order["customer"]
        settings = self.settings

        await self.notifier.send_sms(settings.admin_phone, messages.admin_order_sms(order))
        await self.notifier.send_sms(
            customer["phone"],
            messages.customer_order_sms(order, settings.restaurant_name, settings.order_tracking_url),
        )

        subject, body = messages.admin_order_email(order)
        await self.notifier.send_email(settings.admin_email, subject, body)

        if customer.get("email"):
            subject, body = messages.customer_order_email(order, settings.restaurant_name)
            await self.notifier.send_email(customer["email"], subject, body)

        await self.notifier.send_push(
            "New Order Received",
            {
                "body": f"{customer['name']} ordered {messages.summarize_items(order['items'])}",
                "tag": order["orderId"],
            },
        )

    # =========================================================================
    # QUERIES
    # =========================================================================

    async def list_orders(
        self,
        status: Optional[str] = None,
        zone: Optional[str] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> dict[str, Any]:
        """
        Newest-first page of orders.

        ``limit + offset`` orders are fetched and the page is sliced from
        that batch, so ``total`` is the batch size rather than the number of
        matching orders.
        """
        if self.store is None:
            return {
                "orders": [],
                "total": 0,
                "limit": limit,
                "offset": offset,
                "message": STORE_NOT_CONFIGURED,
            }

        fetched = await self.store.query(status=status, zone=zone, limit=limit + offset)
        return {
            "orders": fetched[offset:offset + limit],
            "total": len(fetched),
            "limit": limit,
            "offset": offset,
        }

    async def get_order(self, order_id: str) -> OrderDocument:
        if self.store is None:
            raise OrderNotFoundError(STORE_NOT_CONFIGURED)

        order = await self.store.get(order_id)
        if order is None:
            raise OrderNotFoundError("Order not found")
        return order

    # =========================================================================
    # STATUS
    # =========================================================================

    async def update_status(self, order_id: str, order_status: Optional[str]) -> OrderStatus:
        """
        Move an order to ``order_status`` and tell the customer.

        Concurrent updates to the same order are last-write-wins.

        Raises:
            InvalidRequestError: status missing or not a known status
            OrderNotFoundError: store unconfigured or order unknown
        """
        if not order_status:
            raise InvalidRequestError("orderStatus is required")

        if self.store is None:
            raise OrderNotFoundError(STORE_NOT_CONFIGURED)

        try:
            status = OrderStatus(order_status)
        except ValueError:
            raise InvalidRequestError("Invalid order status")

        updated = await self.store.update(order_id, {
            "orderStatus": status.value,
            "updatedAt": format_timestamp(self.clock()),
        })
        if not updated:
            raise OrderNotFoundError("Order not found")

        logger.info(f"Order {order_id} → {status.value}")

        order = await self.store.get(order_id)
        if order is not None and status in messages.STATUS_MESSAGES:
            await self._announce_status(order, status)

        return status

    async def _announce_status(self, order: OrderDocument, status: OrderStatus) -> None:
        customer = order.get("customer") or {}
        order_id = order["orderId"]

        await self.notifier.send_sms(customer.get("phone"), messages.status_sms(order_id, status))

        if customer.get("email"):
            subject, body = messages.status_email(order_id, status)
            await self.notifier.send_email(customer["email"], subject, body)

    # =========================================================================
    # DASHBOARD
    # =========================================================================

    async def dashboard_stats(self) -> dict[str, Any]:
        """Counts and revenue for orders created today (server local time)."""
        if self.store is None:
            return {
                "total_orders": 0,
                "pending_orders": 0,
                "completed_orders": 0,
                "total_revenue": "0.00",
            }

        # Each midnight gets its own offset; a DST day is not 24 hours long.
        local_date = self.clock().astimezone().date()
        today = datetime.combine(local_date, time.min).astimezone()
        tomorrow = datetime.combine(local_date + timedelta(days=1), time.min).astimezone()

        orders = await self.store.created_between(format_timestamp(today), format_timestamp(tomorrow))

        open_values = {s.value for s in OPEN_STATUSES}
        revenue = sum(float(order.get("total") or 0) for order in orders)

        return {
            "total_orders": len(orders),
            "pending_orders": sum(1 for o in orders if o.get("orderStatus") in open_values),
            "completed_orders": sum(
                1 for o in orders if o.get("orderStatus") == OrderStatus.DELIVERED.value
            ),
            "total_revenue": f"{revenue:.2f}",
        }
