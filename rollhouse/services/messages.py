"""
Notification message bodies.

SMS texts are plain strings; emails are small HTML fragments built with
f-strings. Customer-supplied values are escaped before they go into HTML.
"""

from datetime import datetime
from html import escape
from typing import Any

from rollhouse.models import OrderStatus
from rollhouse.services.store import OrderDocument


STATUS_MESSAGES = {
    OrderStatus.CONFIRMED: "✓ Your order has been confirmed!",
    OrderStatus.PREPARING: "👨‍🍳 We're preparing your rolls!",
    OrderStatus.OUT_FOR_DELIVERY: "🛵 Your order is on the way!",
    OrderStatus.DELIVERED: "✓ Order delivered! Enjoy!",
}


def format_euros(amount: Any) -> str:
    return f"€{float(amount or 0):.2f}"


def line_total(item: dict[str, Any]) -> float:
    return float(item.get("price") or 0) * int(item.get("quantity") or 0)


def summarize_items(items: list[dict[str, Any]]) -> str:
    """``"2x Chicken Roll (€17.00), 1x Paneer Roll (€7.50)"``"""
    return ", ".join(
        f"{item['quantity']}x {item['rollType']} ({format_euros(line_total(item))})"
        for item in items
    )


def _customer(order: OrderDocument) -> dict[str, Any]:
    return order.get("customer") or {}


def _time_window(order: OrderDocument) -> str:
    return (order.get("delivery") or {}).get("timeWindow") or "ASAP"


# =============================================================================
# NEW ORDER
# =============================================================================

def admin_order_sms(order: OrderDocument) -> str:
    customer = _customer(order)
    return (
        f"🌯 NEW ORDER - {order['orderId']}\n\n"
        f"{customer.get('name')}\n"
        f"{summarize_items(order['items'])}\n"
        f"Total: {format_euros(order.get('total'))}\n"
        f"Zone: {customer.get('zone') or '-'}\n"
        f"Delivery: {_time_window(order)}"
    )


def customer_order_sms(order: OrderDocument, restaurant_name: str, tracking_url: str) -> str:
    return (
        f"🌯 {restaurant_name} - Order confirmed!\n\n"
        f"Order ID: {order['orderId']}\n"
        f"Total: {format_euros(order.get('total'))}\n"
        f"Delivery: {_time_window(order)}\n\n"
        f"Track updates at: {tracking_url}"
    )


def admin_order_email(order: OrderDocument) -> tuple[str, str]:
    """Subject and HTML body for the restaurant's new-order email."""
    customer = _customer(order)
    items_html = "".join(
        f"<li>{item['quantity']}x {escape(str(item['rollType']))} - {format_euros(line_total(item))}</li>"
        for item in order["items"]
    )
    instructions = order.get("specialInstructions")
    instructions_html = (
        f"<p><strong>Special Instructions:</strong> {escape(instructions)}</p>"
        if instructions else ""
    )
    placed_at = datetime.fromisoformat(order["createdAt"].replace("Z", "+00:00")).astimezone()

    body = f"""
      <h2>New Order: {order['orderId']}</h2>
      <p><strong>Customer:</strong> {escape(str(customer.get('name')))}</p>
      <p><strong>Phone:</strong> {escape(str(customer.get('phone')))}</p>
      <p><strong>Email:</strong> {escape(customer.get('email') or 'Not provided')}</p>
      <p><strong>Address:</strong> {escape(customer.get('address') or '-')}</p>
      <p><strong>Zone:</strong> {escape(customer.get('zone') or '-')}</p>
      <h3>Items:</h3>
      <ul>{items_html}</ul>
      <p><strong>Total:</strong> {format_euros(order.get('total'))}</p>
      <p><strong>Delivery Time:</strong> {escape(_time_window(order))}</p>
      {instructions_html}
      <p><small>Order placed: {placed_at:%d/%m/%Y %H:%M:%S}</small></p>
    """
    return f"New Order - {order['orderId']}", body


def customer_order_email(order: OrderDocument, restaurant_name: str) -> tuple[str, str]:
    """Subject and HTML body for the customer's confirmation email."""
    customer = _customer(order)
    items_html = "".join(
        f"<li>{item['quantity']}x {escape(str(item['rollType']))}</li>"
        for item in order["items"]
    )
    body = f"""
      <h2>Order Confirmed! 🌯</h2>
      <p>Hi {escape(str(customer.get('name')))},</p>
      <p>Your order has been received and we're getting started!</p>
      <h3>Order Details:</h3>
      <p><strong>Order ID:</strong> {order['orderId']}</p>
      <ul>{items_html}</ul>
      <p><strong>Total:</strong> {format_euros(order.get('total'))}</p>
      <p><strong>Estimated Delivery:</strong> {escape(_time_window(order))}</p>
      <p>You'll receive updates via SMS. Thank you for your order!</p>
      <p><strong>{escape(restaurant_name)} Team</strong></p>
    """
    return f"Order Confirmed - {restaurant_name}", body


# =============================================================================
# STATUS UPDATES
# =============================================================================

def status_sms(order_id: str, status: OrderStatus) -> str:
    return f"{STATUS_MESSAGES[status]}\nOrder: {order_id}"


def status_email(order_id: str, status: OrderStatus) -> tuple[str, str]:
    message = STATUS_MESSAGES[status]
    return (
        f"Order Update - {message}",
        f"<p>{message}</p><p>Order ID: {order_id}</p>",
    )
