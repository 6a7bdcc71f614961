"""
Pydantic Schemas for Request/Response Validation

Wire format uses camelCase keys (``orderId``, ``rollType``); Python code
uses snake_case attributes through alias generation.
"""

from typing import Any, Optional, List

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# =============================================================================
# REQUEST SCHEMAS
# =============================================================================

class CustomerInfo(CamelModel):
    """Customer contact and delivery details."""
    model_config = ConfigDict(extra="allow")

    name: Optional[str] = Field(None, examples=["Lucia Fernandez"])
    phone: Optional[str] = Field(None, examples=["612 345 678"])
    email: Optional[str] = Field(None, examples=["lucia@example.com"])
    address: Optional[str] = Field(None, examples=["Calle Mayor 12, 3B"])
    zone: Optional[str] = Field(None, examples=["centro"])

    @field_validator("email")
    @classmethod
    def blank_email_is_none(cls, v: Optional[str]) -> Optional[str]:
        if v is None or not v.strip():
            return None
        return v.strip()


class OrderItem(CamelModel):
    """Single line in an order."""
    model_config = ConfigDict(extra="allow")

    roll_type: str = Field(..., min_length=1, examples=["Chicken Tikka Roll"])
    quantity: int = Field(..., ge=1, examples=[2])
    price: float = Field(..., ge=0, examples=[8.5])


class DeliveryInfo(CamelModel):
    model_config = ConfigDict(extra="allow")

    time_window: Optional[str] = Field(None, examples=["20:00 - 20:30"])


class OrderCreate(CamelModel):
    """
    Request body for creating an order.

    Only customer name, phone and a non-empty item list are mandatory; the
    order service reports those as a single 400. Unknown top-level keys are
    kept and stored with the order.
    """
    model_config = ConfigDict(extra="allow")

    customer: Optional[CustomerInfo] = None
    items: List[OrderItem] = Field(default_factory=list)
    delivery: Optional[DeliveryInfo] = None
    total: float = Field(default=0.0, ge=0)
    special_instructions: Optional[str] = None


class OrderStatusUpdate(CamelModel):
    """Request body for PATCH /api/orders/{order_id}."""
    order_status: Optional[str] = Field(None, examples=["preparing"])


# =============================================================================
# RESPONSE SCHEMAS
# =============================================================================

class OrderCreateResponse(CamelModel):
    """Response after successfully creating an order."""
    success: bool
    order_id: str
    message: str


class OrderListResponse(CamelModel):
    """
    Response for listing orders.

    ``total`` counts the fetched batch (limit + offset records), not every
    order matching the filters.
    """
    orders: List[dict[str, Any]]
    total: int
    limit: int
    offset: int
    message: Optional[str] = None


class OrderStatusResponse(CamelModel):
    success: bool
    message: str
    order_status: str


class DashboardStats(CamelModel):
    """Aggregates over today's orders."""
    total_orders: int = 0
    pending_orders: int = 0
    completed_orders: int = 0
    total_revenue: str = "0.00"


class ErrorResponse(BaseModel):
    """Standard error response."""
    success: bool = False
    error: str


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    timestamp: str
