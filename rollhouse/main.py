"""
FastAPI Application Entry Point

Rollhouse ordering backend: takes orders from the website, stores them and
notifies the restaurant and the customer by SMS and email.

Endpoints:
    - GET /health: Liveness probe
    - POST /api/orders: Create order
    - GET /api/orders: List orders
    - GET /api/orders/{order_id}: Fetch one order
    - PATCH /api/orders/{order_id}: Update order status
    - GET /api/dashboard/stats: Today's order statistics

Run:
    uvicorn rollhouse.main:app --port 3001
"""

import logging
from typing import Any, Optional
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, HTTPException, Depends, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from rollhouse.core.config import get_settings, setup_logging
from rollhouse.core.exceptions import OrderServiceError
from rollhouse.schemas import (
    OrderCreate,
    OrderCreateResponse,
    OrderListResponse,
    OrderStatusUpdate,
    OrderStatusResponse,
    DashboardStats,
    ErrorResponse,
    HealthResponse,
)
from rollhouse.services.notifications import create_notification_service
from rollhouse.services.orders import OrderService, format_timestamp, utc_now
from rollhouse.services.store import create_order_store

# Initialize configuration and logging
settings = get_settings()
setup_logging()
logger = logging.getLogger(__name__)


# =============================================================================
# APPLICATION LIFECYCLE
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Build the order store and notification clients at startup and
    release them at shutdown.
    """
    logger.info("=" * 60)
    logger.info(f"🌯 Starting {settings.app_name}")
    logger.info(f"   Version: {settings.app_version}")
    logger.info(f"   Environment: {settings.env_mode.value}")
    logger.info("=" * 60)

    store = create_order_store(settings)
    if store is not None:
        await store.init()

    notifier = create_notification_service(settings)
    app.state.order_service = OrderService(store, notifier, settings)

    for name, configured in settings.integration_status().items():
        logger.info(f"   {name}: {'Configured ✓' if configured else 'Not configured'}")

    if not await notifier.health_check():
        logger.warning(f"⚠️ {notifier.provider_name} notifications degraded: some channels will be skipped")

    logger.info("=" * 60)
    logger.info("✅ Application ready!")
    logger.info("=" * 60)

    yield  # Application runs

    logger.info("Shutting down...")
    if store is not None:
        await store.close()
    logger.info("✅ Cleanup complete")


# =============================================================================
# APPLICATION INSTANCE
# =============================================================================

app = FastAPI(
    title=settings.app_name,
    description="Order intake and SMS / email notification backend for the Rollhouse website.",
    version=settings.app_version,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_order_service(request: Request) -> OrderService:
    """Order service built during startup."""
    return request.app.state.order_service


# =============================================================================
# HEALTH
# =============================================================================

@app.get(
    "/health",
    response_model=HealthResponse,
    tags=["Health"],
    summary="Liveness Probe",
)
async def health_check() -> HealthResponse:
    return HealthResponse(status="OK", timestamp=format_timestamp(utc_now()))


# =============================================================================
# ORDER API ENDPOINTS
# =============================================================================

@app.post(
    "/api/orders",
    status_code=201,
    response_model=OrderCreateResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    tags=["Orders"],
    summary="Create Order",
)
async def create_order(
    order_data: OrderCreate,
    service: OrderService = Depends(get_order_service),
) -> OrderCreateResponse:
    """
    Create a new order and notify the restaurant and customer.

    Notification failures are logged and never fail the request.
    """
    try:
        order = await service.create_order(order_data)
        logger.info(f"Order {order['orderId']} created successfully")

        return OrderCreateResponse(
            success=True,
            order_id=order["orderId"],
            message="Order placed successfully",
        )

    except OrderServiceError:
        raise
    except Exception as e:
        logger.exception(f"Order creation error: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@app.get(
    "/api/orders",
    response_model=OrderListResponse,
    response_model_exclude_none=True,
    responses={500: {"model": ErrorResponse}},
    tags=["Orders"],
    summary="List Orders",
)
async def list_orders(
    status: Optional[str] = Query(None),
    zone: Optional[str] = Query(None),
    limit: int = Query(50, ge=1),
    offset: int = Query(0, ge=0),
    service: OrderService = Depends(get_order_service),
) -> dict[str, Any]:
    """Newest-first orders, optionally filtered by status and delivery zone."""
    try:
        return await service.list_orders(status=status, zone=zone, limit=limit, offset=offset)
    except Exception as e:
        logger.exception(f"Orders fetch error: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@app.get(
    "/api/orders/{order_id}",
    responses={404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    tags=["Orders"],
)
async def get_order(
    order_id: str,
    service: OrderService = Depends(get_order_service),
) -> dict[str, Any]:
    """Get a specific order by ID."""
    try:
        return await service.get_order(order_id)
    except OrderServiceError:
        raise
    except Exception as e:
        logger.exception(f"Order fetch error: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@app.patch(
    "/api/orders/{order_id}",
    response_model=OrderStatusResponse,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
    tags=["Orders"],
    summary="Update Order Status",
)
async def update_order_status(
    order_id: str,
    update: OrderStatusUpdate,
    service: OrderService = Depends(get_order_service),
) -> OrderStatusResponse:
    """Change an order's status and send the customer a status message."""
    try:
        status = await service.update_status(order_id, update.order_status)

        return OrderStatusResponse(
            success=True,
            message="Order updated successfully",
            order_status=status.value,
        )

    except OrderServiceError:
        raise
    except Exception as e:
        logger.exception(f"Order update error: {e}")
        raise HTTPException(status_code=500, detail=str(e))


# =============================================================================
# DASHBOARD ENDPOINTS
# =============================================================================

@app.get(
    "/api/dashboard/stats",
    response_model=DashboardStats,
    responses={500: {"model": ErrorResponse}},
    tags=["Dashboard"],
)
async def dashboard_stats(
    service: OrderService = Depends(get_order_service),
) -> DashboardStats:
    """Order counts and revenue for today."""
    try:
        return DashboardStats(**await service.dashboard_stats())
    except Exception as e:
        logger.exception(f"Stats fetch error: {e}")
        raise HTTPException(status_code=500, detail=str(e))


# =============================================================================
# ERROR HANDLERS
# =============================================================================

@app.exception_handler(OrderServiceError)
async def order_service_error_handler(request: Request, exc: OrderServiceError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": exc.message},
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed bodies and query strings are client errors (400)."""
    details = "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
        for error in exc.errors()
    )
    return JSONResponse(
        status_code=400,
        content={"success": False, "error": f"Invalid request - {details}"},
    )


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all exception handler."""
    logger.exception(f"Unhandled exception: {exc}")

    return JSONResponse(
        status_code=500,
        content={"success": False, "error": "Internal server error"},
    )


def run() -> None:
    """Serve the API with uvicorn on the configured host and port."""
    uvicorn.run(app, host=settings.api_host, port=settings.api_port)


if __name__ == "__main__":
    run()
