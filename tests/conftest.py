import pytest
from fastapi.testclient import TestClient

from rollhouse.core.config import Settings
from rollhouse.main import app, get_order_service
from rollhouse.services.orders import OrderService
from tests.fakes import (
    BrokenOrderStore,
    FakeClock,
    FakeOrderStore,
    RecordingNotificationService,
)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        admin_phone="+34600111222",
        admin_email="kitchen@rollhouse.test",
        restaurant_name="LOCO DHAASU",
        order_tracking_url="locodhaasu.com/orders",
    )


@pytest.fixture
def store() -> FakeOrderStore:
    return FakeOrderStore()


@pytest.fixture
def notifier() -> RecordingNotificationService:
    return RecordingNotificationService()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def order_service(store, notifier, settings, clock) -> OrderService:
    return OrderService(store, notifier, settings, clock=clock)


def _client_for(service: OrderService):
    app.dependency_overrides[get_order_service] = lambda: service
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def client(order_service):
    yield from _client_for(order_service)


@pytest.fixture
def unconfigured_client(notifier, settings, clock):
    """API running without an order store."""
    yield from _client_for(OrderService(None, notifier, settings, clock=clock))


@pytest.fixture
def broken_client(notifier, settings, clock):
    """API whose order store rejects every write."""
    yield from _client_for(OrderService(BrokenOrderStore(), notifier, settings, clock=clock))
