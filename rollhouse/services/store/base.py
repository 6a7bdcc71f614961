"""
Order Store Abstract Base Class

An order store keeps one JSON document per order, keyed by ``orderId``.
Documents use the same camelCase keys as the HTTP API.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional


OrderDocument = dict[str, Any]


class BaseOrderStore(ABC):
    """Interface every order store implements."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        pass

    async def init(self) -> None:
        """Prepare the backing storage. Called once at startup."""

    async def close(self) -> None:
        """Release connections. Called once at shutdown."""

    @abstractmethod
    async def save(self, order: OrderDocument) -> None:
        """Write ``order`` under its ``orderId``, replacing any existing document."""

    @abstractmethod
    async def get(self, order_id: str) -> Optional[OrderDocument]:
        """Return the stored document, or None."""

    @abstractmethod
    async def update(self, order_id: str, fields: dict[str, Any]) -> bool:
        """
        Merge top-level ``fields`` into an existing document.

        Returns:
            False if no order with ``order_id`` exists
        """

    @abstractmethod
    async def query(
        self,
        status: Optional[str] = None,
        zone: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> list[OrderDocument]:
        """Orders matching the equality filters, newest ``createdAt`` first."""

    @abstractmethod
    async def created_between(self, start: str, end: str) -> list[OrderDocument]:
        """Orders with ``start <= createdAt < end`` (ISO-8601 UTC strings)."""
