"""
SQLAlchemy Order Store

Persists order documents in the ``orders`` table through an async engine.
Works with PostgreSQL (psycopg) in production and SQLite (aiosqlite) for
local runs and tests.
"""

import logging
from typing import Any, Optional

from sqlalchemy import select

from rollhouse.database import create_engine, create_session_maker, init_db
from rollhouse.models import OrderRecord
from rollhouse.services.store.base import BaseOrderStore, OrderDocument

logger = logging.getLogger(__name__)


class SqlOrderStore(BaseOrderStore):
    """Order store backed by a relational database."""

    def __init__(self, database_url: str, echo: bool = False):
        self.engine = create_engine(database_url, echo=echo)
        self.session_maker = create_session_maker(self.engine)

    @property
    def provider_name(self) -> str:
        return f"sql:{self.engine.dialect.name}"

    async def init(self) -> None:
        await init_db(self.engine)
        logger.info("✅ Order store tables ready")

    async def close(self) -> None:
        await self.engine.dispose()

    async def save(self, order: OrderDocument) -> None:
        record = OrderRecord(
            order_id=order["orderId"],
            document=order,
            **OrderRecord.columns_for(order),
        )
        async with self.session_maker() as session:
            await session.merge(record)
            await session.commit()

    async def get(self, order_id: str) -> Optional[OrderDocument]:
        async with self.session_maker() as session:
            record = await session.get(OrderRecord, order_id)
            return dict(record.document) if record else None

    async def update(self, order_id: str, fields: dict[str, Any]) -> bool:
        async with self.session_maker() as session:
            record = await session.get(OrderRecord, order_id)
            if record is None:
                return False

            # Reassign so the JSON column is marked dirty
            document = {**record.document, **fields}
            record.document = document
            for column, value in OrderRecord.columns_for(document).items():
                setattr(record, column, value)

            await session.commit()
            return True

    async def query(
        self,
        status: Optional[str] = None,
        zone: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> list[OrderDocument]:
        stmt = select(OrderRecord)
        if status:
            stmt = stmt.where(OrderRecord.order_status == status)
        if zone:
            stmt = stmt.where(OrderRecord.zone == zone)
        stmt = stmt.order_by(OrderRecord.created_at.desc())
        if limit is not None:
            stmt = stmt.limit(limit)

        async with self.session_maker() as session:
            result = await session.execute(stmt)
            return [dict(record.document) for record in result.scalars().all()]

    async def created_between(self, start: str, end: str) -> list[OrderDocument]:
        stmt = select(OrderRecord).where(
            OrderRecord.created_at >= start,
            OrderRecord.created_at < end,
        )
        async with self.session_maker() as session:
            result = await session.execute(stmt)
            return [dict(record.document) for record in result.scalars().all()]
