from typing import Sequence

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from .models import Order, OrderStatus


class OrderRepository:
    @staticmethod
    async def create_order(db: AsyncSession, order: Order) -> Order:
        db.add(order)
        await db.commit()
        await db.refresh(order)
        return order

    @staticmethod
    async def list_by_status(db: AsyncSession, status: OrderStatus, limit: int) -> Sequence[Order]:
        result = await db.execute(
            select(Order)
            .where(Order.status == status.value)
            .order_by(Order.id.asc())
            .limit(limit)
        )
        return result.scalars().all()

    @staticmethod
    async def mark_processed(db: AsyncSession, order_id: int) -> int:
        """Returns the number of rows that moved from pending to processed."""
        result = await db.execute(
            update(Order)
            .where(Order.id == order_id, Order.status == OrderStatus.PENDING.value)
            .values(status=OrderStatus.PROCESSED.value)
        )
        await db.commit()
        return result.rowcount
