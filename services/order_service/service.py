import re

import structlog
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from shared.errors import InvalidInput, StorageFailure
from shared.observability.metrics import (
    orders_created_total,
    orders_processed_total,
    orders_storage_failures_total,
)
from .models import Order, OrderStatus
from .repository import OrderRepository
from .schemas import OrderCreate, OrderSummary

logger = structlog.get_logger(__name__)

# Upper bound of the 32-bit `orders.id` column; larger ids cannot match a row
MAX_ORDER_ID = 2_147_483_647

_DIGITS = re.compile(r"[0-9]+")


def parse_order_id(raw: str | None) -> int:
    """Accept only a plain positive integer; anything else is `Invalid id`."""
    value = (raw or "").strip()
    if not _DIGITS.fullmatch(value):
        raise InvalidInput("Invalid id")
    digits = value.lstrip("0")
    if not digits:
        raise InvalidInput("Invalid id")
    if len(digits) > len(str(MAX_ORDER_ID)):
        # Out of column range either way; skip int() on arbitrarily long input
        return MAX_ORDER_ID + 1
    return int(digits)


async def _storage_failure(db: AsyncSession, operation: str) -> StorageFailure:
    await db.rollback()
    error = StorageFailure(operation)
    orders_storage_failures_total.labels(operation=operation).inc()
    # Full exception stays in the server log, the client only sees the reference
    logger.exception("storage_failure", operation=operation, reference=error.reference)
    return error


class OrderService:
    @staticmethod
    async def create_order(db: AsyncSession, data: OrderCreate) -> Order:
        if not data.name or not data.email or not data.product:
            raise InvalidInput("Missing fields")

        order = Order(
            name=data.name,
            email=data.email,
            product=data.product,
            phone=data.phone,
            comment=data.comment,
            status=OrderStatus.PENDING.value
        )
        try:
            order = await OrderRepository.create_order(db, order)
        except (SQLAlchemyError, OSError) as exc:
            raise await _storage_failure(db, "create_order") from exc

        orders_created_total.inc()
        logger.info("order_created", order_id=order.id, product=order.product)
        return order

    @staticmethod
    async def list_pending(db: AsyncSession, limit: int) -> list[OrderSummary]:
        try:
            orders = await OrderRepository.list_by_status(db, OrderStatus.PENDING, limit)
        except (SQLAlchemyError, OSError) as exc:
            raise await _storage_failure(db, "list_pending") from exc
        return [OrderSummary.model_validate(order) for order in orders]

    @staticmethod
    async def mark_processed(db: AsyncSession, order_id: int) -> bool:
        """
        Move one order to processed. Succeeds whether or not a row changed;
        the return value tells the caller if this call did the transition.
        """
        if order_id > MAX_ORDER_ID:
            logger.info("order_not_pending", order_id=order_id)
            return False

        try:
            changed = await OrderRepository.mark_processed(db, order_id)
        except (SQLAlchemyError, OSError) as exc:
            raise await _storage_failure(db, "mark_processed") from exc

        if not changed:
            logger.info("order_not_pending", order_id=order_id)
            return False

        orders_processed_total.inc()
        logger.info("order_processed", order_id=order_id)
        return True
