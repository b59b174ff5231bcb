"""
Order Store

Persists priced orders and lists them with their restaurant joined in. The
total handed to create() comes from OrderPricer and is stored as-is.
"""

import logging
from collections.abc import Sequence
from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import selectinload

from app.database import Database, storage_errors
from app.models import Order
from app.schemas import OrderRecordCreate
from app.validation import parse_candidate

logger = logging.getLogger(__name__)


class OrderStore:
    """Persistence for orders."""

    def __init__(self, database: Database):
        self.database = database

    async def create(self, restaurant_id: int, items: Sequence[Any], total: Any) -> Order:
        """
        Store a new order.

        Args:
            restaurant_id: Id of an existing restaurant
            items: Order lines as submitted (OrderLine models or mappings)
            total: Pre-computed order total

        Returns:
            The stored order including its generated id

        Raises:
            ValidationError: If a required field is absent or malformed
            StorageError: If the datastore fails
        """
        data = parse_candidate(
            OrderRecordCreate,
            {"restaurantId": restaurant_id, "items": items, "total": total},
            "Order",
        )

        async with storage_errors("create order"):
            async with self.database.session() as session:
                order = Order(
                    restaurant_id=data.restaurant_id,
                    items=[line.model_dump() for line in data.items],
                    total=data.total,
                )
                session.add(order)
                await session.commit()
                await session.refresh(order)

        logger.info(
            f"Order #{order.id} created for restaurant #{order.restaurant_id} "
            f"({len(order.items)} lines, total={order.total})"
        )
        return order

    async def list_all(self) -> list[Order]:
        """
        Return every stored order in insertion order.

        Each order's ``restaurant`` is loaded as the current restaurant
        record, not the one that existed when the order was placed.

        Raises:
            StorageError: If the datastore fails
        """
        async with storage_errors("list orders"):
            async with self.database.session() as session:
                result = await session.execute(
                    select(Order)
                    .options(selectinload(Order.restaurant))
                    .order_by(Order.id)
                )
                return list(result.scalars().all())
