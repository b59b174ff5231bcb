"""
Restaurant Store

Create, list and look up restaurant records. Every call opens its own
session on the injected Database handle; no restaurant state is cached
between calls.
"""

import logging
from typing import Any, Optional

from sqlalchemy import select

from app.database import Database, storage_errors
from app.models import Restaurant
from app.schemas import RestaurantCreate
from app.validation import parse_candidate

logger = logging.getLogger(__name__)


class RestaurantStore:
    """
    Persistence for restaurants.

    Example:
        >>> store = RestaurantStore(database)
        >>> created = await store.create({"name": "Pizza Place", "menu": []})
        >>> [r.name for r in await store.list_all()]
        ['Pizza Place']
    """

    def __init__(self, database: Database):
        self.database = database

    async def list_all(self) -> list[Restaurant]:
        """
        Return every stored restaurant in insertion order.

        Raises:
            StorageError: If the datastore fails
        """
        async with storage_errors("list restaurants"):
            async with self.database.session() as session:
                result = await session.execute(select(Restaurant).order_by(Restaurant.id))
                return list(result.scalars().all())

    async def get(self, restaurant_id: int) -> Optional[Restaurant]:
        """
        Fetch one restaurant by id.

        Returns:
            The restaurant, or None if no restaurant has this id

        Raises:
            StorageError: If the datastore fails
        """
        async with storage_errors("get restaurant"):
            async with self.database.session() as session:
                return await session.get(Restaurant, restaurant_id)

    async def create(self, candidate: Any) -> Restaurant:
        """
        Validate and store a new restaurant.

        Args:
            candidate: RestaurantCreate or a mapping with name and optional menu

        Returns:
            The stored restaurant including its generated id

        Raises:
            ValidationError: If name is missing or empty, or a menu entry is malformed
            StorageError: If the datastore fails
        """
        data = parse_candidate(RestaurantCreate, candidate, "Restaurant")

        async with storage_errors("create restaurant"):
            async with self.database.session() as session:
                restaurant = Restaurant(
                    name=data.name,
                    menu=[entry.model_dump() for entry in data.menu],
                )
                session.add(restaurant)
                await session.commit()
                await session.refresh(restaurant)

        logger.info(
            f"Restaurant #{restaurant.id} created: {restaurant.name} "
            f"({len(restaurant.menu)} menu items)"
        )
        return restaurant
