"""
                        Services Module

Contains the business logic behind the HTTP endpoints. Every service is
constructed around the Database handle opened by the application lifespan,
so routes obtain them through the FastAPI dependency providers below.

Services:
    - restaurants: RestaurantStore (create, list, get)
    - pricing: OrderPricer (menu validation and order totals)
    - orders: OrderStore (create, list with restaurant joined)

Usage:
    @router.post("/orders")
    async def place_order(pricer: OrderPricer = Depends(get_order_pricer)):
        ...
"""

from fastapi import Depends

from app.database import Database, get_database
from app.services.orders import OrderStore
from app.services.pricing import (
    OrderPricer,
    PricedLine,
    PricedOrder,
    compute_total,
    find_menu_item,
)
from app.services.restaurants import RestaurantStore


def get_restaurant_store(database: Database = Depends(get_database)) -> RestaurantStore:
    """Provide a RestaurantStore bound to the application datastore."""
    return RestaurantStore(database)


def get_order_store(database: Database = Depends(get_database)) -> OrderStore:
    """Provide an OrderStore bound to the application datastore."""
    return OrderStore(database)


def get_order_pricer(
    restaurants: RestaurantStore = Depends(get_restaurant_store),
) -> OrderPricer:
    """Provide an OrderPricer reading menus through the RestaurantStore."""
    return OrderPricer(restaurants)


__all__ = [
    "RestaurantStore",
    "OrderStore",
    "OrderPricer",
    "PricedLine",
    "PricedOrder",
    "compute_total",
    "find_menu_item",
    "get_restaurant_store",
    "get_order_store",
    "get_order_pricer",
]
