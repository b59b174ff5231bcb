"""
Order Pricing

Computes an order total from the restaurant's current menu. Prices sent by
the client are never trusted; only the item names and quantities are used.

Algorithm:
    1. The restaurant must exist, otherwise NotFoundError (checked before
       any line, including for an empty order).
    2. Each line, in input order, is matched against the menu by exact,
       case-sensitive item name. The first matching menu entry wins.
    3. A line with no match aborts the whole pricing with ItemNotFoundError
       naming that item. No partial total is ever returned.
    4. The total is the sum of price x quantity (0 for an empty order).

The restaurant is read once per order and its menu searched in memory for
every line.
"""

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Optional, Protocol

from app.core.errors import ItemNotFoundError, NotFoundError
from app.schemas import Number, OrderLine

logger = logging.getLogger(__name__)


class RestaurantLookup(Protocol):
    """Anything that can fetch a restaurant (with a .menu) by id."""

    async def get(self, restaurant_id: int) -> Optional[Any]: ...


@dataclass
class PricedLine:
    """One order line with the unit price it was charged at."""
    item: str
    quantity: Number
    unit_price: Number

    @property
    def line_total(self) -> Number:
        return self.unit_price * self.quantity


@dataclass
class PricedOrder:
    """
    Result of pricing an order.

    Attributes:
        restaurant_id: The restaurant the order was priced against
        total: Sum of all line totals
        lines: Per-line breakdown, in input order
    """
    restaurant_id: int
    total: Number = 0
    lines: list[PricedLine] = field(default_factory=list)


def find_menu_item(menu: Sequence[Mapping[str, Any]], name: str) -> Optional[Mapping[str, Any]]:
    """Return the first menu entry whose item name equals ``name`` exactly."""
    for entry in menu:
        if entry.get("item") == name:
            return entry
    return None


def price_lines(menu: Sequence[Mapping[str, Any]], lines: Sequence[OrderLine]) -> list[PricedLine]:
    """
    Price every line against a menu.

    Raises:
        ItemNotFoundError: For the first line whose item is not on the menu
    """
    priced = []
    for line in lines:
        entry = find_menu_item(menu, line.item)
        if entry is None:
            raise ItemNotFoundError(line.item)
        priced.append(PricedLine(item=line.item, quantity=line.quantity, unit_price=entry["price"]))
    return priced


def sum_lines(priced: Sequence[PricedLine]) -> Number:
    """Order total for already priced lines (0 when empty)."""
    return sum(line.line_total for line in priced)


def compute_total(menu: Sequence[Mapping[str, Any]], lines: Sequence[OrderLine]) -> Number:
    """Sum of price x quantity for all lines; raises ItemNotFoundError on unknown items."""
    return sum_lines(price_lines(menu, lines))


class OrderPricer:
    """
    Prices orders against live restaurant data.

    Example:
        >>> pricer = OrderPricer(restaurant_store)
        >>> priced = await pricer.price(1, [OrderLine(item="Margherita", quantity=2)])
        >>> priced.total
        20
    """

    def __init__(self, restaurants: RestaurantLookup):
        self.restaurants = restaurants

    async def price(self, restaurant_id: int, requested_items: Sequence[OrderLine]) -> PricedOrder:
        """
        Validate every requested line and compute the order total.

        Args:
            restaurant_id: Id of the restaurant being ordered from
            requested_items: Order lines in client order

        Returns:
            PricedOrder with the total and per-line breakdown

        Raises:
            NotFoundError: If the restaurant does not exist
            ItemNotFoundError: If any line's item is not on the menu
            StorageError: If the datastore fails
        """
        restaurant = await self.restaurants.get(restaurant_id)
        if restaurant is None:
            logger.warning(f"Pricing rejected: restaurant #{restaurant_id} not found")
            raise NotFoundError(restaurant_id)

        try:
            lines = price_lines(restaurant.menu or [], requested_items)
        except ItemNotFoundError as e:
            logger.warning(f"Pricing rejected for restaurant #{restaurant_id}: {e}")
            raise

        total = sum_lines(lines)

        logger.debug(f"Priced {len(lines)} lines for restaurant #{restaurant_id}: total={total}")
        return PricedOrder(restaurant_id=restaurant_id, total=total, lines=lines)
