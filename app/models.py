"""
SQLAlchemy Database Models

Restaurants and orders are stored as documents: a restaurant keeps its menu
embedded as a JSON list of {item, price}, an order keeps its lines embedded
as a JSON list of {item, quantity}. The only link between the two tables is
the order's restaurant_id reference.
"""

from sqlalchemy import Column, Integer, String, Float, DateTime, ForeignKey, JSON
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.database import Base


class Restaurant(Base):
    """
    A restaurant and its menu.

    Created once and never updated or deleted by the API.
    """
    __tablename__ = "restaurants"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    name = Column(String(255), nullable=False)

    # Ordered list of {"item": str, "price": number}; first match wins on lookup
    menu = Column(JSON, nullable=False, default=list)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self):
        return f"<Restaurant #{self.id} - {self.name} - {len(self.menu or [])} items>"


class Order(Base):
    """
    A placed order.

    The total is computed from the restaurant menu when the order is placed
    and is never recomputed afterwards.
    """
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)

    # Weak reference: no cascade, the restaurant may change independently
    restaurant_id = Column(
        Integer,
        ForeignKey("restaurants.id"),
        nullable=False,
        index=True,
    )

    # Ordered list of {"item": str, "quantity": number}, as submitted
    items = Column(JSON, nullable=False, default=list)

    total = Column(Float, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Loaded explicitly when listing orders
    restaurant = relationship("Restaurant", lazy="raise")

    def __repr__(self):
        return f"<Order #{self.id} - restaurant #{self.restaurant_id} - {self.total}>"
