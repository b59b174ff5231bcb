"""
Pydantic Schemas for Request/Response Validation

Request schemas are the typed construction step for incoming data: anything
that does not build one of these models never reaches the datastore.
Response schemas fix the public JSON shapes:

    Restaurant: {id, name, menu: [{item, price}]}
    Order:      {id, restaurantId, items: [{item, quantity}], total}
"""

from pydantic import BaseModel, ConfigDict, Field, NonNegativeFloat, NonNegativeInt
from typing import Optional, List, Union
from datetime import datetime

from app.models import Restaurant, Order


# JSON numbers keep their int/float form
Number = Union[int, float]
NonNegativeNumber = Union[NonNegativeInt, NonNegativeFloat]


# =============================================================================
# REQUEST SCHEMAS
# =============================================================================

class MenuItem(BaseModel):
    """Single priced entry on a restaurant menu."""
    model_config = ConfigDict(allow_inf_nan=False)

    item: str = Field(..., min_length=1, examples=["Margherita"])
    price: NonNegativeNumber = Field(..., examples=[10])


class RestaurantCreate(BaseModel):
    """Request schema for creating a restaurant."""
    name: str = Field(..., min_length=1, examples=["Pizza Place"])
    menu: List[MenuItem] = Field(default_factory=list)


class OrderLine(BaseModel):
    """Single (item, quantity) line in an order."""
    model_config = ConfigDict(allow_inf_nan=False)

    item: str = Field(..., min_length=1, examples=["Margherita"])
    # Sign and integrality are not checked
    quantity: Number = Field(..., examples=[2])


class OrderCreate(BaseModel):
    """
    Request schema for placing an order.

    A client-supplied total is ignored; the server always prices the order.
    """
    model_config = ConfigDict(populate_by_name=True, allow_inf_nan=False)

    restaurant_id: int = Field(..., alias="restaurantId", examples=[1])
    items: List[OrderLine]


class OrderRecordCreate(OrderCreate):
    """A priced order ready to be stored."""
    total: Number


# =============================================================================
# RESPONSE SCHEMAS
# =============================================================================

class RestaurantResponse(BaseModel):
    """Response schema for a single restaurant."""
    id: int
    name: str
    menu: List[MenuItem]

    @classmethod
    def from_model(cls, restaurant: Restaurant) -> "RestaurantResponse":
        return cls(id=restaurant.id, name=restaurant.name, menu=restaurant.menu or [])


class OrderResponse(BaseModel):
    """Response schema for a stored order."""
    model_config = ConfigDict(populate_by_name=True)

    id: int
    restaurant_id: int = Field(..., alias="restaurantId")
    items: List[OrderLine]
    total: float

    @classmethod
    def from_model(cls, order: Order) -> "OrderResponse":
        return cls(
            id=order.id,
            restaurant_id=order.restaurant_id,
            items=order.items or [],
            total=order.total,
        )


class OrderDetailResponse(BaseModel):
    """Stored order with its restaurant resolved to the full current record."""
    model_config = ConfigDict(populate_by_name=True)

    id: int
    restaurant_id: Optional[RestaurantResponse] = Field(None, alias="restaurantId")
    items: List[OrderLine]
    total: float

    @classmethod
    def from_model(cls, order: Order) -> "OrderDetailResponse":
        restaurant = order.restaurant
        return cls(
            id=order.id,
            restaurant_id=RestaurantResponse.from_model(restaurant) if restaurant else None,
            items=order.items or [],
            total=order.total,
        )


class ErrorResponse(BaseModel):
    """Standard error response."""
    message: str


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    database: str
    timestamp: datetime
