"""
Domain Errors

Every failure the API can report maps to one of these classes. Each error
carries the message returned to the client and the HTTP status it maps to,
so the exception handlers in app.main stay one-liners.

Hierarchy:
    OrderingError
    ├── ValidationError      (400) malformed or missing input fields
    ├── NotFoundError        (400) referenced restaurant does not exist
    ├── ItemNotFoundError    (400) ordered item absent from the menu
    └── StorageError         (500) datastore unavailable or failed
"""

from typing import Any, Optional


class OrderingError(Exception):
    """Base class for all errors surfaced to API clients."""

    status_code: int = 500

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> dict[str, Any]:
        """Convert to the JSON error body."""
        return {"message": self.message}


class ValidationError(OrderingError):
    """Raised when input fields are missing or malformed."""

    status_code = 400


class NotFoundError(OrderingError):
    """Raised when an order references a restaurant that does not exist."""

    # Existing clients expect 400 here, not 404
    status_code = 400

    def __init__(self, restaurant_id: Any) -> None:
        super().__init__(
            f"Restaurant {restaurant_id} not found.",
            details={"restaurant_id": restaurant_id},
        )
        self.restaurant_id = restaurant_id


class ItemNotFoundError(OrderingError):
    """Raised when an order line names an item missing from the menu."""

    status_code = 400

    def __init__(self, item: str) -> None:
        super().__init__(
            f"Item {item} not found in restaurant menu.",
            details={"item": item},
        )
        self.item = item


class StorageError(OrderingError):
    """Raised when the datastore is unreachable or an operation fails."""

    status_code = 500
