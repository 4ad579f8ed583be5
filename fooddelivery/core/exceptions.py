"""
Domain Error Taxonomy

Every store raises one of these. The API layer maps them to HTTP responses
through a single exception handler, so services never deal with status codes
beyond the one carried on the class.
"""

from typing import Optional


class FoodDeliveryError(Exception):
    """
    Base class for all expected, caller-facing failures.

    Attributes:
        status_code: HTTP status the API layer answers with
        error: Short machine-friendly label
        detail: Human readable description
    """

    status_code: int = 400
    error: str = "Bad Request"

    def __init__(self, detail: Optional[str] = None):
        self.detail = detail or self.error
        super().__init__(self.detail)

    def to_dict(self) -> dict:
        """Convert to the standard error envelope."""
        return {
            "success": False,
            "error": self.error,
            "detail": self.detail,
        }


class NotFoundError(FoodDeliveryError):
    status_code = 404
    error = "Not Found"


class ItemNotFoundError(NotFoundError):
    def __init__(self, item_id: int):
        self.item_id = item_id
        super().__init__(f"Menu item #{item_id} not found")


class UserNotFoundError(NotFoundError):
    def __init__(self, email: str):
        self.email = email
        super().__init__(f"User '{email}' not found")


class OrderNotFoundError(NotFoundError):
    def __init__(self, order_id: int):
        self.order_id = order_id
        super().__init__(f"Order #{order_id} not found")


class DuplicateError(FoodDeliveryError):
    status_code = 409
    error = "Duplicate"


class UnauthorizedError(FoodDeliveryError):
    status_code = 401
    error = "Unauthorized"


class EmptyCartError(FoodDeliveryError):
    status_code = 400
    error = "Empty Cart"


class InvalidStateError(FoodDeliveryError):
    status_code = 409
    error = "Invalid State"


class ValidationError(FoodDeliveryError):
    status_code = 400
    error = "Validation Error"
