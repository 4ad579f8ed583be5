"""
Domain Models

Plain in-memory records held by the stores:
- CatalogueItem: immutable menu entry
- User: registered profile (email is the only identifier)
- Order: snapshot of a cart plus its status lifecycle
- ActivityRecord: last login timestamp of a user
"""

import enum
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal


def email_key(email: str) -> str:
    """Case-insensitive lookup key for an email address."""
    return email.strip().casefold()


class OrderStatus(str, enum.Enum):
    """Order status workflow: InProcess, then exactly one terminal state."""
    IN_PROCESS = "InProcess"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"

    @property
    def is_terminal(self) -> bool:
        return self is not OrderStatus.IN_PROCESS


@dataclass(frozen=True)
class CatalogueItem:
    id: int
    name: str
    price: Decimal
    category: str
    vegetarian: bool
    rating: float


@dataclass
class User:
    email: str
    # Plaintext, demo only. Never returned by any response schema.
    password: str
    name: str
    address: str
    phone: str
    birth_date: date

    @property
    def key(self) -> str:
        return email_key(self.email)

    def age_on(self, today: date) -> int:
        """Whole years between birth date and ``today``."""
        had_birthday = (today.month, today.day) >= (self.birth_date.month, self.birth_date.day)
        return today.year - self.birth_date.year - (0 if had_birthday else 1)


@dataclass
class Order:
    """
    A checked-out cart.

    ``items`` is a tuple copied from the cart at checkout, so later cart
    changes never reach an existing order.
    """
    id: int
    user_email: str
    items: tuple[CatalogueItem, ...]
    delivery_time: datetime
    status: OrderStatus = OrderStatus.IN_PROCESS
    created_at: datetime = field(default_factory=datetime.now)

    @property
    def total(self) -> Decimal:
        return sum((item.price for item in self.items), Decimal("0"))

    def __repr__(self):
        return f"<Order #{self.id} - {self.user_email} - {self.status.value}>"


@dataclass
class ActivityRecord:
    email: str
    last_login: datetime
