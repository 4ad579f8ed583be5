"""
Order Engine

Turns a user's cart into an Order and drives the order status lifecycle:

    InProcess ──confirm──▶ Delivered
        │
        └────cancel────▶ Cancelled

Both right-hand states are terminal. Orders are never deleted. Identifiers
come from an internal sequence guarded by the same lock as insertion, so
concurrent checkouts can never share an id.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from threading import RLock
from typing import Callable, List

from fooddelivery.core.exceptions import (
    EmptyCartError,
    InvalidStateError,
    OrderNotFoundError,
)
from fooddelivery.models import Order, OrderStatus, email_key
from fooddelivery.services.carts import CartStore

logger = logging.getLogger(__name__)


@dataclass
class OrderSummary:
    """Order counts by status."""
    total: int = 0
    delivered: int = 0
    cancelled: int = 0
    in_process: int = 0


class OrderEngine:
    """
    In-memory order store.

    Attributes:
        delivery_lead: Time between checkout and the requested delivery
    """

    def __init__(
        self,
        carts: CartStore,
        delivery_lead: timedelta = timedelta(hours=1),
        clock: Callable[[], datetime] = datetime.now,
    ):
        self._carts = carts
        self._orders: list[Order] = []
        self._by_id: dict[int, Order] = {}
        self._last_id = 0
        self._lock = RLock()
        self._clock = clock
        self.delivery_lead = delivery_lead

    def checkout(self, user_email: str) -> Order:
        """
        Create an order from the user's cart and empty the cart.

        Raises:
            EmptyCartError: The cart is absent or has no items
        """
        with self._lock:
            items = self._carts.drain(user_email)
            if not items:
                logger.warning(f"Checkout rejected for {user_email}: cart is empty")
                raise EmptyCartError(f"Cart of '{user_email}' is empty")

            self._last_id += 1
            now = self._clock()
            order = Order(
                id=self._last_id,
                user_email=user_email,
                items=tuple(items),
                delivery_time=now + self.delivery_lead,
                created_at=now,
            )
            self._orders.append(order)
            self._by_id[order.id] = order

        logger.info(f"Order #{order.id} created for {user_email} ({len(order.items)} items, total {order.total})")
        return order

    def get(self, order_id: int) -> Order:
        with self._lock:
            order = self._by_id.get(order_id)
        if order is None:
            raise OrderNotFoundError(order_id)
        return order

    def list_for_user(self, user_email: str) -> List[Order]:
        """All orders of a user in creation order."""
        key = email_key(user_email)
        with self._lock:
            return [order for order in self._orders if email_key(order.user_email) == key]

    def confirm(self, order_id: int) -> Order:
        """
        Mark an in-process order as delivered.

        Raises:
            OrderNotFoundError: Unknown id
            InvalidStateError: The order already left InProcess
        """
        return self._transition(order_id, OrderStatus.DELIVERED, "already confirmed")

    def cancel(self, order_id: int) -> Order:
        return self._transition(order_id, OrderStatus.CANCELLED, "already finalised")

    def _transition(self, order_id: int, target: OrderStatus, reason: str) -> Order:
        with self._lock:
            order = self.get(order_id)
            if order.status.is_terminal:
                logger.warning(
                    f"Order #{order_id} cannot move to {target.value}: "
                    f"status is {order.status.value}"
                )
                raise InvalidStateError(f"Order #{order_id} {reason}")
            order.status = target

        logger.info(f"Order #{order_id} -> {target.value}")
        return order

    def summary(self) -> OrderSummary:
        summary = OrderSummary()
        with self._lock:
            for order in self._orders:
                summary.total += 1
                if order.status is OrderStatus.DELIVERED:
                    summary.delivered += 1
                elif order.status is OrderStatus.CANCELLED:
                    summary.cancelled += 1
                else:
                    summary.in_process += 1
        return summary
