"""
Cart Store

Per-user list of selected menu items, keyed by email. Carts are created on
the first add and emptied (never removed) when the order engine checks them
out. Duplicates are allowed: adding the same dish twice gives two entries.
"""

import logging
from threading import RLock
from typing import List

from fooddelivery.models import CatalogueItem, email_key
from fooddelivery.services.catalogue import CatalogueStore

logger = logging.getLogger(__name__)


class CartStore:
    """Thread-safe in-memory carts backed by a catalogue."""

    def __init__(self, catalogue: CatalogueStore):
        self._catalogue = catalogue
        self._carts: dict[str, list[CatalogueItem]] = {}
        self._lock = RLock()

    def add_item(self, user_email: str, item_id: int) -> List[CatalogueItem]:
        """
        Append a menu item to the user's cart.

        Args:
            user_email: Cart owner
            item_id: Catalogue id of the dish

        Returns:
            List[CatalogueItem]: The cart after the addition

        Raises:
            ItemNotFoundError: The id is not on the menu
        """
        item = self._catalogue.get(item_id)

        with self._lock:
            cart = self._carts.setdefault(email_key(user_email), [])
            cart.append(item)
            snapshot = list(cart)

        logger.info(f"Added '{item.name}' to cart of {user_email} ({len(snapshot)} items)")
        return snapshot

    def get_cart(self, user_email: str) -> List[CatalogueItem]:
        """Current cart contents; empty for a user who never added anything."""
        with self._lock:
            return list(self._carts.get(email_key(user_email), ()))

    def clear(self, user_email: str) -> None:
        with self._lock:
            cart = self._carts.get(email_key(user_email))
            if cart is not None:
                cart.clear()

    def drain(self, user_email: str) -> List[CatalogueItem]:
        """Return the cart contents and empty the cart in one step."""
        with self._lock:
            items = self.get_cart(user_email)
            self.clear(user_email)
            return items
