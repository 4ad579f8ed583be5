"""
Catalogue Store

Holds the fixed menu and computes its read-only views: search/category
filtering, the six sort orders, the vegetarian subset and the top-rated list.
Nothing here mutates after seeding.
"""

import logging
from decimal import Decimal
from typing import Callable, Iterable, List, Optional

from fooddelivery.core.exceptions import ItemNotFoundError
from fooddelivery.models import CatalogueItem

logger = logging.getLogger(__name__)


SEED_CATALOGUE: tuple[CatalogueItem, ...] = (
    CatalogueItem(1, "Pizza", Decimal("10.99"), "Italian", True, 4.5),
    CatalogueItem(2, "Veggie Burger", Decimal("8.49"), "American", True, 4.8),
    CatalogueItem(3, "Pasta", Decimal("12.29"), "Italian", False, 4.6),
    CatalogueItem(4, "Steak", Decimal("15.99"), "Grill", False, 4.7),
)

# sort key -> (attribute getter, descending)
SORT_OPTIONS: dict[str, tuple[Callable[[CatalogueItem], object], bool]] = {
    "name_asc": (lambda item: item.name.casefold(), False),
    "name_desc": (lambda item: item.name.casefold(), True),
    "price_asc": (lambda item: item.price, False),
    "price_desc": (lambda item: item.price, True),
    "rating_asc": (lambda item: item.rating, False),
    "rating_desc": (lambda item: item.rating, True),
}


class CatalogueStore:
    """
    Read-only menu store.

    Attributes:
        top_rated_limit: Number of items returned by ``top_rated``
    """

    def __init__(
        self,
        items: Iterable[CatalogueItem] = SEED_CATALOGUE,
        top_rated_limit: int = 3,
    ):
        self._items = tuple(items)
        self._by_id = {item.id: item for item in self._items}
        if len(self._by_id) != len(self._items):
            raise ValueError("Catalogue item ids must be unique")
        self.top_rated_limit = top_rated_limit

        logger.info(f"CatalogueStore initialized ({len(self._items)} items)")

    def __len__(self) -> int:
        return len(self._items)

    def get(self, item_id: int) -> CatalogueItem:
        """
        Look up a single item.

        Raises:
            ItemNotFoundError: No item carries that id
        """
        try:
            return self._by_id[item_id]
        except KeyError:
            raise ItemNotFoundError(item_id) from None

    def list(
        self,
        search: Optional[str] = None,
        category: Optional[str] = None,
        sort_by: Optional[str] = None,
    ) -> List[CatalogueItem]:
        """
        Filtered and sorted view of the menu.

        Args:
            search: Case-insensitive substring of the name or the category
            category: Case-insensitive exact category
            sort_by: One of SORT_OPTIONS; anything else keeps catalogue order

        Returns:
            list[CatalogueItem]: Matching items
        """
        items = list(self._items)

        if search:
            term = search.casefold()
            items = [
                item for item in items
                if term in item.name.casefold() or term in item.category.casefold()
            ]

        if category:
            wanted = category.casefold()
            items = [item for item in items if item.category.casefold() == wanted]

        option = SORT_OPTIONS.get(sort_by or "")
        if option is not None:
            key, descending = option
            # sorted() is stable, so equal keys keep catalogue order
            items = sorted(items, key=key, reverse=descending)
        elif sort_by:
            logger.debug(f"Ignoring unknown sort option: {sort_by!r}")

        return items

    def vegetarian(self) -> List[CatalogueItem]:
        return [item for item in self._items if item.vegetarian]

    def top_rated(self) -> List[CatalogueItem]:
        """Highest rated items first; ties keep catalogue order."""
        ranked = sorted(self._items, key=lambda item: -item.rating)
        return ranked[: self.top_rated_limit]
