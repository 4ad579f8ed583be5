"""
                        Services Module

In-memory stores behind the HTTP endpoints. Each store owns its collection
and its lock; all reads and writes go through the store's methods.

Services:
    - catalogue: fixed menu and its filtered/sorted views
    - carts: per-user carts
    - orders: checkout and order status lifecycle
    - profiles: user registry and statistics
    - activity: last-login tracking
    - tokens: placeholder session tokens
    - support: support message intake
"""

from fooddelivery.services.activity import ActivityTracker
from fooddelivery.services.carts import CartStore
from fooddelivery.services.catalogue import CatalogueStore, SEED_CATALOGUE, SORT_OPTIONS
from fooddelivery.services.orders import OrderEngine, OrderSummary
from fooddelivery.services.profiles import ProfileDirectory, ProfilePatch, ProfileSummary
from fooddelivery.services.support import SupportDesk, SupportTicket
from fooddelivery.services.tokens import BaseTokenService, PlaceholderTokenService

__all__ = [
    "ActivityTracker",
    "CartStore",
    "CatalogueStore",
    "SEED_CATALOGUE",
    "SORT_OPTIONS",
    "OrderEngine",
    "OrderSummary",
    "ProfileDirectory",
    "ProfilePatch",
    "ProfileSummary",
    "SupportDesk",
    "SupportTicket",
    "BaseTokenService",
    "PlaceholderTokenService",
]
