"""
Application Context

Owns one instance of every store. The FastAPI app keeps it on
``app.state.context`` and routes receive it through ``get_context``.
"""

import logging
from dataclasses import dataclass
from datetime import timedelta

from fastapi import Request

from fooddelivery.core.config import Settings
from fooddelivery.services import (
    ActivityTracker,
    BaseTokenService,
    CartStore,
    CatalogueStore,
    OrderEngine,
    PlaceholderTokenService,
    ProfileDirectory,
    SupportDesk,
)

logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    catalogue: CatalogueStore
    carts: CartStore
    orders: OrderEngine
    profiles: ProfileDirectory
    activity: ActivityTracker
    tokens: BaseTokenService
    support: SupportDesk

    @classmethod
    def create(cls, settings: Settings) -> "AppContext":
        """Wire a fresh set of stores from settings."""
        catalogue = CatalogueStore(top_rated_limit=settings.top_rated_limit)
        carts = CartStore(catalogue)
        tokens = PlaceholderTokenService()
        profiles = ProfileDirectory(tokens)

        logger.debug(f"Token service: {tokens.provider_name}")
        return cls(
            catalogue=catalogue,
            carts=carts,
            orders=OrderEngine(carts, delivery_lead=timedelta(minutes=settings.delivery_lead_minutes)),
            profiles=profiles,
            activity=ActivityTracker(profiles),
            tokens=tokens,
            support=SupportDesk(ticket_prefix=settings.support_ticket_prefix),
        )


def get_context(request: Request) -> AppContext:
    """FastAPI dependency returning the application's context."""
    return request.app.state.context
