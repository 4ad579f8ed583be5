"""
FastAPI Application Entry Point

Food delivery demo backend: profiles, menu, carts and orders held in memory.

Endpoints:
    - POST /register, POST /login, GET /me, POST /logout: placeholder auth flow
    - /profile/{email}, /profiles, /profiles/summary: user profiles
    - /profile/{email}/login, /profile/{email}/activity: activity tracking
    - /menu, /menu/vegetarian, /menu/top-rated, /menu/{item_id}: catalogue
    - /cart/{email}: carts
    - /orders/{email}, /orders/summary, /orders/{order_id}/confirm: orders
    - /status, /about, /support: service metadata and support intake

Run with:
    uvicorn fooddelivery.main:app --port 8001
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from fooddelivery.context import AppContext, get_context
from fooddelivery.core.config import Settings, get_settings, setup_logging
from fooddelivery.core.exceptions import FoodDeliveryError
from fooddelivery.models import User
from fooddelivery.schemas import (
    AboutResponse,
    ActivityResponse,
    CartResponse,
    CatalogueItemResponse,
    ErrorResponse,
    LoginRequest,
    MeResponse,
    MessageResponse,
    OrderResponse,
    OrderSummaryResponse,
    ProfileSummaryResponse,
    ProfileUpdateRequest,
    RegisterRequest,
    StatusResponse,
    SupportRequest,
    SupportResponse,
    TokenResponse,
    UserResponse,
)
from fooddelivery.services import ProfilePatch

logger = logging.getLogger(__name__)

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    401: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    409: {"model": ErrorResponse},
}

router = APIRouter(responses=ERROR_RESPONSES)


# =============================================================================
# ROOT & METADATA ENDPOINTS
# =============================================================================

@router.get("/", tags=["Root"])
async def root(request: Request) -> dict[str, str]:
    """API root with navigation links."""
    settings: Settings = request.app.state.settings
    return {
        "message": f"🍕 Welcome to {settings.app_name}",
        "version": settings.app_version,
        "documentation": "/docs",
        "menu": "/menu",
        "status": "/status",
    }


@router.get("/status", response_model=StatusResponse, tags=["Root"])
async def status() -> StatusResponse:
    """Liveness check."""
    return StatusResponse(status="running", timestamp=datetime.now())


@router.get("/about", response_model=AboutResponse, tags=["Root"])
async def about(request: Request) -> AboutResponse:
    settings: Settings = request.app.state.settings
    return AboutResponse(
        name=settings.app_name,
        version=settings.app_version,
        environment=settings.env_mode.value,
        description="In-memory food ordering backend: profiles, menu, carts and orders.",
    )


@router.post("/support", response_model=SupportResponse, tags=["Root"])
async def support(
    body: Optional[SupportRequest] = None,
    ctx: AppContext = Depends(get_context),
) -> SupportResponse:
    """Accept a support message and return its confirmation id."""
    body = body or SupportRequest()
    ticket = ctx.support.submit(body.email, body.message)
    return SupportResponse(
        ticket_id=ticket.ticket_id,
        message=f"Support request received. Confirmation: {ticket.ticket_id}",
    )


# =============================================================================
# AUTH ENDPOINTS (placeholder tokens, not a security boundary)
# =============================================================================

@router.post("/register", status_code=201, response_model=TokenResponse, tags=["Auth"])
async def register(
    body: RegisterRequest,
    ctx: AppContext = Depends(get_context),
) -> TokenResponse:
    """Create a user and return a session token."""
    user = User(
        email=body.email,
        password=body.password,
        name=body.name,
        address=body.address,
        phone=body.phone,
        birth_date=body.birth_date,
    )
    token = ctx.profiles.register(user)
    return TokenResponse(email=user.email, token=token)


@router.post("/login", response_model=TokenResponse, tags=["Auth"])
async def login(
    body: LoginRequest,
    ctx: AppContext = Depends(get_context),
) -> TokenResponse:
    token = ctx.profiles.authenticate(body.email, body.password)
    return TokenResponse(email=ctx.tokens.resolve(token), token=token)


@router.get("/me", response_model=MeResponse, tags=["Auth"])
async def me(
    token: str = Query(...),
    ctx: AppContext = Depends(get_context),
) -> MeResponse:
    """Resolve a token to its email. Only checks that the token is well-formed."""
    return MeResponse(email=ctx.tokens.resolve(token))


@router.post("/logout", response_model=MessageResponse, tags=["Auth"])
async def logout(
    token: Optional[str] = Query(None),
    ctx: AppContext = Depends(get_context),
) -> MessageResponse:
    """Stateless acknowledgement; no server-side session exists to revoke."""
    if token and ctx.tokens.is_valid(token):
        logger.info(f"Logout acknowledged for {ctx.tokens.resolve(token)}")
    return MessageResponse(message="Logged out")


# =============================================================================
# PROFILE ENDPOINTS
# =============================================================================

@router.get("/profiles", response_model=List[UserResponse], tags=["Profiles"])
async def list_profiles(ctx: AppContext = Depends(get_context)) -> List[UserResponse]:
    return [UserResponse.model_validate(user) for user in ctx.profiles.list()]


@router.get("/profiles/summary", response_model=ProfileSummaryResponse, tags=["Profiles"])
async def profile_summary(ctx: AppContext = Depends(get_context)) -> ProfileSummaryResponse:
    """Aggregate profile statistics."""
    return ProfileSummaryResponse.model_validate(ctx.profiles.summary())


@router.get("/profile/{email}", response_model=UserResponse, tags=["Profiles"])
async def get_profile(email: str, ctx: AppContext = Depends(get_context)) -> UserResponse:
    return UserResponse.model_validate(ctx.profiles.get(email))


@router.put("/profile/{email}", response_model=UserResponse, tags=["Profiles"])
async def update_profile(
    email: str,
    body: ProfileUpdateRequest,
    ctx: AppContext = Depends(get_context),
) -> UserResponse:
    """Replace name, address, phone and birth date."""
    patch = ProfilePatch(
        name=body.name,
        address=body.address,
        phone=body.phone,
        birth_date=body.birth_date,
    )
    return UserResponse.model_validate(ctx.profiles.update(email, patch))


@router.delete("/profile/{email}", response_model=MessageResponse, tags=["Profiles"])
async def delete_profile(email: str, ctx: AppContext = Depends(get_context)) -> MessageResponse:
    ctx.profiles.delete(email)
    return MessageResponse(message=f"User '{email}' deleted")


@router.post("/profile/{email}/login", response_model=ActivityResponse, tags=["Profiles"])
async def record_login(email: str, ctx: AppContext = Depends(get_context)) -> ActivityResponse:
    """Record a login event for the user."""
    return ActivityResponse.model_validate(ctx.activity.record_login(email))


@router.get("/profile/{email}/activity", response_model=ActivityResponse, tags=["Profiles"])
async def get_activity(email: str, ctx: AppContext = Depends(get_context)) -> ActivityResponse:
    return ActivityResponse.model_validate(ctx.activity.get_activity(email))


# =============================================================================
# MENU ENDPOINTS
# =============================================================================

@router.get("/menu", response_model=List[CatalogueItemResponse], tags=["Menu"])
async def menu(
    search: Optional[str] = Query(None, description="Substring of name or category"),
    sort_by: Optional[str] = Query(
        None,
        alias="sortBy",
        description="name_asc, name_desc, price_asc, price_desc, rating_asc or rating_desc",
    ),
    category: Optional[str] = Query(None, description="Exact category, case-insensitive"),
    ctx: AppContext = Depends(get_context),
) -> List[CatalogueItemResponse]:
    """Filtered and sorted menu."""
    items = ctx.catalogue.list(search=search, category=category, sort_by=sort_by)
    return [CatalogueItemResponse.model_validate(item) for item in items]


@router.get("/menu/vegetarian", response_model=List[CatalogueItemResponse], tags=["Menu"])
async def vegetarian_menu(ctx: AppContext = Depends(get_context)) -> List[CatalogueItemResponse]:
    return [CatalogueItemResponse.model_validate(item) for item in ctx.catalogue.vegetarian()]


@router.get("/menu/top-rated", response_model=List[CatalogueItemResponse], tags=["Menu"])
async def top_rated_menu(ctx: AppContext = Depends(get_context)) -> List[CatalogueItemResponse]:
    return [CatalogueItemResponse.model_validate(item) for item in ctx.catalogue.top_rated()]


@router.get("/menu/{item_id}", response_model=CatalogueItemResponse, tags=["Menu"])
async def menu_item(item_id: int, ctx: AppContext = Depends(get_context)) -> CatalogueItemResponse:
    return CatalogueItemResponse.model_validate(ctx.catalogue.get(item_id))


# =============================================================================
# CART ENDPOINTS
# =============================================================================

@router.post("/cart/{email}/{item_id}", response_model=CartResponse, tags=["Cart"])
async def add_to_cart(
    email: str,
    item_id: int,
    ctx: AppContext = Depends(get_context),
) -> CartResponse:
    return CartResponse.build(email, ctx.carts.add_item(email, item_id))


@router.get("/cart/{email}", response_model=CartResponse, tags=["Cart"])
async def get_cart(email: str, ctx: AppContext = Depends(get_context)) -> CartResponse:
    return CartResponse.build(email, ctx.carts.get_cart(email))


# =============================================================================
# ORDER ENDPOINTS
# =============================================================================

@router.get("/orders/summary", response_model=OrderSummaryResponse, tags=["Orders"])
async def order_summary(ctx: AppContext = Depends(get_context)) -> OrderSummaryResponse:
    """Order counts by status."""
    return OrderSummaryResponse.model_validate(ctx.orders.summary())


@router.post("/orders/{email}", status_code=201, response_model=OrderResponse, tags=["Orders"])
async def checkout(email: str, ctx: AppContext = Depends(get_context)) -> OrderResponse:
    """Turn the user's cart into an order."""
    return OrderResponse.build(ctx.orders.checkout(email))


@router.get("/orders/{email}", response_model=List[OrderResponse], tags=["Orders"])
async def list_orders(email: str, ctx: AppContext = Depends(get_context)) -> List[OrderResponse]:
    return [OrderResponse.build(order) for order in ctx.orders.list_for_user(email)]


@router.put("/orders/{order_id}/confirm", response_model=OrderResponse, tags=["Orders"])
async def confirm_order(order_id: int, ctx: AppContext = Depends(get_context)) -> OrderResponse:
    """Mark an in-process order as delivered."""
    return OrderResponse.build(ctx.orders.confirm(order_id))


# =============================================================================
# ERROR HANDLERS
# =============================================================================

async def domain_exception_handler(request: Request, exc: FoodDeliveryError) -> JSONResponse:
    """Map domain errors to their HTTP status."""
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all exception handler."""
    logger.exception(f"Unhandled exception: {exc}")
    debug = request.app.state.settings.debug

    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": "Internal Server Error",
            "detail": str(exc) if debug else "An unexpected error occurred",
        },
    )


# =============================================================================
# APPLICATION FACTORY
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application startup and shutdown events.
    """
    settings: Settings = app.state.settings
    context: AppContext = app.state.context

    logger.info("=" * 60)
    logger.info(f"🚀 Starting {settings.app_name}")
    logger.info(f"   Version: {settings.app_version}")
    logger.info(f"   Environment: {settings.env_mode.value}")
    logger.info(f"   Debug: {settings.debug}")
    logger.info(f"   Menu items: {len(context.catalogue)}")
    logger.info(f"   Token service: {context.tokens.provider_name} (NOT real authentication)")
    logger.info("=" * 60)

    yield

    logger.info("Shutting down...")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build an application with its own, empty set of stores.

    Args:
        settings: Explicit settings (defaults to the cached environment settings)
    """
    settings = settings or get_settings()
    setup_logging(settings=settings)

    app = FastAPI(
        title=settings.app_name,
        description="In-memory food ordering backend: profiles, menu, carts and orders.",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.settings = settings
    app.state.context = AppContext.create(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(FoodDeliveryError, domain_exception_handler)
    app.add_exception_handler(Exception, global_exception_handler)
    app.include_router(router)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=get_settings().api_host, port=get_settings().api_port)
