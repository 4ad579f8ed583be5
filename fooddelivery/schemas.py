"""
Pydantic Schemas for Request/Response Validation

All payloads use camelCase on the wire (``birthDate``, ``userEmail``...);
requests also accept the snake_case field names.
"""

import re
from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator
from pydantic.alias_generators import to_camel
from pydantic.networks import validate_email

from fooddelivery.models import CatalogueItem, Order, OrderStatus


class APIModel(BaseModel):
    """Base schema: camelCase aliases, built from domain objects by attribute."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


def _validate_phone(v: str) -> str:
    cleaned = re.sub(r'[^\d]', '', v)
    if len(cleaned) < 10:
        raise ValueError('Phone number must have at least 10 digits')
    return v


def _validate_birth_date(v: date) -> date:
    if v > date.today():
        raise ValueError('Birth date cannot be in the future')
    return v


# =============================================================================
# REQUEST SCHEMAS
# =============================================================================

class RegisterRequest(APIModel):
    """Request schema for creating a new user."""
    email: str = Field(..., max_length=254, examples=["jane@example.com"])
    password: str = Field(..., min_length=1, max_length=128)
    name: str = Field(..., min_length=1, max_length=100, examples=["Jane Doe"])
    address: str = Field(..., min_length=1, max_length=255, examples=["12 Baker Street"])
    phone: str = Field(..., min_length=10, max_length=20, examples=["+1 555 123 4567"])
    birth_date: date = Field(..., examples=["1990-05-17"])

    @field_validator('email')
    @classmethod
    def validate_email_format(cls, v: str) -> str:
        # Checked as an address but kept exactly as typed.
        v = v.strip()
        validate_email(v)
        return v

    @field_validator('phone')
    @classmethod
    def validate_phone(cls, v: str) -> str:
        return _validate_phone(v)

    @field_validator('birth_date')
    @classmethod
    def validate_birth_date(cls, v: date) -> date:
        return _validate_birth_date(v)


class LoginRequest(APIModel):
    email: str
    password: str


class ProfileUpdateRequest(APIModel):
    """Replacement values for the mutable profile fields."""
    name: str = Field(..., min_length=1, max_length=100)
    address: str = Field(..., min_length=1, max_length=255)
    phone: str = Field(..., min_length=10, max_length=20)
    birth_date: date

    @field_validator('phone')
    @classmethod
    def validate_phone(cls, v: str) -> str:
        return _validate_phone(v)

    @field_validator('birth_date')
    @classmethod
    def validate_birth_date(cls, v: date) -> date:
        return _validate_birth_date(v)


class SupportRequest(APIModel):
    # Checked by SupportDesk so bad input maps to a 400 envelope.
    email: Optional[str] = None
    message: Optional[str] = None


# =============================================================================
# RESPONSE SCHEMAS
# =============================================================================

class MessageResponse(APIModel):
    success: bool = True
    message: str


class TokenResponse(APIModel):
    """Response after registration or login."""
    success: bool = True
    email: str
    token: str


class MeResponse(APIModel):
    email: str


class UserResponse(APIModel):
    """Public view of a user; the password is never included."""
    email: str
    name: str
    address: str
    phone: str
    birth_date: date


class CatalogueItemResponse(APIModel):
    id: int
    name: str
    price: Decimal
    category: str
    vegetarian: bool
    rating: float

    @field_serializer('price')
    def serialize_price(self, price: Decimal) -> float:
        return float(price)


class CartResponse(APIModel):
    user_email: str
    items: List[CatalogueItemResponse]
    item_count: int
    total: Decimal

    @field_serializer('total')
    def serialize_total(self, total: Decimal) -> float:
        return float(total)

    @classmethod
    def build(cls, user_email: str, items: List[CatalogueItem]) -> "CartResponse":
        return cls(
            user_email=user_email,
            items=[CatalogueItemResponse.model_validate(item) for item in items],
            item_count=len(items),
            total=sum((item.price for item in items), Decimal("0")),
        )


class OrderResponse(APIModel):
    """Response schema for a single order."""
    id: int
    user_email: str
    items: List[CatalogueItemResponse]
    status: OrderStatus
    delivery_time: datetime
    created_at: datetime
    total: Decimal

    @field_serializer('total')
    def serialize_total(self, total: Decimal) -> float:
        return float(total)

    @classmethod
    def build(cls, order: Order) -> "OrderResponse":
        return cls(
            id=order.id,
            user_email=order.user_email,
            items=[CatalogueItemResponse.model_validate(item) for item in order.items],
            status=order.status,
            delivery_time=order.delivery_time,
            created_at=order.created_at,
            total=order.total,
        )


class OrderSummaryResponse(APIModel):
    total: int
    delivered: int
    cancelled: int
    in_process: int


class ProfileSummaryResponse(APIModel):
    total_users: int
    oldest_user_name: str
    youngest_user_name: str
    average_age: float


class ActivityResponse(APIModel):
    email: str
    last_login: datetime
    status: str = "Active"


class SupportResponse(APIModel):
    success: bool = True
    ticket_id: str
    message: str


class StatusResponse(APIModel):
    status: str
    timestamp: datetime


class AboutResponse(APIModel):
    name: str
    version: str
    environment: str
    description: str


class ErrorResponse(BaseModel):
    """Standard error response."""
    success: bool = False
    error: str
    detail: Optional[str] = None
