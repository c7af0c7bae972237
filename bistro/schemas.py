"""
Pydantic Schemas for Request/Response Validation

Request bodies allow extra fields: the client owns the document shape and
the store keeps whatever it is given beyond the fields validated here.
"""

from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field


# =============================================================================
# AUTH
# =============================================================================

class TokenRequest(BaseModel):
    """Identity payload to embed in a bearer token."""
    model_config = ConfigDict(extra="allow")

    email: Optional[str] = Field(None, examples=["jane@example.com"])


class TokenResponse(BaseModel):
    token: str


class AdminStatusResponse(BaseModel):
    admin: bool


# =============================================================================
# USERS
# =============================================================================

class UserCreate(BaseModel):
    """Sign-in record posted by the client on first login."""
    model_config = ConfigDict(extra="allow")

    email: EmailStr = Field(..., examples=["jane@example.com"])
    name: Optional[str] = Field(None, max_length=100, examples=["Jane Doe"])

    def to_document(self) -> dict[str, Any]:
        # Roles are granted through PATCH /users/{id} only
        doc = self.model_dump(exclude_none=True)
        doc.pop("role", None)
        doc.pop("_id", None)
        return doc


# =============================================================================
# MENU
# =============================================================================

class MenuItemCreate(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: str = Field(..., min_length=1, max_length=100, examples=["Caesar Salad"])
    category: str = Field(..., min_length=1, max_length=50, examples=["salad"])
    price: float = Field(..., ge=0, examples=[12.5])
    recipe: Optional[str] = Field(None, examples=["Romaine, parmesan, croutons"])
    image: Optional[str] = Field(None, examples=["https://i.ibb.co/salad.jpg"])

    def to_document(self) -> dict[str, Any]:
        doc = self.model_dump(exclude_none=True)
        doc.pop("_id", None)
        return doc


class MenuItemUpdate(BaseModel):
    """Partial update; only fields present in the body are written."""
    model_config = ConfigDict(extra="allow")

    name: Optional[str] = Field(None, min_length=1, max_length=100)
    category: Optional[str] = Field(None, min_length=1, max_length=50)
    price: Optional[float] = Field(None, ge=0)
    recipe: Optional[str] = None
    image: Optional[str] = None

    def to_update(self) -> dict[str, Any]:
        fields = self.model_dump(exclude_unset=True)
        fields.pop("_id", None)
        return fields


# =============================================================================
# CARTS
# =============================================================================

class CartItemCreate(BaseModel):
    model_config = ConfigDict(extra="allow")

    email: str = Field(..., examples=["jane@example.com"])
    menuId: Optional[str] = Field(None, examples=["642c155b2c4774f05c36eeaa"])
    name: Optional[str] = None
    image: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)

    def to_document(self) -> dict[str, Any]:
        doc = self.model_dump(exclude_none=True)
        doc.pop("_id", None)
        return doc


# =============================================================================
# PAYMENTS
# =============================================================================

class PaymentIntentRequest(BaseModel):
    price: float = Field(..., gt=0, examples=[42.5])


class PaymentIntentResponse(BaseModel):
    clientSecret: str


class PaymentCreate(BaseModel):
    """Payment record posted after the client confirms a PaymentIntent."""
    model_config = ConfigDict(extra="allow")

    email: str = Field(..., examples=["jane@example.com"])
    price: float = Field(..., ge=0, examples=[42.5])
    transactionId: Optional[str] = Field(None, examples=["pi_3N..."])
    date: Optional[datetime] = None
    cartIds: List[str] = Field(default_factory=list)
    menuItemIds: List[str] = Field(default_factory=list)
    status: Optional[str] = Field(None, examples=["pending"])


# =============================================================================
# REPORTS
# =============================================================================

class AdminStats(BaseModel):
    customers: int
    products: int
    orders: int
    totalRevenue: float


class OrderStat(BaseModel):
    category: str
    quantity: int
    revenue: float
