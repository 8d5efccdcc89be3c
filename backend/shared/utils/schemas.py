"""
Shared Pydantic schemas used across the application.

Output schemas read straight from ORM rows (from_attributes) and are also
used to build realtime event payloads, so a client sees the same shape over
HTTP and over the realtime link.
"""

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from shared.config.constants import Limits


# =============================================================================
# Common Types
# =============================================================================

OrderStatus = Literal["pending", "preparing", "ready", "served", "cancelled"]
TableStatus = Literal["available", "occupied", "reserved", "cleaning"]
OrderType = Literal["dine_in", "take_away"]


class OrmModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)


class SuccessResponse(BaseModel):
    success: bool = True


# =============================================================================
# Authentication Schemas
# =============================================================================


class LoginRequest(BaseModel):
    """Login request body."""

    email: EmailStr
    password: str | None = None


class LoginUser(BaseModel):
    id: str
    email: str
    name: str | None = None


class LoginResponse(BaseModel):
    """Login response with JWT token."""

    token: str
    user: LoginUser


class AdminOutput(OrmModel):
    """Admin profile. Never includes the password hash."""

    id: str
    email: str
    restaurant_name: str | None = None
    logo_url: str | None = None
    max_menu_items: int
    max_tables: int
    pricing_prefs: dict[str, Any] | None = None
    billing_settings: dict[str, Any] | None = None
    created_at: datetime


class PublicRestaurantOutput(OrmModel):
    """Restaurant settings a customer's menu needs to render prices."""

    id: str
    restaurant_name: str | None = None
    logo_url: str | None = None
    pricing_prefs: dict[str, Any] | None = None
    billing_settings: dict[str, Any] | None = None


# =============================================================================
# Catalog Schemas
# =============================================================================


class NameInput(BaseModel):
    """Bilingual name used by categories and ingredients."""

    name_en: str = Field(min_length=1, max_length=Limits.NAME_MAX)
    name_ar: str | None = Field(default=None, max_length=Limits.NAME_MAX)


class CategoryOutput(OrmModel):
    id: int
    name_en: str
    name_ar: str | None = None


class IngredientOutput(OrmModel):
    id: int
    name_en: str
    name_ar: str | None = None


class MenuIngredientOutput(OrmModel):
    id: int
    ingredient_id: int
    removable: bool = True
    ingredient: IngredientOutput


class MenuInput(BaseModel):
    """Create or update a menu item. ingredients=None leaves links unchanged on update."""

    name_en: str = Field(min_length=1, max_length=Limits.NAME_MAX)
    name_ar: str | None = Field(default=None, max_length=Limits.NAME_MAX)
    price: float = Field(ge=0)
    category_id: int | None = None
    image_url: str | None = None
    available: bool = True
    ingredients: list[int] | None = None


class MenuOutput(OrmModel):
    id: int
    user_id: str
    category_id: int | None = None
    name_en: str
    name_ar: str | None = None
    price: float
    image_url: str | None = None
    available: bool
    created_at: datetime
    deleted_at: datetime | None = None


class MenuDetailOutput(MenuOutput):
    """Menu item with its category and ingredients."""

    category: CategoryOutput | None = None
    menu_ingredients: list[MenuIngredientOutput] = []


# =============================================================================
# Table Schemas
# =============================================================================


class TableInput(BaseModel):
    """Create a table. Accepts "number" as an alias of "code"."""

    code: str | None = Field(default=None, min_length=1, max_length=Limits.TABLE_CODE_MAX)
    number: str | int | None = None
    capacity: int = Field(default=4, ge=1, le=100)

    def resolved_code(self) -> str | None:
        if self.code:
            return self.code
        if self.number is not None and str(self.number).strip():
            return str(self.number).strip()
        return None


class TableUpdate(BaseModel):
    code: str | None = Field(default=None, min_length=1, max_length=Limits.TABLE_CODE_MAX)
    capacity: int | None = Field(default=None, ge=1, le=100)
    status: TableStatus | None = None


class TableOutput(OrmModel):
    id: int
    admin_id: str
    code: str
    capacity: int
    status: str
    created_at: datetime


# =============================================================================
# Order Schemas
# =============================================================================


class OrderItemInput(BaseModel):
    """A line of a customer order. The price is looked up server-side."""

    model_config = ConfigDict(populate_by_name=True)

    menu_id: int = Field(alias="menuId")
    quantity: int = Field(ge=1, le=Limits.ITEM_QUANTITY_MAX)
    notes: str | None = Field(default=None, max_length=Limits.NOTE_MAX)


class OrderCreate(BaseModel):
    """Customer order placed from the public menu."""

    model_config = ConfigDict(populate_by_name=True)

    table_code: str | None = Field(default=None, alias="tableCode", max_length=Limits.TABLE_CODE_MAX)
    items: list[OrderItemInput] = Field(min_length=1, max_length=Limits.ORDER_ITEMS_MAX)
    admin_id: str | None = Field(default=None, alias="adminId")
    type: OrderType = "dine_in"


class OrderStatusUpdate(BaseModel):
    status: OrderStatus


class OrderItemOutput(OrmModel):
    id: int
    menu_id: int
    quantity: int
    price_at_order: float
    note: str | None = None
    menu: MenuOutput


class OrderOutput(OrmModel):
    """Order row without relations."""

    id: int
    admin_id: str | None = None
    table_id: int | None = None
    total: float
    status: str
    type: str
    created_at: datetime
    updated_at: datetime | None = None


class OrderDetailOutput(OrderOutput):
    """Order with its table and line items (each with its menu item)."""

    table: TableOutput | None = None
    order_items: list[OrderItemOutput] = []
