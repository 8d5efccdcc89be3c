"""
Admin (tenant) model.
"""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING, Any, Optional

from sqlalchemy import JSON, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from shared.config.settings import settings

from .base import Base, TimestampMixin

if TYPE_CHECKING:
    from .catalog import Menu
    from .order import Order
    from .table import RestaurantTable


def _new_admin_id() -> str:
    return str(uuid.uuid4())


class Admin(TimestampMixin, Base):
    """
    A restaurant account. The admin id is the tenant id used to scope
    menus, tables, orders and the admin_/menu_ realtime rooms.
    """

    __tablename__ = "admin"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_admin_id)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    password: Mapped[Optional[str]] = mapped_column(Text, nullable=True)  # bcrypt hash
    restaurant_name: Mapped[Optional[str]] = mapped_column(String(255))
    logo_url: Mapped[Optional[str]] = mapped_column(Text)

    # Subscription plan ceilings
    max_menu_items: Mapped[int] = mapped_column(
        Integer, default=settings.default_max_menu_items, nullable=False
    )
    max_tables: Mapped[int] = mapped_column(
        Integer, default=settings.default_max_tables, nullable=False
    )

    # Customer-facing settings (currency, taxes, service fees)
    pricing_prefs: Mapped[Optional[dict[str, Any]]] = mapped_column(JSON)
    billing_settings: Mapped[Optional[dict[str, Any]]] = mapped_column(JSON)

    menus: Mapped[list["Menu"]] = relationship(back_populates="admin")
    tables: Mapped[list["RestaurantTable"]] = relationship(back_populates="admin")
    orders: Mapped[list["Order"]] = relationship(back_populates="admin")
