"""
Order models: Order, OrderItem.
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Optional

from sqlalchemy import ForeignKey, Index, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from shared.config.constants import OrderStatus, OrderType

from .base import Base, TimestampMixin

if TYPE_CHECKING:
    from .admin import Admin
    from .catalog import Menu
    from .table import RestaurantTable


class Order(TimestampMixin, Base):
    """
    A customer order. The order id scopes the order_{id} realtime room,
    the admin id scopes the admin_{tenant} room.
    """

    __tablename__ = "customer_order"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    admin_id: Mapped[Optional[str]] = mapped_column(
        String(36), ForeignKey("admin.id"), nullable=True, index=True
    )
    table_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("restaurant_table.id", ondelete="SET NULL"), nullable=True
    )
    total: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    status: Mapped[str] = mapped_column(
        String(16), default=OrderStatus.PENDING, nullable=False
    )  # pending, preparing, ready, served, cancelled
    type: Mapped[str] = mapped_column(String(16), default=OrderType.DINE_IN, nullable=False)

    __table_args__ = (Index("ix_order_admin_created", "admin_id", "created_at"),)

    admin: Mapped[Optional["Admin"]] = relationship(back_populates="orders")
    table: Mapped[Optional["RestaurantTable"]] = relationship(back_populates="orders")
    order_items: Mapped[list["OrderItem"]] = relationship(
        back_populates="order", cascade="all, delete-orphan", order_by="OrderItem.id"
    )


class OrderItem(Base):
    """A line of an order. Price is captured at order time."""

    __tablename__ = "order_item"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    order_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("customer_order.id", ondelete="CASCADE"), nullable=False, index=True
    )
    menu_id: Mapped[int] = mapped_column(Integer, ForeignKey("menu.id"), nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    price_at_order: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    note: Mapped[Optional[str]] = mapped_column(Text)

    order: Mapped["Order"] = relationship(back_populates="order_items")
    menu: Mapped["Menu"] = relationship()
