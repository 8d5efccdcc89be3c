"""
Table model: the physical table a QR code points to.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from shared.config.constants import TableStatus

from .base import Base, TimestampMixin

if TYPE_CHECKING:
    from .admin import Admin
    from .order import Order


class RestaurantTable(TimestampMixin, Base):
    """
    A table in a restaurant, reachable by customers through its code.
    Status flips from available to occupied when a customer opens the public menu.
    """

    # "table" is a reserved SQL keyword
    __tablename__ = "restaurant_table"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    admin_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("admin.id"), nullable=False, index=True
    )
    code: Mapped[str] = mapped_column(String(32), nullable=False)  # "T1", "Terrace-3"
    capacity: Mapped[int] = mapped_column(Integer, default=4, nullable=False)
    status: Mapped[str] = mapped_column(
        String(16), default=TableStatus.AVAILABLE, nullable=False
    )  # available, occupied, reserved, cleaning

    __table_args__ = (
        Index("ix_table_code", "code"),
        Index("ix_table_admin_status", "admin_id", "status"),
    )

    admin: Mapped["Admin"] = relationship(back_populates="tables")
    orders: Mapped[list["Order"]] = relationship(back_populates="table")
