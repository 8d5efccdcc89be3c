"""
Catalog models: Category, Ingredient, Menu, MenuIngredient.
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Optional

from sqlalchemy import Boolean, ForeignKey, Integer, Numeric, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, SoftDeleteMixin, TimestampMixin

if TYPE_CHECKING:
    from .admin import Admin


class Category(TimestampMixin, Base):
    """Menu category, shared by all tenants. Names are bilingual."""

    __tablename__ = "category"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name_en: Mapped[str] = mapped_column(String(255), nullable=False)
    name_ar: Mapped[Optional[str]] = mapped_column(String(255))

    menus: Mapped[list["Menu"]] = relationship(back_populates="category")


class Ingredient(TimestampMixin, Base):
    """Ingredient that can be attached to menu items."""

    __tablename__ = "ingredient"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name_en: Mapped[str] = mapped_column(String(255), nullable=False)
    name_ar: Mapped[Optional[str]] = mapped_column(String(255))


class Menu(SoftDeleteMixin, TimestampMixin, Base):
    """
    A menu item owned by a tenant.
    The owning admin id (user_id) scopes the menu_{tenant} realtime room.
    """

    __tablename__ = "menu"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("admin.id"), nullable=False, index=True
    )
    category_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("category.id"), nullable=True, index=True
    )
    name_en: Mapped[str] = mapped_column(String(255), nullable=False)
    name_ar: Mapped[Optional[str]] = mapped_column(String(255))
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    image_url: Mapped[Optional[str]] = mapped_column(Text)
    available: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    admin: Mapped["Admin"] = relationship(back_populates="menus")
    category: Mapped[Optional["Category"]] = relationship(back_populates="menus")
    menu_ingredients: Mapped[list["MenuIngredient"]] = relationship(
        back_populates="menu", cascade="all, delete-orphan"
    )


class MenuIngredient(Base):
    """Link between a menu item and one of its ingredients."""

    __tablename__ = "menu_ingredient"
    __table_args__ = (UniqueConstraint("menu_id", "ingredient_id", name="uq_menu_ingredient"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    menu_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("menu.id", ondelete="CASCADE"), nullable=False, index=True
    )
    ingredient_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("ingredient.id"), nullable=False
    )
    removable: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    menu: Mapped["Menu"] = relationship(back_populates="menu_ingredients")
    ingredient: Mapped["Ingredient"] = relationship()
