"""
SQLAlchemy ORM Models Package.

- base: Base class and mixins
- admin: Admin (tenant)
- catalog: Category, Ingredient, Menu, MenuIngredient
- table: RestaurantTable
- order: Order, OrderItem
"""

from .base import Base, SoftDeleteMixin, TimestampMixin
from .admin import Admin
from .catalog import Category, Ingredient, Menu, MenuIngredient
from .table import RestaurantTable
from .order import Order, OrderItem

__all__ = [
    "Base",
    "SoftDeleteMixin",
    "TimestampMixin",
    "Admin",
    "Category",
    "Ingredient",
    "Menu",
    "MenuIngredient",
    "RestaurantTable",
    "Order",
    "OrderItem",
]
