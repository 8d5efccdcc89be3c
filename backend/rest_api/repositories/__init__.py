"""
Repositories: data access with eager loading for the payloads the API returns.
"""

from .menu import MenuRepository
from .order import OrderRepository
from .table import TableRepository

__all__ = [
    "MenuRepository",
    "OrderRepository",
    "TableRepository",
]
