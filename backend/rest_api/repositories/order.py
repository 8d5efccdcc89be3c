"""
Order Repository - Data access for orders.
Eager loading keeps the order payload (table + items + menu) to a fixed number of queries.
"""

from typing import Sequence

from sqlalchemy import Select, select
from sqlalchemy.orm import Session, joinedload, selectinload

from rest_api.models import Order, OrderItem


class OrderRepository:
    """
    Guarantees eager loading of:
    - table
    - order_items -> menu
    """

    def __init__(self, db: Session):
        self._db = db

    def _detail_query(self) -> Select:
        return (
            select(Order)
            .options(joinedload(Order.table))
            .options(selectinload(Order.order_items).joinedload(OrderItem.menu))
        )

    def get_detail(self, order_id: int) -> Order | None:
        """Fetch an order with its table and line items, bypassing the identity map."""
        return self._db.scalar(
            self._detail_query()
            .where(Order.id == order_id)
            .execution_options(populate_existing=True)
        )

    def list_for_tenant(self, tenant_id: str) -> Sequence[Order]:
        """Tenant's orders, newest first."""
        return self._db.scalars(
            self._detail_query()
            .where(Order.admin_id == tenant_id)
            .order_by(Order.created_at.desc(), Order.id.desc())
        ).unique().all()

    def get_for_tenant(self, order_id: int, tenant_id: str) -> Order | None:
        return self._db.scalar(
            select(Order).where(Order.id == order_id, Order.admin_id == tenant_id)
        )
