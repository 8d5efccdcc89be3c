"""
Table Repository - Data access for restaurant tables.
"""

from typing import Sequence

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from rest_api.models import RestaurantTable


class TableRepository:
    def __init__(self, db: Session):
        self._db = db

    def find_by_code(self, code: str) -> RestaurantTable | None:
        """Case-insensitive lookup of the code printed on a table's QR sticker."""
        return self._db.scalar(
            select(RestaurantTable)
            .where(func.lower(RestaurantTable.code) == code.strip().lower())
            .order_by(RestaurantTable.id)
            .limit(1)
        )

    def list_for_tenant(self, tenant_id: str) -> Sequence[RestaurantTable]:
        return self._db.scalars(
            select(RestaurantTable)
            .where(RestaurantTable.admin_id == tenant_id)
            .order_by(RestaurantTable.created_at, RestaurantTable.id)
        ).all()

    def get_for_tenant(self, table_id: int, tenant_id: str) -> RestaurantTable | None:
        return self._db.scalar(
            select(RestaurantTable).where(
                RestaurantTable.id == table_id,
                RestaurantTable.admin_id == tenant_id,
            )
        )

    def count_for_tenant(self, tenant_id: str) -> int:
        return self._db.scalar(
            select(func.count(RestaurantTable.id)).where(RestaurantTable.admin_id == tenant_id)
        ) or 0
