"""
Menu Repository - Data access for menu items.
"""

from typing import Sequence

from sqlalchemy import Select, func, select
from sqlalchemy.orm import Session, joinedload, selectinload

from rest_api.models import Menu, MenuIngredient


class MenuRepository:
    """
    Guarantees eager loading of:
    - category
    - menu_ingredients -> ingredient
    """

    def __init__(self, db: Session):
        self._db = db

    def _detail_query(self) -> Select:
        return (
            select(Menu)
            .options(joinedload(Menu.category))
            .options(selectinload(Menu.menu_ingredients).joinedload(MenuIngredient.ingredient))
        )

    def list_active(self, tenant_id: str) -> Sequence[Menu]:
        """Tenant's menu items that are not soft-deleted, newest first."""
        return self._db.scalars(
            self._detail_query()
            .where(Menu.user_id == tenant_id, Menu.deleted_at.is_(None))
            .order_by(Menu.created_at.desc(), Menu.id.desc())
        ).unique().all()

    def get_detail(self, menu_id: int, tenant_id: str) -> Menu | None:
        return self._db.scalar(
            self._detail_query()
            .where(Menu.id == menu_id, Menu.user_id == tenant_id)
            .execution_options(populate_existing=True)
        )

    def get_for_tenant(self, menu_id: int, tenant_id: str) -> Menu | None:
        return self._db.scalar(
            select(Menu).where(Menu.id == menu_id, Menu.user_id == tenant_id)
        )

    def count_active(self, tenant_id: str) -> int:
        return self._db.scalar(
            select(func.count(Menu.id)).where(
                Menu.user_id == tenant_id,
                Menu.deleted_at.is_(None),
            )
        ) or 0

    def get_many(self, menu_ids: set[int]) -> Sequence[Menu]:
        if not menu_ids:
            return []
        return self._db.scalars(select(Menu).where(Menu.id.in_(menu_ids))).all()
