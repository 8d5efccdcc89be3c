"""
Menu Domain Service.

Menu item CRUD with the subscription plan ceiling on active items.
"""

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from rest_api.models import Admin, Category, Ingredient, Menu, MenuIngredient
from rest_api.repositories import MenuRepository
from shared.config.logging import get_logger
from shared.infrastructure.db import safe_commit
from shared.utils.exceptions import NotFoundError, PlanLimitError, ValidationError
from shared.utils.schemas import MenuInput

logger = get_logger(__name__)


class MenuService:
    def __init__(self, db: Session):
        self._db = db
        self._menus = MenuRepository(db)

    def list_active(self, tenant_id: str):
        return self._menus.list_active(tenant_id)

    def get_detail(self, menu_id: int, tenant_id: str) -> Menu:
        menu = self._menus.get_detail(menu_id, tenant_id)
        if menu is None:
            raise NotFoundError("Menu item", menu_id, tenant_id=tenant_id)
        return menu

    def create(self, admin: Admin, data: MenuInput) -> Menu:
        """
        Raises:
            PlanLimitError: The tenant already has max_menu_items active items.
            ValidationError: Unknown category or ingredient ids.
        """
        if self._menus.count_active(admin.id) >= admin.max_menu_items:
            raise PlanLimitError("Menu item", limit=admin.max_menu_items, tenant_id=admin.id)

        self._check_category(data.category_id)
        menu = Menu(
            user_id=admin.id,
            name_en=data.name_en,
            name_ar=data.name_ar,
            price=data.price,
            category_id=data.category_id,
            image_url=data.image_url,
            available=data.available,
        )
        menu.menu_ingredients = self._ingredient_links(data.ingredients or [])
        self._db.add(menu)
        safe_commit(self._db)

        logger.info("Menu item created", menu_id=menu.id, tenant_id=admin.id)
        return self.get_detail(menu.id, admin.id)

    def update(self, menu_id: int, tenant_id: str, data: MenuInput) -> Menu:
        """
        Update a menu item. When ingredients is given the links are replaced.

        Raises:
            NotFoundError: The item does not exist, is deleted or belongs to another tenant.
        """
        menu = self._menus.get_for_tenant(menu_id, tenant_id)
        if menu is None or menu.is_deleted:
            raise NotFoundError("Menu item", menu_id, tenant_id=tenant_id)

        self._check_category(data.category_id)
        menu.name_en = data.name_en
        menu.name_ar = data.name_ar
        menu.price = data.price
        menu.category_id = data.category_id
        menu.image_url = data.image_url
        menu.available = data.available

        if data.ingredients is not None:
            menu.menu_ingredients.clear()
            # Flush the removals before re-adding links to the same ingredients
            self._db.flush()
            menu.menu_ingredients.extend(self._ingredient_links(data.ingredients))

        safe_commit(self._db)
        logger.info("Menu item updated", menu_id=menu_id, tenant_id=tenant_id)
        return self.get_detail(menu_id, tenant_id)

    def delete(self, menu_id: int, tenant_id: str, hard: bool = False) -> None:
        """
        Soft delete by default; hard=True removes the row.

        Raises:
            ValidationError: Hard delete of an item that past orders reference.
        """
        menu = self._menus.get_for_tenant(menu_id, tenant_id)
        if menu is None:
            raise NotFoundError("Menu item", menu_id, tenant_id=tenant_id)

        if hard:
            self._db.delete(menu)
            try:
                safe_commit(self._db)
            except IntegrityError:
                raise ValidationError(
                    "Menu item is referenced by existing orders; delete it without hard=true",
                    menu_id=menu_id,
                )
        else:
            menu.soft_delete()
            safe_commit(self._db)

        logger.info("Menu item deleted", menu_id=menu_id, tenant_id=tenant_id, hard=hard)

    def _check_category(self, category_id: int | None) -> None:
        if category_id is not None and self._db.get(Category, category_id) is None:
            raise ValidationError(f"Category with ID {category_id} not found", category_id=category_id)

    def _ingredient_links(self, ingredient_ids: list[int]) -> list[MenuIngredient]:
        unique_ids = list(dict.fromkeys(ingredient_ids))
        if not unique_ids:
            return []
        found = set(self._db.scalars(select(Ingredient.id).where(Ingredient.id.in_(unique_ids))))
        missing = [i for i in unique_ids if i not in found]
        if missing:
            raise ValidationError(f"Ingredients not found: {missing}", ingredient_ids=missing)
        return [MenuIngredient(ingredient_id=i) for i in unique_ids]
