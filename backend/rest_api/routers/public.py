"""
Public endpoints used by the customer menu (no authentication).
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from realtime import EventEmitter, get_emitter
from rest_api.models import Admin
from rest_api.services import MenuService, TableService, publish_table_occupied
from shared.infrastructure.db import get_db
from shared.utils.exceptions import NotFoundError, ValidationError
from shared.utils.schemas import MenuDetailOutput, PublicRestaurantOutput

router = APIRouter(prefix="/api/public", tags=["public"])


@router.get("/pricing", response_model=PublicRestaurantOutput)
def get_pricing(
    table: str | None = Query(default=None),
    db: Session = Depends(get_db),
    emitter: EventEmitter = Depends(get_emitter),
):
    """
    Restaurant settings for the table a customer scanned.

    Opening the menu of an available table marks it occupied and tells the
    tenant dashboard (table-updated to admin_{tenant}). Visits to a table that
    is already occupied change nothing.
    """
    if not table or not table.strip():
        raise ValidationError("Table code required")

    service = TableService(db)
    restaurant_table = service.get_by_code(table)

    admin = db.get(Admin, restaurant_table.admin_id)
    if admin is None:
        raise NotFoundError("Restaurant settings")

    if service.occupy_if_available(restaurant_table):
        publish_table_occupied(emitter, restaurant_table)

    return admin


@router.get("/menus", response_model=list[MenuDetailOutput])
def get_public_menus(
    admin_id: str | None = Query(default=None, alias="adminId"),
    db: Session = Depends(get_db),
):
    """The restaurant's menu items that are not deleted."""
    if not admin_id:
        raise ValidationError("Admin ID required")
    return MenuService(db).list_active(admin_id)
