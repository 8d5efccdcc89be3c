"""
Menu item management for the dashboard.

PUT notifies the tenant's live menu editors (menu_{tenant}) after commit.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from realtime import EventEmitter, get_emitter
from rest_api.models import Admin
from rest_api.routers._deps import current_user, get_current_admin, tenant_id_of
from rest_api.services import MenuService, publish_menu_updated
from shared.infrastructure.db import get_db
from shared.utils.schemas import MenuDetailOutput, MenuInput, SuccessResponse

router = APIRouter(prefix="/api/menus", tags=["menus"])


@router.get("", response_model=list[MenuDetailOutput])
def list_menus(
    db: Session = Depends(get_db),
    user: dict = Depends(current_user),
):
    """The tenant's menu items that are not deleted, newest first."""
    return MenuService(db).list_active(tenant_id_of(user))


@router.post("", response_model=MenuDetailOutput)
def create_menu(
    body: MenuInput,
    db: Session = Depends(get_db),
    admin: Admin = Depends(get_current_admin),
):
    """Create a menu item. 403 once the plan's max_menu_items is reached."""
    return MenuService(db).create(admin, body)


@router.put("/{menu_id}", response_model=MenuDetailOutput)
def update_menu(
    menu_id: int,
    body: MenuInput,
    db: Session = Depends(get_db),
    user: dict = Depends(current_user),
    emitter: EventEmitter = Depends(get_emitter),
):
    tenant_id = tenant_id_of(user)
    menu = MenuService(db).update(menu_id, tenant_id, body)
    publish_menu_updated(emitter, tenant_id, menu)
    return menu


@router.delete("/{menu_id}", response_model=SuccessResponse)
def delete_menu(
    menu_id: int,
    hard: bool = False,
    db: Session = Depends(get_db),
    user: dict = Depends(current_user),
):
    """Soft delete; ?hard=true removes the row."""
    MenuService(db).delete(menu_id, tenant_id_of(user), hard=hard)
    return SuccessResponse()
