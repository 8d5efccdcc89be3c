"""
Orders: placement from the public menu and status changes from the dashboard.

Notifications go out after the commit:
- POST  -> new-order to admin_{tenant}
- PUT   -> order-status-updated to order_{id} and order-updated to admin_{tenant}
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from realtime import EventEmitter, get_emitter
from rest_api.routers._deps import current_user, tenant_id_of
from rest_api.services import OrderService, publish_new_order, publish_order_status_changed
from shared.infrastructure.db import get_db
from shared.utils.schemas import OrderCreate, OrderDetailOutput, OrderOutput, OrderStatusUpdate

router = APIRouter(prefix="/api/orders", tags=["orders"])


@router.get("", response_model=list[OrderDetailOutput])
def list_orders(
    db: Session = Depends(get_db),
    user: dict = Depends(current_user),
):
    """The tenant's orders with table and items, newest first."""
    return OrderService(db).list_for_tenant(tenant_id_of(user))


@router.post("", response_model=OrderOutput)
def create_order(
    body: OrderCreate,
    db: Session = Depends(get_db),
    emitter: EventEmitter = Depends(get_emitter),
):
    """Public: a customer places an order from the table's menu."""
    order = OrderService(db).place_order(body)
    publish_new_order(db, emitter, order.id)
    return order


@router.put("/{order_id}/status", response_model=OrderOutput)
def update_order_status(
    order_id: int,
    body: OrderStatusUpdate,
    db: Session = Depends(get_db),
    user: dict = Depends(current_user),
    emitter: EventEmitter = Depends(get_emitter),
):
    """Change an order's status. Setting the current status again notifies nobody."""
    order, changed = OrderService(db).change_status(order_id, tenant_id_of(user), body.status)
    if changed:
        publish_order_status_changed(emitter, order)
    return order
