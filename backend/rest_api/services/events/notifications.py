"""
Realtime notifications for committed mutations.

Every function here is called by a route handler AFTER db.commit(). They
build the event payload from fresh rows and hand it to the EventEmitter.
They never raise: a failed notification is logged and the HTTP response
goes out unchanged, since the mutation itself already succeeded.
"""

from sqlalchemy.orm import Session

from realtime import (
    EventEmitter,
    MenuUpdated,
    NewOrder,
    OrderStatusUpdated,
    OrderUpdated,
    TableUpdated,
)
from rest_api.models import Menu, Order, RestaurantTable
from rest_api.repositories import OrderRepository
from shared.config.logging import get_logger
from shared.utils.schemas import MenuOutput, OrderDetailOutput, OrderOutput, TableOutput

logger = get_logger(__name__)


def publish_new_order(db: Session, emitter: EventEmitter, order_id: int) -> int:
    """
    Notify the tenant dashboard (admin_{tenant}) of a new order.

    The order is re-fetched with its table and line items so the payload
    carries table code and item names, not just the inserted row.

    Returns:
        Number of connections notified.
    """
    try:
        order = OrderRepository(db).get_detail(order_id)
        if order is None:
            logger.warning("Order not found after commit, skipping new-order notification", order_id=order_id)
            return 0
        if not order.admin_id:
            logger.debug("Order has no tenant, skipping new-order notification", order_id=order_id)
            return 0

        payload = OrderDetailOutput.model_validate(order).model_dump(mode="json")
        return emitter.emit(NewOrder(tenant_id=order.admin_id, order=payload))
    except Exception as e:
        logger.error(
            "Failed to publish new-order",
            order_id=order_id,
            error=str(e),
            exc_info=True,
        )
        return 0


def publish_order_status_changed(emitter: EventEmitter, order: Order) -> int:
    """
    Notify both audiences of an order status change:
    - order_{id}: {"status": ...} for the customer tracking the order
    - admin_{tenant}: the full order row for the dashboard

    The two broadcasts are independent; the second runs even if the first fails.

    Returns:
        Total number of connections notified.
    """
    delivered = 0

    try:
        delivered += emitter.emit(OrderStatusUpdated(order_id=order.id, status=order.status))
    except Exception as e:
        logger.error(
            "Failed to publish order-status-updated",
            order_id=getattr(order, "id", None),
            error=str(e),
            exc_info=True,
        )

    try:
        if order.admin_id:
            payload = OrderOutput.model_validate(order).model_dump(mode="json")
            delivered += emitter.emit(OrderUpdated(tenant_id=order.admin_id, order=payload))
    except Exception as e:
        logger.error(
            "Failed to publish order-updated",
            order_id=getattr(order, "id", None),
            error=str(e),
            exc_info=True,
        )

    return delivered


def publish_menu_updated(emitter: EventEmitter, tenant_id: str, menu: Menu) -> int:
    """Notify the tenant's live menu editors (menu_{tenant}) of an updated menu item."""
    try:
        payload = MenuOutput.model_validate(menu).model_dump(mode="json")
        return emitter.emit(MenuUpdated(tenant_id=tenant_id, menu=payload))
    except Exception as e:
        logger.error(
            "Failed to publish menu-updated",
            menu_id=getattr(menu, "id", None),
            error=str(e),
            exc_info=True,
        )
        return 0


def publish_table_occupied(emitter: EventEmitter, table: RestaurantTable) -> int:
    """Notify the tenant dashboard (admin_{tenant}) that a table is now occupied."""
    try:
        payload = TableOutput.model_validate(table).model_dump(mode="json")
        return emitter.emit(TableUpdated(tenant_id=table.admin_id, table=payload))
    except Exception as e:
        logger.error(
            "Failed to publish table-updated",
            table_id=getattr(table, "id", None),
            error=str(e),
            exc_info=True,
        )
        return 0
