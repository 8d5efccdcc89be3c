"""
Order Domain Service.

Order placement from the public menu and status changes from the dashboard.
Realtime notification is the router's job, after these methods commit.
"""

from decimal import Decimal

from sqlalchemy.orm import Session

from rest_api.models import Admin, Order, OrderItem
from rest_api.repositories import MenuRepository, OrderRepository, TableRepository
from shared.config.constants import OrderStatus, OrderType
from shared.config.logging import get_logger
from shared.infrastructure.db import safe_commit
from shared.utils.exceptions import NotFoundError, ValidationError
from shared.utils.schemas import OrderCreate

logger = get_logger(__name__)


class OrderService:
    def __init__(self, db: Session):
        self._db = db
        self._orders = OrderRepository(db)
        self._menus = MenuRepository(db)
        self._tables = TableRepository(db)

    def place_order(self, data: OrderCreate) -> Order:
        """
        Create an order with server-side prices.

        The tenant comes from the table when a table code is given,
        otherwise from adminId (take-away orders without a table).

        Raises:
            NotFoundError: Unknown table (dine-in) or unknown restaurant.
            ValidationError: Unknown, deleted, unavailable or foreign menu items.
        """
        table = self._tables.find_by_code(data.table_code) if data.table_code else None
        if data.table_code and table is None and data.type != OrderType.TAKE_AWAY:
            raise NotFoundError("Table", table_code=data.table_code)

        tenant_id = table.admin_id if table is not None else data.admin_id
        if not tenant_id:
            raise ValidationError("Table code or admin ID required")
        if table is None and self._db.get(Admin, tenant_id) is None:
            raise NotFoundError("Restaurant", tenant_id)

        menus = {m.id: m for m in self._menus.get_many({item.menu_id for item in data.items})}

        total = Decimal("0")
        order = Order(
            admin_id=tenant_id,
            table_id=table.id if table is not None else None,
            status=OrderStatus.PENDING,
            type=data.type,
            total=total,
        )
        for item in data.items:
            menu = menus.get(item.menu_id)
            if menu is None or menu.is_deleted or menu.user_id != tenant_id:
                raise ValidationError(f"Menu item with ID {item.menu_id} not found", menu_id=item.menu_id)
            if not menu.available:
                raise ValidationError(f"Menu item {menu.name_en} is not available", menu_id=menu.id)

            price = Decimal(menu.price)
            total += price * item.quantity
            order.order_items.append(
                OrderItem(
                    menu_id=menu.id,
                    quantity=item.quantity,
                    price_at_order=price,
                    note=item.notes,
                )
            )

        order.total = total
        self._db.add(order)
        safe_commit(self._db)

        logger.info(
            "Order placed",
            order_id=order.id,
            tenant_id=tenant_id,
            table_id=order.table_id,
            items=len(data.items),
        )
        return order

    def change_status(self, order_id: int, tenant_id: str, status: str) -> tuple[Order, bool]:
        """
        Set an order's status.

        Returns:
            (order, changed) where changed is False if the status was already set.

        Raises:
            NotFoundError: The order does not exist or belongs to another tenant.
        """
        order = self._orders.get_for_tenant(order_id, tenant_id)
        if order is None:
            raise NotFoundError("Order", order_id, tenant_id=tenant_id)

        if order.status == status:
            return order, False

        previous = order.status
        order.status = status
        safe_commit(self._db)
        self._db.refresh(order)

        logger.info("Order status changed", order_id=order.id, from_status=previous, to_status=status)
        return order, True

    def list_for_tenant(self, tenant_id: str):
        return self._orders.list_for_tenant(tenant_id)
