"""
Table Domain Service.

Table CRUD for the dashboard and the occupancy flip triggered when a
customer opens a table's menu.
"""

from sqlalchemy import update
from sqlalchemy.orm import Session

from rest_api.models import Admin, RestaurantTable
from rest_api.repositories import TableRepository
from shared.config.constants import TableStatus
from shared.config.logging import get_logger
from shared.infrastructure.db import safe_commit
from shared.utils.exceptions import InvalidStateError, NotFoundError, PlanLimitError, ValidationError
from shared.utils.schemas import TableInput, TableUpdate

logger = get_logger(__name__)


class TableService:
    def __init__(self, db: Session):
        self._db = db
        self._tables = TableRepository(db)

    def list_for_tenant(self, tenant_id: str):
        return self._tables.list_for_tenant(tenant_id)

    def get_by_code(self, code: str) -> RestaurantTable:
        table = self._tables.find_by_code(code)
        if table is None:
            raise NotFoundError("Table", table_code=code)
        return table

    def create(self, admin: Admin, data: TableInput) -> RestaurantTable:
        """
        Raises:
            ValidationError: No code or number given.
            PlanLimitError: The tenant already has max_tables tables.
        """
        code = data.resolved_code()
        if not code:
            raise ValidationError("Table code required")

        if self._tables.count_for_tenant(admin.id) >= admin.max_tables:
            raise PlanLimitError("Table", limit=admin.max_tables, tenant_id=admin.id)

        table = RestaurantTable(admin_id=admin.id, code=code, capacity=data.capacity)
        self._db.add(table)
        safe_commit(self._db)
        self._db.refresh(table)
        logger.info("Table created", table_id=table.id, tenant_id=admin.id, code=code)
        return table

    def update(self, table_id: int, tenant_id: str, data: TableUpdate) -> RestaurantTable:
        table = self._require(table_id, tenant_id)
        for field, value in data.model_dump(exclude_unset=True, exclude_none=True).items():
            setattr(table, field, value)
        safe_commit(self._db)
        self._db.refresh(table)
        return table

    def delete(self, table_id: int, tenant_id: str) -> None:
        """
        Raises:
            InvalidStateError: The table is occupied.
        """
        table = self._require(table_id, tenant_id)
        if table.status == TableStatus.OCCUPIED:
            raise InvalidStateError("Table", table.status, "delete", table_id=table_id)
        self._db.delete(table)
        safe_commit(self._db)
        logger.info("Table deleted", table_id=table_id, tenant_id=tenant_id)

    def occupy_if_available(self, table: RestaurantTable) -> bool:
        """
        Flip an available table to occupied.

        The conditional UPDATE makes the flip happen at most once even when
        several customers scan the same code at the same time.

        Returns:
            True if this call performed the flip.
        """
        result = self._db.execute(
            update(RestaurantTable)
            .where(
                RestaurantTable.id == table.id,
                RestaurantTable.status == TableStatus.AVAILABLE,
            )
            .values(status=TableStatus.OCCUPIED)
            .execution_options(synchronize_session=False)
        )
        flipped = result.rowcount == 1
        safe_commit(self._db)
        self._db.refresh(table)

        if flipped:
            logger.info("Table occupied", table_id=table.id, tenant_id=table.admin_id)
        return flipped

    def _require(self, table_id: int, tenant_id: str) -> RestaurantTable:
        table = self._tables.get_for_tenant(table_id, tenant_id)
        if table is None:
            raise NotFoundError("Table", table_id, tenant_id=tenant_id)
        return table
