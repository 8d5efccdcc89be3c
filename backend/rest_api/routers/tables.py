"""
Table management for the dashboard, plus the public lookup by QR code.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from rest_api.models import Admin
from rest_api.routers._deps import current_user, get_current_admin, tenant_id_of
from rest_api.services import TableService
from shared.infrastructure.db import get_db
from shared.utils.schemas import SuccessResponse, TableInput, TableOutput, TableUpdate

router = APIRouter(prefix="/api/tables", tags=["tables"])


@router.get("/public/{code}", response_model=TableOutput)
def get_public_table(code: str, db: Session = Depends(get_db)):
    """Public: resolve a QR code to its table (case-insensitive)."""
    return TableService(db).get_by_code(code)


@router.get("", response_model=list[TableOutput])
def list_tables(
    db: Session = Depends(get_db),
    user: dict = Depends(current_user),
):
    return TableService(db).list_for_tenant(tenant_id_of(user))


@router.post("", response_model=TableOutput)
def create_table(
    body: TableInput,
    db: Session = Depends(get_db),
    admin: Admin = Depends(get_current_admin),
):
    """Create a table. 403 once the plan's max_tables is reached."""
    return TableService(db).create(admin, body)


@router.put("/{table_id}", response_model=TableOutput)
def update_table(
    table_id: int,
    body: TableUpdate,
    db: Session = Depends(get_db),
    user: dict = Depends(current_user),
):
    return TableService(db).update(table_id, tenant_id_of(user), body)


@router.delete("/{table_id}", response_model=SuccessResponse)
def delete_table(
    table_id: int,
    db: Session = Depends(get_db),
    user: dict = Depends(current_user),
):
    """Delete a table. 400 while it is occupied."""
    TableService(db).delete(table_id, tenant_id_of(user))
    return SuccessResponse()
