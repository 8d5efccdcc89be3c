"""
Shared dependencies for authenticated routers.
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from rest_api.models import Admin
from shared.infrastructure.db import get_db
from shared.security.auth import current_user_context as current_user
from shared.utils.exceptions import UnauthorizedError


def tenant_id_of(user: dict) -> str:
    """The tenant id carried in the token (the admin's id)."""
    return user["tenant_id"]


def get_current_admin(
    db: Session = Depends(get_db),
    user: dict = Depends(current_user),
) -> Admin:
    """Load the authenticated admin. A token for a removed account is rejected."""
    admin = db.get(Admin, tenant_id_of(user))
    if admin is None:
        raise UnauthorizedError("Account no longer exists", admin_id=tenant_id_of(user))
    return admin
