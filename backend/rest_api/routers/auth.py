"""
Authentication router.
Handles admin login and profile.
"""

from fastapi import APIRouter, Depends, Request
from sqlalchemy import select
from sqlalchemy.orm import Session

from rest_api.models import Admin
from rest_api.routers._deps import get_current_admin
from shared.config.logging import audit_auth_event, mask_email
from shared.config.logging import auth_logger as logger
from shared.infrastructure.db import get_db
from shared.security.auth import sign_admin_token
from shared.security.password import verify_password
from shared.utils.exceptions import UnauthorizedError
from shared.utils.schemas import AdminOutput, LoginRequest, LoginResponse, LoginUser

router = APIRouter(tags=["auth"])


@router.post("/api/auth/login", response_model=LoginResponse)
def login(request: Request, body: LoginRequest, db: Session = Depends(get_db)) -> LoginResponse:
    """
    Authenticate an admin and return a bearer token.

    The token carries:
    - sub / tenant_id: the admin id
    - email
    """
    ip_address = request.client.host if request.client else None
    admin = db.scalar(select(Admin).where(Admin.email == body.email))

    if admin is None or not admin.password or not body.password:
        logger.warning("LOGIN_FAILED: Unknown account or missing password", email=mask_email(body.email))
        audit_auth_event("LOGIN", email=body.email, success=False, reason="unknown_account", ip_address=ip_address)
        raise UnauthorizedError("Invalid email or password")

    if not verify_password(body.password, admin.password):
        logger.warning("LOGIN_FAILED: Invalid password", email=mask_email(body.email), user_id=admin.id)
        audit_auth_event("LOGIN", user_id=admin.id, email=body.email, success=False, reason="bad_password", ip_address=ip_address)
        raise UnauthorizedError("Invalid email or password")

    token = sign_admin_token(admin.id, admin.email)
    audit_auth_event("LOGIN", user_id=admin.id, email=admin.email, ip_address=ip_address)

    return LoginResponse(
        token=token,
        user=LoginUser(id=admin.id, email=admin.email, name=admin.restaurant_name),
    )


@router.get("/api/admin/profile", response_model=AdminOutput)
def get_profile(admin: Admin = Depends(get_current_admin)) -> Admin:
    """The authenticated admin's profile and plan limits."""
    return admin
