"""
Security module: Authentication and password hashing.
"""

from shared.security.auth import (
    sign_jwt,
    sign_admin_token,
    verify_jwt,
    get_bearer_token,
    current_user_context,
)
from shared.security.password import hash_password, verify_password

__all__ = [
    # auth
    "sign_jwt",
    "sign_admin_token",
    "verify_jwt",
    "get_bearer_token",
    "current_user_context",
    # password
    "hash_password",
    "verify_password",
]
