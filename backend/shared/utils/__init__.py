"""
Utilities module: Exceptions and API schemas.
"""

from shared.utils.exceptions import (
    AppException,
    UnauthorizedError,
    NotFoundError,
    ForbiddenError,
    PlanLimitError,
    ValidationError,
    InvalidStateError,
)

__all__ = [
    "AppException",
    "UnauthorizedError",
    "NotFoundError",
    "ForbiddenError",
    "PlanLimitError",
    "ValidationError",
    "InvalidStateError",
]
