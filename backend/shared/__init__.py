"""
Shared module for common utilities across the REST API and the realtime layer.

STRUCTURE:
- shared.security: Authentication and password hashing
  - auth.py: JWT signing/verification, current_user_context
  - password.py: Bcrypt hashing

- shared.infrastructure: Database and request correlation
  - db.py: SQLAlchemy sessions, safe_commit()
  - correlation.py: X-Request-ID middleware and logging filter

- shared.config: Configuration
  - settings.py: Environment config (Pydantic)
  - logging.py: Structured logging and audit helpers
  - constants.py: OrderStatus, TableStatus, OrderType, Limits

- shared.utils: Utilities
  - exceptions.py: HTTP exceptions with auto-logging
  - schemas.py: Shared Pydantic schemas

IMPORT EXAMPLES:
    from shared.security.auth import verify_jwt, current_user_context
    from shared.infrastructure.db import get_db, safe_commit
    from shared.config.settings import settings
    from shared.config.constants import OrderStatus, TableStatus
    from shared.utils.exceptions import NotFoundError, PlanLimitError
"""
