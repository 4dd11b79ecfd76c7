"""
Admin authorization

Guards back-office routes with a bearer JWT whose payload carries the
admin role. Requests without a token are rejected with 401; valid tokens
for other roles with 403.
"""

import logging
from typing import Optional

from fastapi import Depends, Header, HTTPException

from ..core.config import Settings, get_settings
from .tokens import TokenError, TokenPayload, extract_bearer_token, verify_access_token

logger = logging.getLogger(__name__)


class AdminDependency:
    """
    FastAPI dependency for role checks on bearer tokens.

    Use at router level to protect every route of a router, or per route.
    """

    def __init__(self, require_admin: bool = True):
        """
        Args:
            require_admin: If True, reject tokens without the admin role
        """
        self.require_admin = require_admin

    async def __call__(
        self,
        authorization: Optional[str] = Header(None),
        settings: Settings = Depends(get_settings),
    ) -> TokenPayload:
        if not settings.admin_auth_enabled:
            return TokenPayload(subject="local-admin", role="admin")

        token = extract_bearer_token(authorization)
        if not token:
            raise HTTPException(
                status_code=401,
                detail="Access token is required",
                headers={"WWW-Authenticate": "Bearer"},
            )

        try:
            payload = verify_access_token(token, settings)
        except TokenError as e:
            logger.warning(f"Rejected access token: {e}")
            raise HTTPException(
                status_code=401,
                detail=str(e),
                headers={"WWW-Authenticate": "Bearer"},
            )

        if self.require_admin and not payload.is_admin:
            logger.info(f"Admin access denied for user {payload.subject}")
            raise HTTPException(status_code=403, detail="Admin access required")

        return payload


# Dependency instance
require_admin = AdminDependency(require_admin=True)
