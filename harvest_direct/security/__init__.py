# Access token handling and admin authorization

from .tokens import (
    TokenError,
    TokenPayload,
    issue_access_token,
    verify_access_token,
    extract_bearer_token,
)
from .admin_auth import AdminDependency, require_admin

__all__ = [
    "TokenError",
    "TokenPayload",
    "issue_access_token",
    "verify_access_token",
    "extract_bearer_token",
    "AdminDependency",
    "require_admin",
]
