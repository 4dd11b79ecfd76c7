"""
JWT access tokens

Issues and verifies the HS256 bearer tokens carried by signed-in users.
The identity service owns users; this module only signs and checks
``{"sub": user_id, "role": role}`` payloads.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt

from ..core.config import Settings, get_settings


class TokenError(Exception):
    """Token is missing, malformed, expired, or has a bad signature"""


@dataclass
class TokenPayload:
    """Verified identity carried by an access token"""
    subject: str
    role: str = "user"
    expires_at: Optional[datetime] = None

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"


def issue_access_token(
    subject: str,
    role: str = "user",
    expires_delta: Optional[timedelta] = None,
    settings: Optional[Settings] = None,
) -> str:
    """
    Sign an access token.

    Args:
        subject: Opaque user id
        role: "user" or "admin"
        expires_delta: Lifetime, defaults to jwt_expiry_minutes

    Returns:
        Encoded JWT
    """
    settings = settings or get_settings()
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.jwt_expiry_minutes)

    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(subject),
        "role": role,
        "iat": now,
        "exp": now + expires_delta,
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_access_token(token: str, settings: Optional[Settings] = None) -> TokenPayload:
    """Decode and verify an access token, raising TokenError on failure"""
    settings = settings or get_settings()

    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["sub", "exp"]},
        )
    except jwt.ExpiredSignatureError:
        raise TokenError("Token has expired")
    except jwt.InvalidTokenError as e:
        raise TokenError(f"Invalid token: {e}")

    return TokenPayload(
        subject=payload["sub"],
        role=payload.get("role", "user"),
        expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
    )


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Extract the token from an ``Authorization: Bearer <token>`` header"""
    if not authorization:
        return None

    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()
