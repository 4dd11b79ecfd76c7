"""Session identity for guest and signed-in shoppers"""

import logging
import uuid
from dataclasses import dataclass
from typing import Optional

from fastapi import Header, Request, Response

from .config import settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionToken:
    """Opaque token keying a shopper's cart"""
    value: str
    is_new: bool = False

    def __str__(self) -> str:
        return self.value


def generate_session_token() -> str:
    """Generate a new globally unique session token"""
    return str(uuid.uuid4())


def resolve_session_token(incoming_token: Optional[str]) -> SessionToken:
    """
    Return the client's token unchanged, or a fresh one if it sent none.

    Tokens are trusted as sent; they are correlation ids, not credentials.
    """
    if incoming_token and incoming_token.strip():
        return SessionToken(value=incoming_token)

    token = SessionToken(value=generate_session_token(), is_new=True)
    logger.debug(f"Generated session token {token.value}")
    return token


async def get_session_token(
    request: Request,
    response: Response,
    x_session_id: Optional[str] = Header(None, alias=settings.session_header),
) -> SessionToken:
    """FastAPI dependency resolving the session token and echoing it back"""
    token = resolve_session_token(x_session_id)
    request.state.session_token = token
    response.headers[settings.session_header] = token.value
    return token


def echo_session_header(request: Request, response: Response) -> Response:
    """
    Copy the caller's session token onto a response built outside the route,
    such as an error response.

    Cart requests rejected before the session dependency ran (a body that is
    not JSON) still get a token, resolved from the request headers.
    """
    token = getattr(request.state, "session_token", None)
    if token is None and request.url.path.startswith(f"{settings.api_prefix}/cart"):
        token = resolve_session_token(request.headers.get(settings.session_header))
        request.state.session_token = token

    if token is not None:
        response.headers[settings.session_header] = token.value
    return response
