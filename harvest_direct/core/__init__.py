# Core modules

from .config import settings, get_settings, Settings
from .session import SessionToken, resolve_session_token, get_session_token, echo_session_header
from .locks import KeyedLock

__all__ = [
    "settings",
    "get_settings",
    "Settings",
    "SessionToken",
    "resolve_session_token",
    "get_session_token",
    "echo_session_header",
    "KeyedLock",
]
