"""Authentication and session handling for ProjectHub."""

from .adapters.base import AuthAdapter, AuthenticationError, Principal
from .context import AuthContext, require_session
from .factory import get_auth_adapter
from .session import get_auth_context

__all__ = [
    "AuthAdapter",
    "AuthenticationError",
    "Principal",
    "AuthContext",
    "require_session",
    "get_auth_adapter",
    "get_auth_context",
]
