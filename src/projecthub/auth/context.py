"""Authentication context for request handling."""

from __future__ import annotations

from dataclasses import dataclass

from .adapters.base import AuthenticationError, Principal

NOT_AUTHENTICATED = "Not authenticated!"


@dataclass
class AuthContext:
    """Runtime authentication context for a request."""

    user_id: str | None
    principal: Principal | None
    token: str | None

    @property
    def is_authenticated(self) -> bool:
        """Check if the request is authenticated."""
        return self.user_id is not None and self.principal is not None

    @property
    def provider(self) -> str | None:
        """Get the authentication provider name."""
        return self.principal["provider"] if self.principal else None

    @classmethod
    def anonymous(cls) -> AuthContext:
        return cls(user_id=None, principal=None, token=None)


def require_session(auth_context: AuthContext | None) -> AuthContext:
    """
    Precondition for operations that need a logged-in caller.

    Raises:
        AuthenticationError: If there is no authenticated session
    """
    if auth_context is None or not auth_context.is_authenticated:
        raise AuthenticationError(NOT_AUTHENTICATED)
    return auth_context
