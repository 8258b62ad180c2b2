"""Resolve the caller's session from request headers."""

from __future__ import annotations

from ..logging import get_logger
from .adapters.base import AuthenticationError
from .adapters.none import NoAuthAdapter
from .context import AuthContext
from .factory import get_auth_adapter

logger = get_logger(__name__)


async def get_auth_context(authorization: str | None) -> AuthContext:
    """
    Build the authentication context for a request.

    This function:
    1. Extracts the Bearer token from the Authorization header
    2. Verifies it with the configured auth adapter
    3. Returns an authenticated AuthContext, or an anonymous one when
       the header is missing, malformed or the token is rejected

    In no-auth mode a missing header is treated as a development token.

    Args:
        authorization: Authorization header value

    Returns:
        AuthContext for the request (never raises for bad credentials)
    """
    adapter = get_auth_adapter()

    if not authorization:
        if isinstance(adapter, NoAuthAdapter):
            authorization = "Bearer dev-token"
        else:
            return AuthContext.anonymous()

    if not authorization.startswith("Bearer "):
        logger.warning("Invalid authorization format received")
        return AuthContext.anonymous()

    token = authorization[7:]
    if not token:
        logger.warning("Empty token provided")
        return AuthContext.anonymous()

    try:
        principal = await adapter.verify_token(token)
    except AuthenticationError as e:
        logger.warning("Authentication failed", error=str(e))
        return AuthContext.anonymous()

    logger.debug(
        "Request authenticated",
        provider=principal.get("provider"),
        subject=principal.get("subject"),
    )
    return AuthContext(user_id=principal["subject"], principal=principal, token=token)
