"""
Shared request plumbing for GraphQL resolvers
"""

from typing import TYPE_CHECKING

import strawberry

from ..auth.session import get_auth_context
from ..logging import bind_user, get_logger
from ..repository import get_project_repository

if TYPE_CHECKING:
    from ..auth.context import AuthContext
    from ..repository import ProjectRepository

logger = get_logger(__name__)


async def get_auth_context_from_info(info: strawberry.Info) -> "AuthContext | None":
    """
    Extract auth context from GraphQL info object.

    Returns None if the request is not available.
    """
    request = info.context.get("request")
    if not request:
        logger.error("Request not found in GraphQL context")
        return None

    auth_context = await get_auth_context(request.headers.get("authorization"))
    if auth_context.is_authenticated:
        bind_user(auth_context.user_id)
    return auth_context


def get_repository_from_info(info: strawberry.Info) -> "ProjectRepository":
    """Use the repository placed in the context, falling back to the configured store."""
    repository = info.context.get("projects")
    if repository is None:
        repository = get_project_repository()
    return repository
