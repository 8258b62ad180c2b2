"""
Project GraphQL type definitions
"""

import strawberry

from .challenge import Challenge


@strawberry.type
class Project:
    """Project type for GraphQL API."""

    id: int | None
    name: str | None
    user_id: int | None = strawberry.field(name="user_id")

    @strawberry.field
    async def challenges(self, info: strawberry.Info) -> list[Challenge | None] | None:
        """Get the challenges of this project."""
        from ..resolvers.project import resolve_project_challenges

        return await resolve_project_challenges(self, info)
