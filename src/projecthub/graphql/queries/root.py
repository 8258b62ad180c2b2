"""
Root GraphQL query definitions
"""

import strawberry

from ..types.project import Project


@strawberry.type
class Query:
    """Root GraphQL query type."""

    @strawberry.field
    async def projects(self, info: strawberry.Info) -> list[Project]:
        """Get all projects."""
        from ..resolvers.project import resolve_projects

        return await resolve_projects(info)

    @strawberry.field(name="isProject")
    async def is_project(self, info: strawberry.Info, user_id: int) -> Project | None:
        """Get the first project owned by a user (authenticated)."""
        from ..resolvers.project import resolve_is_project

        return await resolve_is_project(info, user_id)

    @strawberry.field(name="getProjectById")
    async def get_project_by_id(self, info: strawberry.Info, id: int) -> Project | None:
        """Get a project by ID."""
        from ..resolvers.project import resolve_project_by_id

        return await resolve_project_by_id(info, id)
