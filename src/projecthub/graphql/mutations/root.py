"""
Root GraphQL mutation definitions
"""

from typing import Annotated

import strawberry

from ..types.project import Project


@strawberry.type
class Mutation:
    """Root GraphQL mutation type."""

    @strawberry.mutation(name="createProject")
    async def create_project(
        self,
        info: strawberry.Info,
        id: int,
        name: str,
        user_id: Annotated[int, strawberry.argument(name="user_id")],
    ) -> Project:
        """Create a new project."""
        from ..resolvers.project import create_project

        return await create_project(info, id, name, user_id)
