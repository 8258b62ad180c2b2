"""
Challenge GraphQL type definitions
"""

import strawberry


@strawberry.type
class Challenge:
    """Challenge type for GraphQL API (read-only, owned by the database schema)."""

    id: int | None
    name: str | None
    description: str | None
    project_id: int | None = strawberry.field(name="project_id")
