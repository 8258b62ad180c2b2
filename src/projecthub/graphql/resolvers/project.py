from __future__ import annotations

from typing import TYPE_CHECKING

import strawberry

from ...auth.context import require_session
from ...errors import ProjectConflictError, ProjectValidationError
from ...logging import get_logger
from ...repository import ChallengeRecord, ProjectRecord
from ...validation import is_empty
from ..access_control import get_auth_context_from_info, get_repository_from_info

if TYPE_CHECKING:
    from ..types.challenge import Challenge
    from ..types.project import Project

logger = get_logger(__name__)


def _to_project(record: ProjectRecord) -> Project:
    from ..types.project import Project as ProjectType

    return ProjectType(id=record.id, name=record.name, user_id=record.user_id)


def _to_challenge(record: ChallengeRecord) -> Challenge:
    from ..types.challenge import Challenge as ChallengeType

    return ChallengeType(
        id=record.id,
        name=record.name,
        description=record.description,
        project_id=record.project_id,
    )


# Query resolvers
async def resolve_projects(info: strawberry.Info) -> list[Project]:
    """Resolve every project. Public; no pagination."""
    repository = get_repository_from_info(info)
    records = await repository.list_all()
    return [_to_project(record) for record in records]


async def resolve_is_project(info: strawberry.Info, user_id: int) -> Project | None:
    """
    Resolve the first project owned by a user.

    Requires an authenticated session.
    """
    require_session(await get_auth_context_from_info(info))

    repository = get_repository_from_info(info)
    record = await repository.get_by_field("user_id", user_id)
    if record is None:
        logger.info("No project for user", owner_id=user_id)
        return None
    return _to_project(record)


async def resolve_project_by_id(info: strawberry.Info, id: int) -> Project | None:
    """Resolve a project by its ID. Public."""
    repository = get_repository_from_info(info)
    record = await repository.get_by_id(id)
    if record is None:
        logger.info("Project not found", project_id=id)
        return None
    return _to_project(record)


# Field resolvers
async def resolve_project_challenges(project: Project, info: strawberry.Info) -> list[Challenge]:
    """Resolve the challenges of a project by looking the project up again by id."""
    if project.id is None:
        return []
    repository = get_repository_from_info(info)
    records = await repository.list_challenges(project.id)
    return [_to_challenge(record) for record in records]


# Mutation resolvers
async def create_project(info: strawberry.Info, id: int, name: str, user_id: int) -> Project:
    """
    Create a new project.

    The name must be non-empty and not used by another project. The
    uniqueness check and the insert are separate statements, so two
    concurrent creations with the same name can both succeed.
    """
    auth_context = require_session(await get_auth_context_from_info(info))

    # "   " is rejected too, stricter than a plain length check; the name is stored untrimmed
    if is_empty(name):
        logger.info("Rejected project with empty name", project_id=id)
        raise ProjectValidationError("Empty project name.")

    repository = get_repository_from_info(info)

    existing = await repository.get_by_field("name", name)
    if existing is not None:
        logger.info("Rejected duplicate project name", name=name, existing_id=existing.id)
        raise ProjectConflictError("Project already exist")

    record = await repository.insert(ProjectRecord(id=id, name=name, user_id=user_id))

    logger.info(
        "Project created",
        project_id=record.id,
        owner_id=record.user_id,
        created_by=auth_context.user_id,
    )

    return _to_project(record)
