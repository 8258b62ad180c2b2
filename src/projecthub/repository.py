"""Storage adapters for projects and their challenges."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol

from sqlalchemy import select
from sqlalchemy.orm import selectinload

from .config import settings
from .database.connection import get_async_session
from .dbmodels import Challenges, Projects
from .errors import RecordExistsError
from .logging import get_logger

logger = get_logger(__name__)

# Columns that may be used for single-field lookups
LOOKUP_FIELDS = frozenset({"id", "name", "user_id"})


@dataclass(frozen=True)
class ProjectRecord:
    id: int
    name: str
    user_id: int


@dataclass(frozen=True)
class ChallengeRecord:
    id: int
    name: str
    description: str | None
    project_id: int


class ProjectRepository(Protocol):
    """Storage-agnostic interface the resolvers talk to."""

    async def get_by_id(self, id: int) -> ProjectRecord | None:
        """Return the project with this primary key, or None."""
        ...

    async def get_by_field(self, field: str, value: Any) -> ProjectRecord | None:
        """
        Return the first project whose `field` equals `value`, or None.

        "First" follows the store's natural order and is not guaranteed stable.

        Raises:
            ValueError: If `field` is not a lookup column
        """
        ...

    async def list_all(self) -> list[ProjectRecord]:
        """Return every project in store order."""
        ...

    async def insert(self, record: ProjectRecord) -> ProjectRecord:
        """Persist a new project and return it as stored."""
        ...

    async def list_challenges(self, project_id: int) -> list[ChallengeRecord]:
        """Return the challenges of a project ordered by id; empty if the project is missing."""
        ...


def _check_field(field: str) -> None:
    if field not in LOOKUP_FIELDS:
        raise ValueError(f"Unsupported lookup field: {field}")


def _project_record(row: Projects) -> ProjectRecord:
    return ProjectRecord(id=row.id, name=row.name, user_id=row.user_id)


def _challenge_record(row: Challenges) -> ChallengeRecord:
    return ChallengeRecord(
        id=row.id,
        name=row.name,
        description=row.description,
        project_id=row.project_id,
    )


class SQLProjectRepository:
    """Project repository backed by the shared async SQLAlchemy engine."""

    async def get_by_id(self, id: int) -> ProjectRecord | None:
        async with get_async_session() as session:
            project = await session.get(Projects, id)
            return _project_record(project) if project else None

    async def get_by_field(self, field: str, value: Any) -> ProjectRecord | None:
        _check_field(field)
        async with get_async_session() as session:
            stmt = select(Projects).where(getattr(Projects, field) == value).limit(1)
            result = await session.execute(stmt)
            project = result.scalars().first()
            return _project_record(project) if project else None

    async def list_all(self) -> list[ProjectRecord]:
        async with get_async_session() as session:
            result = await session.execute(select(Projects))
            return [_project_record(project) for project in result.scalars().all()]

    async def insert(self, record: ProjectRecord) -> ProjectRecord:
        # Duplicate ids surface as the driver's IntegrityError
        async with get_async_session() as session:
            project = Projects(id=record.id, name=record.name, user_id=record.user_id)
            session.add(project)
            await session.flush()
            return _project_record(project)

    async def list_challenges(self, project_id: int) -> list[ChallengeRecord]:
        async with get_async_session() as session:
            stmt = (
                select(Projects)
                .where(Projects.id == project_id)
                .options(selectinload(Projects.challenges))
            )
            result = await session.execute(stmt)
            project = result.scalar_one_or_none()
            if project is None:
                return []
            return [_challenge_record(challenge) for challenge in project.challenges]


class InMemoryProjectRepository:
    """Dict-backed project repository for development and tests."""

    def __init__(self) -> None:
        self._projects: dict[int, ProjectRecord] = {}
        self._challenges: dict[int, ChallengeRecord] = {}

    async def get_by_id(self, id: int) -> ProjectRecord | None:
        return self._projects.get(id)

    async def get_by_field(self, field: str, value: Any) -> ProjectRecord | None:
        _check_field(field)
        for project in self._projects.values():
            if getattr(project, field) == value:
                return project
        return None

    async def list_all(self) -> list[ProjectRecord]:
        return list(self._projects.values())

    async def insert(self, record: ProjectRecord) -> ProjectRecord:
        if record.id in self._projects:
            raise RecordExistsError(f"Project with id {record.id} already stored")
        self._projects[record.id] = record
        return record

    async def list_challenges(self, project_id: int) -> list[ChallengeRecord]:
        if project_id not in self._projects:
            return []
        return sorted(
            (c for c in self._challenges.values() if c.project_id == project_id),
            key=lambda c: c.id,
        )

    def add_challenge(self, record: ChallengeRecord) -> ChallengeRecord:
        """Seed a challenge; the relation is owned by the store, not the API."""
        if record.id in self._challenges:
            raise RecordExistsError(f"Challenge with id {record.id} already stored")
        self._challenges[record.id] = record
        return record

    def clear(self) -> None:
        self._projects.clear()
        self._challenges.clear()


_memory_repository: InMemoryProjectRepository | None = None


def get_project_repository() -> ProjectRepository:
    """Return the repository for the configured `project_store`."""
    global _memory_repository

    store = settings.project_store.lower()
    if store == "sql":
        return SQLProjectRepository()
    if store == "memory":
        if _memory_repository is None:
            logger.warning("Using in-memory project store; data is lost on restart")
            _memory_repository = InMemoryProjectRepository()
        return _memory_repository
    raise ValueError(f"Unsupported project store: {settings.project_store}")
