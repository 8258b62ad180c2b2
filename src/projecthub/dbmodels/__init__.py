"""
Database models for ProjectHub (authoritative ORM definitions).

This module defines the SQLAlchemy Base with a naming convention for stable
Alembic autogenerate diffs, and exposes `target_metadata` for Alembic.
"""

from sqlalchemy import (
    ForeignKeyConstraint,
    Index,
    Integer,
    MetaData,
    PrimaryKeyConstraint,
    String,
    Text,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

# Naming convention for deterministic constraint/index names in Alembic diffs
naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    """Base class for all database models with type checking support."""

    metadata = MetaData(naming_convention=naming_convention)


class Projects(Base):
    __tablename__ = "projects"
    __table_args__ = (
        PrimaryKeyConstraint("id", name="projects_pkey"),
        Index("idx_projects_user", "user_id"),
        Index("idx_projects_name", "name"),
    )

    # Ids are supplied by the client, never generated
    id: Mapped[int] = mapped_column(Integer, autoincrement=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    user_id: Mapped[int] = mapped_column(Integer, nullable=False)

    challenges: Mapped[list["Challenges"]] = relationship(
        "Challenges",
        uselist=True,
        back_populates="project",
        order_by="Challenges.id",
    )


class Challenges(Base):
    __tablename__ = "challenges"
    __table_args__ = (
        ForeignKeyConstraint(
            ["project_id"],
            ["projects.id"],
            ondelete="CASCADE",
            name="challenges_project_id_fkey",
        ),
        PrimaryKeyConstraint("id", name="challenges_pkey"),
        Index("idx_challenges_project", "project_id"),
    )

    id: Mapped[int] = mapped_column(Integer)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    project_id: Mapped[int] = mapped_column(Integer, nullable=False)

    project: Mapped["Projects"] = relationship("Projects", back_populates="challenges")


target_metadata = Base.metadata

__all__ = ["Base", "Projects", "Challenges", "target_metadata"]
