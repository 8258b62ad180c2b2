"""
Initial schema with projects and challenges tables.

Revision ID: 20250101_000000_initial_schema
Revises:
Create Date: 2025-01-01 00:00:00
"""

import sqlalchemy as sa

from alembic import op  # type: ignore[reportMissingImports]

# revision identifiers, used by Alembic.
revision = "20250101_000000_initial_schema"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # projects: ids are supplied by clients
    op.create_table(
        "projects",
        sa.Column("id", sa.Integer(), autoincrement=False, nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("id", name="projects_pkey"),
    )
    op.create_index("idx_projects_user", "projects", ["user_id"])
    op.create_index("idx_projects_name", "projects", ["name"])

    # challenges
    op.create_table(
        "challenges",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("project_id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(
            ["project_id"],
            ["projects.id"],
            ondelete="CASCADE",
            name="challenges_project_id_fkey",
        ),
        sa.PrimaryKeyConstraint("id", name="challenges_pkey"),
    )
    op.create_index("idx_challenges_project", "challenges", ["project_id"])


def downgrade() -> None:
    op.drop_index("idx_challenges_project", table_name="challenges")
    op.drop_table("challenges")
    op.drop_index("idx_projects_name", table_name="projects")
    op.drop_index("idx_projects_user", table_name="projects")
    op.drop_table("projects")
