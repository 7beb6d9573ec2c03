"""initial schema

Revision ID: 20261019_0001
Revises:
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa


revision = "20261019_0001"
down_revision = None
branch_labels = None
depends_on = None


def _profile_fk() -> sa.Column:
    return sa.Column(
        "profile_id",
        sa.Integer(),
        sa.ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
    )


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("auth_subject", sa.String(length=255), nullable=False),
        sa.Column("name", sa.String(length=255)),
        sa.Column("email", sa.String(length=255)),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.func.now()),
    )
    op.create_index("ix_users_id", "users", ["id"])
    op.create_index("ix_users_auth_subject", "users", ["auth_subject"], unique=True)

    op.create_table(
        "profiles",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "user_id",
            sa.Integer(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("profession", sa.String(length=255)),
        sa.Column("batch", sa.String(length=64)),
        sa.Column("about", sa.Text()),
        sa.Column("profile_image", sa.String(length=1024)),
        sa.Column("phone", sa.String(length=64)),
        sa.Column("email", sa.String(length=255)),
        sa.Column("linkedin", sa.String(length=1024)),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.func.now()),
    )
    # One profile per user
    op.create_index("ix_profiles_user_id", "profiles", ["user_id"], unique=True)

    op.create_table(
        "skills",
        sa.Column("id", sa.Integer(), primary_key=True),
        _profile_fk(),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("proficiency", sa.String(length=64)),
    )
    op.create_index("ix_skills_profile_id", "skills", ["profile_id"])

    op.create_table(
        "education",
        sa.Column("id", sa.Integer(), primary_key=True),
        _profile_fk(),
        sa.Column("institution", sa.String(length=255), nullable=False),
        sa.Column("degree", sa.String(length=255), nullable=False),
        sa.Column("field", sa.String(length=255)),
        sa.Column("start_date", sa.DateTime(), nullable=False),
        sa.Column("end_date", sa.DateTime()),
        sa.Column("description", sa.Text()),
    )
    op.create_index("ix_education_profile_id", "education", ["profile_id"])

    op.create_table(
        "experience",
        sa.Column("id", sa.Integer(), primary_key=True),
        _profile_fk(),
        sa.Column("company", sa.String(length=255), nullable=False),
        sa.Column("position", sa.String(length=255), nullable=False),
        sa.Column("location", sa.String(length=255)),
        sa.Column("start_date", sa.DateTime(), nullable=False),
        sa.Column("end_date", sa.DateTime()),
        sa.Column("description", sa.Text()),
    )
    op.create_index("ix_experience_profile_id", "experience", ["profile_id"])

    op.create_table(
        "projects",
        sa.Column("id", sa.Integer(), primary_key=True),
        _profile_fk(),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text()),
        sa.Column("github_link", sa.String(length=1024)),
        sa.Column("live_link", sa.String(length=1024)),
    )
    op.create_index("ix_projects_profile_id", "projects", ["profile_id"])

    op.create_table(
        "project_images",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "project_id",
            sa.Integer(),
            sa.ForeignKey("projects.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("url", sa.String(length=1024), nullable=False),
    )
    op.create_index("ix_project_images_project_id", "project_images", ["project_id"])


def downgrade() -> None:
    op.drop_table("project_images")
    op.drop_table("projects")
    op.drop_table("experience")
    op.drop_table("education")
    op.drop_table("skills")
    op.drop_table("profiles")
    op.drop_table("users")
