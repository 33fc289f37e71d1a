"""create users, bootcamps, courses and reviews

Revision ID: 0001
Revises:
Create Date: 2026-10-18 09:00:00
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

revision: str = "0001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.String(24), nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("role", sa.String(20), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_users"),
        sa.UniqueConstraint("email", name="uq_users_email"),
    )

    op.create_table(
        "bootcamps",
        sa.Column("id", sa.String(24), nullable=False),
        sa.Column("name", sa.String(50), nullable=False),
        sa.Column("slug", sa.String(60), nullable=False),
        sa.Column("description", sa.String(500), nullable=False),
        sa.Column("website", sa.String(255), nullable=True),
        sa.Column("phone", sa.String(20), nullable=True),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("address", sa.String(255), nullable=False),
        sa.Column("longitude", sa.Float(), nullable=True),
        sa.Column("latitude", sa.Float(), nullable=True),
        sa.Column("formatted_address", sa.String(255), nullable=True),
        sa.Column("street", sa.String(255), nullable=True),
        sa.Column("city", sa.String(100), nullable=True),
        sa.Column("state", sa.String(100), nullable=True),
        sa.Column("zipcode", sa.String(20), nullable=True),
        sa.Column("country", sa.String(100), nullable=True),
        sa.Column("careers", sa.String(200), nullable=False),
        sa.Column("average_rating", sa.Float(), nullable=True),
        sa.Column("average_cost", sa.Integer(), nullable=True),
        sa.Column("photo", sa.String(255), nullable=False),
        sa.Column("housing", sa.Boolean(), nullable=False),
        sa.Column("job_assistance", sa.Boolean(), nullable=False),
        sa.Column("job_guarantee", sa.Boolean(), nullable=False),
        sa.Column("accept_gi", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("user_id", sa.String(24), nullable=True),
        sa.CheckConstraint(
            "average_rating IS NULL OR (average_rating >= 1 AND average_rating <= 10)",
            name="ck_bootcamps_average_rating_range",
        ),
        sa.ForeignKeyConstraint(
            ["user_id"],
            ["users.id"],
            name="fk_bootcamps_user_id_users",
            ondelete="SET NULL",
        ),
        sa.PrimaryKeyConstraint("id", name="pk_bootcamps"),
        sa.UniqueConstraint("name", name="uq_bootcamps_name"),
    )
    op.create_index("ix_bootcamps_city", "bootcamps", ["city"])
    op.create_index("ix_bootcamps_user_id", "bootcamps", ["user_id"])
    op.create_index("ix_bootcamps_latitude_longitude", "bootcamps", ["latitude", "longitude"])

    op.create_table(
        "courses",
        sa.Column("id", sa.String(24), nullable=False),
        sa.Column("title", sa.String(100), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("weeks", sa.String(20), nullable=False),
        sa.Column("tuition", sa.Integer(), nullable=False),
        sa.Column("minimum_skill", sa.String(20), nullable=False),
        sa.Column("scholarship_available", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("bootcamp_id", sa.String(24), nullable=False),
        sa.Column("user_id", sa.String(24), nullable=True),
        sa.CheckConstraint("tuition >= 0", name="ck_courses_tuition_non_negative"),
        sa.CheckConstraint(
            "minimum_skill IN ('beginner', 'intermediate', 'advanced')",
            name="ck_courses_minimum_skill_level",
        ),
        sa.ForeignKeyConstraint(
            ["bootcamp_id"],
            ["bootcamps.id"],
            name="fk_courses_bootcamp_id_bootcamps",
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["user_id"],
            ["users.id"],
            name="fk_courses_user_id_users",
            ondelete="SET NULL",
        ),
        sa.PrimaryKeyConstraint("id", name="pk_courses"),
    )
    op.create_index("ix_courses_bootcamp_id", "courses", ["bootcamp_id"])
    op.create_index("ix_courses_user_id", "courses", ["user_id"])

    op.create_table(
        "reviews",
        sa.Column("id", sa.String(24), nullable=False),
        sa.Column("title", sa.String(100), nullable=False),
        sa.Column("text", sa.Text(), nullable=False),
        sa.Column("rating", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("bootcamp_id", sa.String(24), nullable=False),
        sa.Column("user_id", sa.String(24), nullable=False),
        sa.CheckConstraint("rating >= 1 AND rating <= 10", name="ck_reviews_rating_range"),
        sa.ForeignKeyConstraint(
            ["bootcamp_id"],
            ["bootcamps.id"],
            name="fk_reviews_bootcamp_id_bootcamps",
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["user_id"],
            ["users.id"],
            name="fk_reviews_user_id_users",
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name="pk_reviews"),
        sa.UniqueConstraint("bootcamp_id", "user_id", name="uq_review_bootcamp_user"),
    )
    op.create_index("ix_reviews_bootcamp_id", "reviews", ["bootcamp_id"])
    op.create_index("ix_reviews_user_id", "reviews", ["user_id"])


def downgrade() -> None:
    op.drop_table("reviews")
    op.drop_table("courses")
    op.drop_table("bootcamps")
    op.drop_table("users")
