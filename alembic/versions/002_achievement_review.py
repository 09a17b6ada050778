"""Achievement review columns and one credential per achievement.

Revision ID: 002_achievement_review
Revises: 001_initial
Create Date: 2026-10-19

Adds reviewed_by, reviewed_at and review_note to achievements, and a unique
constraint on credentials.achievement_id so an achievement mints at most once.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID


revision: str = "002_achievement_review"
down_revision: Union[str, None] = "001_initial"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.add_column(
        "achievements",
        sa.Column("reviewed_by", UUID(as_uuid=True), nullable=True),
    )
    op.add_column(
        "achievements",
        sa.Column("reviewed_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.add_column(
        "achievements",
        sa.Column("review_note", sa.String(500), nullable=True),
    )
    with op.batch_alter_table("credentials") as batch:
        batch.create_unique_constraint(
            "uq_credentials_achievement_id", ["achievement_id"],
        )


def downgrade() -> None:
    with op.batch_alter_table("credentials") as batch:
        batch.drop_constraint("uq_credentials_achievement_id", type_="unique")
    op.drop_column("achievements", "review_note")
    op.drop_column("achievements", "reviewed_at")
    op.drop_column("achievements", "reviewed_by")
