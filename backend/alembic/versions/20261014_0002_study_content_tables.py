"""study text, passage and quiz question tables

Revision ID: 20261014_0002
Revises: 20261012_0001
Create Date: 2026-10-14 15:05:00
"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "20261014_0002"
down_revision = "20261012_0001"
branch_labels = None
depends_on = None


def _timestamps() -> list:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            server_onupdate=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    op.create_table(
        "study_texts",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("version", sa.String(length=64), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("font_left", sa.String(length=32), nullable=False),
        sa.Column("font_right", sa.String(length=32), nullable=False),
        sa.Column("active", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
        mysql_charset="utf8mb4",
    )
    op.create_index("ix_study_texts_version", "study_texts", ["version"], unique=True)

    op.create_table(
        "passages",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("study_text_id", sa.Integer(), sa.ForeignKey("study_texts.id"), nullable=False),
        sa.Column("order", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=True),
        sa.Column("font_left", sa.String(length=32), nullable=True),
        sa.Column("font_right", sa.String(length=32), nullable=True),
        *_timestamps(),
        mysql_charset="utf8mb4",
    )
    op.create_index("ix_passages_study_text_id", "passages", ["study_text_id"])

    op.create_table(
        "quiz_questions",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("study_text_id", sa.Integer(), sa.ForeignKey("study_texts.id"), nullable=False),
        sa.Column("passage_id", sa.Integer(), sa.ForeignKey("passages.id"), nullable=True),
        sa.Column("question_id", sa.String(length=64), nullable=False),
        sa.Column("prompt", sa.Text(), nullable=False),
        sa.Column("choices", sa.Text(), nullable=False),
        sa.Column("answer", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("order", sa.Integer(), nullable=False, server_default="0"),
        *_timestamps(),
        mysql_charset="utf8mb4",
    )
    op.create_index("ix_quiz_questions_study_text_id", "quiz_questions", ["study_text_id"])
    op.create_index("ix_quiz_questions_passage_id", "quiz_questions", ["passage_id"])


def downgrade() -> None:
    op.drop_table("quiz_questions")
    op.drop_table("passages")
    op.drop_table("study_texts")
