"""participant, session and measurement tables

Revision ID: 20261012_0001
Revises: 
Create Date: 2026-10-12 09:30:00
"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "20261012_0001"
down_revision = None
branch_labels = None
depends_on = None


def _created_at() -> sa.Column:
    return sa.Column(
        "created_at",
        sa.DateTime(),
        server_default=sa.text("CURRENT_TIMESTAMP"),
        nullable=False,
    )


def upgrade() -> None:
    op.create_table(
        "participants",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("source", sa.String(length=64), nullable=False),
        _created_at(),
        sa.Column(
            "updated_at",
            sa.DateTime(),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            server_onupdate=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        mysql_charset="utf8mb4",
    )

    op.create_table(
        "study_sessions",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("participant_id", sa.Integer(), nullable=True),
        sa.Column("session_id", sa.String(length=64), nullable=True),
        sa.Column("calibration_points", sa.Integer(), nullable=True),
        sa.Column("font_left", sa.String(length=32), nullable=True),
        sa.Column("font_right", sa.String(length=32), nullable=True),
        sa.Column("time_left_ms", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("time_right_ms", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("time_a_ms", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("time_b_ms", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("font_preference", sa.String(length=32), nullable=True),
        sa.Column("preferred_font_type", sa.String(length=32), nullable=True),
        sa.Column("quiz_responses_json", sa.Text(), nullable=True),
        sa.Column("user_agent", sa.String(length=512), nullable=True),
        sa.Column("screen_width", sa.Integer(), nullable=True),
        sa.Column("screen_height", sa.Integer(), nullable=True),
        _created_at(),
        mysql_charset="utf8mb4",
    )
    op.create_index("ix_study_sessions_participant_id", "study_sessions", ["participant_id"])
    op.create_index("ix_study_sessions_session_id", "study_sessions", ["session_id"])
    op.create_index("ix_study_sessions_preferred_font_type", "study_sessions", ["preferred_font_type"])

    op.create_table(
        "calibration_data",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("session_id", sa.Integer(), nullable=True),
        sa.Column("point_index", sa.Integer(), nullable=True),
        sa.Column("click_number", sa.Integer(), nullable=True),
        sa.Column("x", sa.Float(), nullable=True),
        sa.Column("y", sa.Float(), nullable=True),
        sa.Column("timestamp", sa.DateTime(), nullable=False),
        _created_at(),
        mysql_charset="utf8mb4",
    )
    op.create_index("ix_calibration_data_session_id", "calibration_data", ["session_id"])

    op.create_table(
        "accuracy_measurements",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("session_id", sa.Integer(), nullable=True),
        sa.Column("accuracy", sa.Float(), nullable=False),
        sa.Column("duration", sa.Integer(), nullable=True),
        sa.Column("passed", sa.Boolean(), nullable=False),
        sa.Column("timestamp", sa.DateTime(), nullable=False),
        _created_at(),
        mysql_charset="utf8mb4",
    )
    op.create_index("ix_accuracy_measurements_session_id", "accuracy_measurements", ["session_id"])

    op.create_table(
        "quiz_responses",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("session_id", sa.Integer(), nullable=True),
        sa.Column("question_id", sa.String(length=64), nullable=False),
        sa.Column("answer_index", sa.Integer(), nullable=True),
        sa.Column("is_correct", sa.Boolean(), nullable=False),
        sa.Column("response_time", sa.Integer(), nullable=True),
        sa.Column("timestamp", sa.DateTime(), nullable=False),
        _created_at(),
        mysql_charset="utf8mb4",
    )
    op.create_index("ix_quiz_responses_session_id", "quiz_responses", ["session_id"])
    op.create_index("ix_quiz_responses_question_id", "quiz_responses", ["question_id"])

    op.create_table(
        "gaze_points",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("session_id", sa.Integer(), nullable=True),
        sa.Column("x", sa.Float(), nullable=True),
        sa.Column("y", sa.Float(), nullable=True),
        sa.Column("phase", sa.String(length=32), nullable=True),
        sa.Column("panel", sa.String(length=32), nullable=True),
        sa.Column("timestamp", sa.DateTime(), nullable=False),
        _created_at(),
        mysql_charset="utf8mb4",
    )
    op.create_index("ix_gaze_points_session_id", "gaze_points", ["session_id"])

    op.create_table(
        "reading_events",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("session_id", sa.Integer(), nullable=True),
        sa.Column("event_type", sa.String(length=64), nullable=True),
        sa.Column("panel", sa.String(length=32), nullable=True),
        sa.Column("duration", sa.Integer(), nullable=True),
        sa.Column("timestamp", sa.DateTime(), nullable=False),
        _created_at(),
        mysql_charset="utf8mb4",
    )
    op.create_index("ix_reading_events_session_id", "reading_events", ["session_id"])


def downgrade() -> None:
    op.drop_table("reading_events")
    op.drop_table("gaze_points")
    op.drop_table("quiz_responses")
    op.drop_table("accuracy_measurements")
    op.drop_table("calibration_data")
    op.drop_table("study_sessions")
    op.drop_table("participants")
