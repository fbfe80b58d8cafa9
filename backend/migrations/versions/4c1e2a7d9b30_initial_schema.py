"""Initial schema

Revision ID: 4c1e2a7d9b30
Revises:
Create Date: 2026-10-19

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "4c1e2a7d9b30"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps():
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade() -> None:
    """Create users, sessions, messages, profiles and history summaries."""
    op.create_table(
        "user",
        sa.Column("id", sa.UUID(as_uuid=True), primary_key=True),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("name", sa.String(100), nullable=True),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_user_email", "user", ["email"], unique=True)

    op.create_table(
        "chatsession",
        sa.Column("id", sa.UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "user_id", sa.UUID(as_uuid=True), sa.ForeignKey("user.id"), nullable=False
        ),
        sa.Column("start_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_date", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_chatsession_user_id", "chatsession", ["user_id"])

    op.create_table(
        "message",
        sa.Column("id", sa.UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "chat_session_id",
            sa.UUID(as_uuid=True),
            sa.ForeignKey("chatsession.id"),
            nullable=False,
        ),
        sa.Column("author", sa.String(10), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("emotion_type", sa.String(20), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_message_chat_session_id", "message", ["chat_session_id"])
    op.create_index("ix_message_created_at", "message", ["created_at"])

    op.create_table(
        "userprofile",
        sa.Column("id", sa.UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "user_id",
            sa.UUID(as_uuid=True),
            sa.ForeignKey("user.id"),
            unique=True,
            nullable=False,
        ),
        sa.Column("age", sa.Integer(), nullable=True),
        sa.Column("occupation", sa.String(255), nullable=True),
        sa.Column("sleep_notes", sa.Text(), nullable=True),
        sa.Column("stressors", sa.Text(), nullable=True),
        sa.Column("goals", sa.Text(), nullable=True),
        sa.Column("boundaries", sa.Text(), nullable=True),
        sa.Column("data", sa.JSON(), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        "userhistory",
        sa.Column("id", sa.UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "user_id",
            sa.UUID(as_uuid=True),
            sa.ForeignKey("user.id"),
            unique=True,
            nullable=False,
        ),
        sa.Column("summary", sa.Text(), nullable=True),
        *_timestamps(),
    )


def downgrade() -> None:
    """Drop every table created by this revision."""
    op.drop_table("userhistory")
    op.drop_table("userprofile")
    op.drop_index("ix_message_created_at", table_name="message")
    op.drop_index("ix_message_chat_session_id", table_name="message")
    op.drop_table("message")
    op.drop_index("ix_chatsession_user_id", table_name="chatsession")
    op.drop_table("chatsession")
    op.drop_index("ix_user_email", table_name="user")
    op.drop_table("user")
