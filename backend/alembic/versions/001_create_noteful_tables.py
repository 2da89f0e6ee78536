"""Create folders, tags, notes and note_tags tables

Revision ID: 001
Revises: None
Create Date: 2018-06-01 00:00:00.000000+00:00

What:  Initial schema. See noteful/models for the column rationale.
Note:  notes.folder_id and note_tags.tag_id intentionally have no foreign key;
       dangling folder and tag references are allowed.
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

# Byte-wise ordering of names on PostgreSQL; plain VARCHAR elsewhere
NAME_TYPE = sa.String(255).with_variant(sa.String(255, collation="C"), "postgresql")


def _timestamps():
    return [
        sa.Column("created_at", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column("updated_at", sa.TIMESTAMP(timezone=True), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        "folders",
        sa.Column("id", sa.String(24), nullable=False),
        sa.Column("name", NAME_TYPE, nullable=False, comment="Folder name, unique and case-sensitive"),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )

    op.create_table(
        "tags",
        sa.Column("id", sa.String(24), nullable=False),
        sa.Column("name", NAME_TYPE, nullable=False, comment="Tag name, unique and case-sensitive"),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )

    op.create_table(
        "notes",
        sa.Column("id", sa.String(24), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("content", sa.Text(), nullable=True),
        sa.Column(
            "folder_id",
            sa.String(24),
            nullable=True,
            comment="Folder reference, not enforced by a foreign key",
        ),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_notes_updated_at", "notes", ["updated_at"])
    op.create_index("idx_notes_folder_id", "notes", ["folder_id"])

    op.create_table(
        "note_tags",
        sa.Column("note_id", sa.String(24), nullable=False),
        sa.Column("tag_id", sa.String(24), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["note_id"], ["notes.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("note_id", "tag_id"),
    )
    op.create_index("idx_note_tags_tag_id", "note_tags", ["tag_id"])


def downgrade() -> None:
    """Drops all tables. Destructive: every note, folder and tag is lost."""
    op.drop_index("idx_note_tags_tag_id", table_name="note_tags")
    op.drop_table("note_tags")
    op.drop_index("idx_notes_folder_id", table_name="notes")
    op.drop_index("idx_notes_updated_at", table_name="notes")
    op.drop_table("notes")
    op.drop_table("tags")
    op.drop_table("folders")
