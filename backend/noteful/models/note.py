"""
Noteful Backend — Note SQLAlchemy Models
==========================================

What:  ORM models for the `notes` table and its `note_tags` tag set.
Why:   A note holds at most one folder reference and a set of tag references.
       The tag set lives in its own table so that "every note holding tag X"
       is an indexed lookup and pulling X from all of them is one DELETE.

Table Design Rationale:
    - folder_id has NO foreign key: the folder a note points to is not
      required to exist (dangling references are tolerated, and folder
      deletion may be configured not to cascade).
    - note_tags.tag_id has NO foreign key for the same reason.
    - note_tags.note_id DOES reference notes: a tag link never outlives its note.
    - (note_id, tag_id) primary key gives set semantics; `position` keeps the
      order the client sent so responses are stable.

Query Patterns:
    - List notes: ORDER BY updated_at DESC → idx_notes_updated_at
    - Filter by folder: WHERE folder_id = :ref → idx_notes_folder_id
    - Filter by tag / tag cascade: note_tags WHERE tag_id = :ref → idx_note_tags_tag_id
"""

from typing import List, Optional

from sqlalchemy import ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from noteful.database import Base
from noteful.models.mixins import REFERENCE_TYPE, ReferenceKeyMixin, TimestampMixin


class NoteTag(Base):
    """One element of a note's tag set."""

    __tablename__ = "note_tags"

    note_id: Mapped[str] = mapped_column(
        REFERENCE_TYPE,
        ForeignKey("notes.id", ondelete="CASCADE"),
        primary_key=True,
    )
    tag_id: Mapped[str] = mapped_column(REFERENCE_TYPE, primary_key=True)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    __table_args__ = (
        Index("idx_note_tags_tag_id", "tag_id"),
    )

    def __repr__(self) -> str:
        return f"<NoteTag(note_id={self.note_id}, tag_id={self.tag_id})>"


class Note(ReferenceKeyMixin, TimestampMixin, Base):
    """
    A note, optionally filed in a folder and labelled with tags.

    Lifecycle:
        Created, updated in place and deleted explicitly. Its folder_id may be
        cleared by the client or by the folder cascade; its tag set shrinks
        when a tag is deleted.
    """

    __tablename__ = "notes"

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    content: Mapped[Optional[str]] = mapped_column(Text, nullable=True, default=None)
    folder_id: Mapped[Optional[str]] = mapped_column(
        REFERENCE_TYPE,
        nullable=True,
        default=None,
        comment="Folder reference, not enforced by a foreign key",
    )

    # selectin: the async session cannot lazy-load on attribute access, so the
    # tag set is fetched together with the notes in a second IN query.
    tag_links: Mapped[List[NoteTag]] = relationship(
        NoteTag,
        lazy="selectin",
        order_by=NoteTag.position,
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (
        Index("idx_notes_updated_at", "updated_at"),
        Index("idx_notes_folder_id", "folder_id"),
    )

    @property
    def tags(self) -> List[str]:
        """Tag references in the order the client supplied them."""
        return [link.tag_id for link in self.tag_links]

    def set_tags(self, tag_ids: List[str]) -> None:
        """
        Replaces the tag set. Links for tags that stay are reused so the
        unit of work emits UPDATEs for them instead of DELETE + INSERT.
        """
        existing = {link.tag_id: link for link in self.tag_links}
        links = []
        for position, tag_id in enumerate(tag_ids):
            link = existing.get(tag_id) or NoteTag(tag_id=tag_id)
            link.position = position
            links.append(link)
        self.tag_links = links

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, title='{self.title}', folder_id={self.folder_id})>"
