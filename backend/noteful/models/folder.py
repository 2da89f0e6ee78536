"""
Noteful Backend — Folder SQLAlchemy Model
===========================================

What:  ORM model for the `folders` table.
How:   Unique index on `name` is the store-side arbiter of name uniqueness;
       FolderService translates its violation into ConflictError.

Notes reference folders through notes.folder_id without a foreign key:
a note may point at a folder that no longer exists.
"""

from sqlalchemy.orm import Mapped, mapped_column

from noteful.database import Base
from noteful.models.mixins import NAME_TYPE, ReferenceKeyMixin, TimestampMixin


class Folder(ReferenceKeyMixin, TimestampMixin, Base):
    __tablename__ = "folders"

    name: Mapped[str] = mapped_column(
        NAME_TYPE,
        nullable=False,
        unique=True,
        comment="Folder name, unique and case-sensitive",
    )

    def __repr__(self) -> str:
        return f"<Folder(id={self.id}, name='{self.name}')>"
