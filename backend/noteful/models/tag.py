"""
Noteful Backend — Tag SQLAlchemy Model
========================================

What:  ORM model for the `tags` table.

Query Patterns:
    - List tags: SELECT ... ORDER BY name → served by the unique index
    - Populate a note: SELECT ... WHERE id IN (:tag_ids)
"""

from sqlalchemy.orm import Mapped, mapped_column

from noteful.database import Base
from noteful.models.mixins import NAME_TYPE, ReferenceKeyMixin, TimestampMixin


class Tag(ReferenceKeyMixin, TimestampMixin, Base):
    __tablename__ = "tags"

    name: Mapped[str] = mapped_column(
        NAME_TYPE,
        nullable=False,
        unique=True,
        comment="Tag name, unique and case-sensitive",
    )

    def __repr__(self) -> str:
        return f"<Tag(id={self.id}, name='{self.name}')>"
