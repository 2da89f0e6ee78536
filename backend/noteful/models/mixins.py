"""
Noteful Backend — Shared Column Definitions
=============================================

What:  Columns every entity table carries: a reference primary key and the
       createdAt/updatedAt pair.
Why:   Folders, tags and notes expose the same identity and timestamp fields;
       declaring them once keeps the three tables consistent.
"""

from datetime import datetime, timezone

from sqlalchemy import String, TypeDecorator
from sqlalchemy.dialects.postgresql import TIMESTAMP
from sqlalchemy.orm import Mapped, mapped_column

from noteful.validation import new_reference

# Canonical reference is 24 lowercase hex characters
REFERENCE_TYPE = String(24)

# Unique names sort byte-wise ("Zebra" before "apple"). PostgreSQL needs the
# "C" collation for that; SQLite's default BINARY collation already does it.
NAME_TYPE = String(255).with_variant(String(255, collation="C"), "postgresql")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UTCDateTime(TypeDecorator):
    """
    TIMESTAMP WITH TIME ZONE that always round-trips as an aware UTC datetime.

    PostgreSQL returns aware values already. SQLite has no timezone storage
    and returns naive ones; the stored wall time is UTC, so UTC is attached
    on the way out. Values are normalized to UTC on the way in for the same
    reason.
    """

    impl = TIMESTAMP(timezone=True)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is not None and value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value

    def process_result_value(self, value, dialect):
        if value is not None and value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value


class ReferenceKeyMixin:
    # Assigned in Python so the Location header and response can be built
    # before the INSERT is flushed
    id: Mapped[str] = mapped_column(
        REFERENCE_TYPE,
        primary_key=True,
        default=new_reference,
    )


class TimestampMixin:
    # Services set both explicitly; the defaults cover rows inserted by
    # the seed script without timestamps.
    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        nullable=False,
        default=utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        nullable=False,
        default=utcnow,
    )

    def touch(self) -> None:
        """Marks the row as modified now."""
        self.updated_at = utcnow()
