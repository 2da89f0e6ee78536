"""
Noteful Backend — Note Service
================================

What:  Query composition and validation for notes.
Why:   Notes are the only entity with filters and references; all the rules
       about which references are acceptable live here.
Who:   Called by the /notes route handlers.

Listing (GET /notes):
    Filters combine with AND; each is optional:
        searchTerm → title ILIKE %term% OR content ILIKE %term%
        folderId   → folder_id = :ref
        tagId      → id IN (SELECT note_id FROM note_tags WHERE tag_id = :ref)
    Order: updated_at DESC, then id DESC so equal timestamps stay stable.

References:
    folderId and tags must be well-formed, but the folder or tag they name is
    NOT required to exist. Validation happens before any query is issued.
"""

import logging
from typing import List, Optional

from sqlalchemy import delete, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from noteful.models.mixins import utcnow
from noteful.models.note import Note, NoteTag
from noteful.models.tag import Tag
from noteful.schemas.note import (
    NoteCreate,
    NoteDetailResponse,
    NoteFilter,
    NotePatch,
    NoteResponse,
)
from noteful.schemas.tag import TagResponse
from noteful.validation import (
    optional_reference,
    require_field,
    to_reference,
    to_references,
)

logger = logging.getLogger(__name__)

LIKE_ESCAPE = "\\"


def escape_like(term: str) -> str:
    """Makes %, _ and the escape character match literally in a LIKE pattern."""
    return (
        term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


class NoteService:
    """
    Business logic layer for note operations.

    Responsibilities:
        - list(): filtered listing, most recently updated first
        - get_by_id(): single note with its tags populated
        - create() / update() / remove()

    Missing notes are reported as None; the route turns that into a 404.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list(self, filters: Optional[NoteFilter] = None) -> List[NoteResponse]:
        """
        Notes matching every supplied filter, most recently updated first.

        Raises:
            InvalidReferenceError: folderId or tagId is malformed
        """
        filters = filters or NoteFilter()
        folder_ref = to_reference(filters.folder_id, "folderId") if filters.folder_id else None
        tag_ref = to_reference(filters.tag_id, "tagId") if filters.tag_id else None

        query = select(Note)

        if filters.search_term:
            pattern = f"%{escape_like(filters.search_term)}%"
            query = query.where(
                or_(
                    Note.title.ilike(pattern, escape=LIKE_ESCAPE),
                    Note.content.ilike(pattern, escape=LIKE_ESCAPE),
                )
            )

        if folder_ref:
            query = query.where(Note.folder_id == folder_ref)

        if tag_ref:
            query = query.where(
                Note.id.in_(select(NoteTag.note_id).where(NoteTag.tag_id == tag_ref))
            )

        query = query.order_by(Note.updated_at.desc(), Note.id.desc())

        # populate_existing: bulk cascades in this session bypass the identity map
        result = await self.db.execute(query.execution_options(populate_existing=True))
        return [NoteResponse.model_validate(note) for note in result.scalars().all()]

    async def get_by_id(self, note_id: str) -> Optional[NoteDetailResponse]:
        """
        The note with each tag reference expanded to the full tag.

        Tag references whose tag no longer exists are left out of the
        populated list.

        Raises:
            InvalidReferenceError: note_id is malformed
        """
        ref = to_reference(note_id)
        note = await self._get(ref)
        if note is None:
            return None

        tags: List[Tag] = []
        if note.tags:
            result = await self.db.execute(select(Tag).where(Tag.id.in_(note.tags)))
            by_id = {tag.id: tag for tag in result.scalars().all()}
            tags = [by_id[tag_id] for tag_id in note.tags if tag_id in by_id]

        return NoteDetailResponse(
            id=note.id,
            title=note.title,
            content=note.content,
            folder_id=note.folder_id,
            tags=[TagResponse.model_validate(tag) for tag in tags],
            created_at=note.created_at,
            updated_at=note.updated_at,
        )

    async def create(self, payload: NoteCreate) -> NoteResponse:
        """
        Raises:
            MissingFieldError: title absent or blank
            FieldTooLongError: title over 255 characters
            InvalidReferenceError: folderId or a tag is malformed
        """
        title = require_field(payload, "title")
        folder_ref = optional_reference(payload.folder_id, "folderId")
        tag_refs = to_references(payload.tags or [], "tags")

        now = utcnow()
        note = Note(
            title=title,
            content=payload.content,
            folder_id=folder_ref,
            created_at=now,
            updated_at=now,
        )
        note.set_tags(tag_refs)
        self.db.add(note)
        await self.db.flush()
        logger.info("Created note %s (folder=%s, %d tag(s))", note.id, folder_ref, len(tag_refs))
        return NoteResponse.model_validate(note)

    async def update(self, note_id: str, patch: NotePatch) -> Optional[NoteResponse]:
        """
        Applies only the fields set on the patch. None if the note does not exist.

        Raises:
            InvalidReferenceError: note_id, folderId or a tag is malformed
            MissingFieldError: title supplied but blank
            FieldTooLongError: title over 255 characters
        """
        ref = to_reference(note_id)

        # Validate everything before loading anything
        changes = {}
        if patch.is_set("title"):
            changes["title"] = require_field(patch, "title")
        if patch.is_set("content"):
            changes["content"] = patch.content
        if patch.is_set("folder_id"):
            changes["folder_id"] = optional_reference(patch.folder_id, "folderId")
        tag_refs = to_references(patch.tags, "tags") if patch.is_set("tags") else None

        note = await self._get(ref)
        if note is None:
            return None

        for field, value in changes.items():
            setattr(note, field, value)
        if tag_refs is not None:
            note.set_tags(tag_refs)
        note.touch()

        await self.db.flush()
        logger.info("Updated note %s: %s", ref, sorted(changes) + (["tags"] if tag_refs is not None else []))
        return NoteResponse.model_validate(note)

    async def remove(self, note_id: str) -> None:
        """
        Deletes a note and its tag links. A missing note is not an error.

        Raises:
            InvalidReferenceError: note_id is malformed
        """
        ref = to_reference(note_id)
        await self.db.execute(
            delete(NoteTag)
            .where(NoteTag.note_id == ref)
            .execution_options(synchronize_session=False)
        )
        result = await self.db.execute(
            delete(Note).where(Note.id == ref).execution_options(synchronize_session=False)
        )
        logger.info("Deleted note %s (%d row)", ref, result.rowcount)

    async def _get(self, ref: str) -> Optional[Note]:
        result = await self.db.execute(
            select(Note).where(Note.id == ref).execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()
