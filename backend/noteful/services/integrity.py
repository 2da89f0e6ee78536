"""
Noteful Backend — Integrity Coordinator
=========================================

What:  Keeps notes consistent with the folders and tags they reference when
       one of those is deleted.
Why:   Notes hold folder and tag references without foreign keys, so the
       store will not clean them up on its own.
Who:   Called by TagService.remove() and FolderService.remove().

Tag deletion is a two-phase operation:

    Phase 1: DELETE the tag row, then COMMIT.
    Phase 2: pull the tag reference out of every note that holds it.

    The phases are not atomic with each other. If phase 2 fails, the tag is
    gone while some notes still list it; the error is logged with the tag id
    and propagates as a 500. Phase 2 is idempotent ("pull if present") and
    TagService.remove() always runs it, even for an already-deleted tag, so
    retrying the DELETE request repairs the notes.

Folder deletion clears folder_id on the notes in that folder. Both statements
run in the request's single transaction.

Either cascade can be switched off (CASCADE_TAG_DELETE / CASCADE_FOLDER_DELETE);
the references are then left dangling, which the API already tolerates.
"""

import logging
from typing import Optional

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from noteful.config import settings
from noteful.models.folder import Folder
from noteful.models.mixins import utcnow
from noteful.models.note import Note, NoteTag
from noteful.models.tag import Tag

logger = logging.getLogger(__name__)


class IntegrityCoordinator:
    """
    Cascades folder and tag deletions into the notes that reference them.

    Args:
        db:               Session of the current request
        cascade_tags:     Pull deleted tags from notes (default: settings)
        cascade_folders:  Clear deleted folders from notes (default: settings)
    """

    def __init__(
        self,
        db: AsyncSession,
        cascade_tags: Optional[bool] = None,
        cascade_folders: Optional[bool] = None,
    ):
        self.db = db
        self.cascade_tags = settings.cascade_tag_delete if cascade_tags is None else cascade_tags
        self.cascade_folders = (
            settings.cascade_folder_delete if cascade_folders is None else cascade_folders
        )

    # ── Tags ──────────────────────────────────────────────────────────────

    async def delete_tag(self, tag_id: str) -> None:
        """
        Deletes a tag and pulls it from every note (two phases, see module doc).

        Args:
            tag_id: Canonical tag reference (already validated)

        Raises:
            Any store error. A phase 2 failure leaves the tag deleted.
        """
        # ── Phase 1: remove the tag document ──────────────────────────────
        result = await self.db.execute(delete(Tag).where(Tag.id == tag_id))
        await self.db.commit()
        logger.info("Tag %s deleted (%d row)", tag_id, result.rowcount)

        if not self.cascade_tags:
            logger.info("Tag cascade disabled: notes keep references to %s", tag_id)
            return

        # ── Phase 2: pull the reference from notes ────────────────────────
        try:
            pulled = await self.unlink_tag(tag_id)
        except Exception:
            logger.error(
                "Tag %s was deleted but could not be pulled from notes; "
                "retry the delete to repair the references",
                tag_id,
                exc_info=True,
            )
            raise
        if pulled:
            logger.info("Pulled tag %s from %d note(s)", tag_id, pulled)

    async def unlink_tag(self, tag_id: str) -> int:
        """
        Removes tag_id from every note's tag set and bumps those notes' updatedAt.

        Returns:
            Number of notes that held the tag. 0 on a repeat run.
        """
        holders = select(NoteTag.note_id).where(NoteTag.tag_id == tag_id)
        await self.db.execute(
            update(Note)
            .where(Note.id.in_(holders))
            .values(updated_at=utcnow())
            .execution_options(synchronize_session=False)
        )
        result = await self.db.execute(
            delete(NoteTag)
            .where(NoteTag.tag_id == tag_id)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    # ── Folders ───────────────────────────────────────────────────────────

    async def delete_folder(self, folder_id: str) -> None:
        """Deletes a folder and, if enabled, clears it from its notes."""
        result = await self.db.execute(delete(Folder).where(Folder.id == folder_id))
        logger.info("Folder %s deleted (%d row)", folder_id, result.rowcount)

        if not self.cascade_folders:
            logger.info("Folder cascade disabled: notes keep references to %s", folder_id)
            return

        cleared = await self.unlink_folder(folder_id)
        if cleared:
            logger.info("Cleared folder %s from %d note(s)", folder_id, cleared)

    async def unlink_folder(self, folder_id: str) -> int:
        """Sets folder_id to NULL on every note in the folder. Returns the count."""
        result = await self.db.execute(
            update(Note)
            .where(Note.folder_id == folder_id)
            .values(folder_id=None, updated_at=utcnow())
            .execution_options(synchronize_session=False)
        )
        return result.rowcount
