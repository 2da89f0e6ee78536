"""
Noteful Backend — Named Entity Service
========================================

What:  CRUD logic shared by folders and tags: a document with a unique,
       case-sensitive name.
How:   Subclasses set `model`, `response_model` and `resource`, and decide
       what remove() cascades into.

Uniqueness:
    create/update first look for another row with the same name, which
    covers the ordinary case without touching the unique index. Two
    concurrent requests can both pass that check; the loser's INSERT/UPDATE
    then fails on the unique index and the IntegrityError is translated to
    the same ConflictError.
"""

import logging
from abc import ABC, abstractmethod
from typing import ClassVar, List, Optional, Type

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from noteful.exceptions import ConflictError
from noteful.models.mixins import utcnow
from noteful.schemas.folder import NamedEntityResponse
from noteful.services.integrity import IntegrityCoordinator
from noteful.validation import require_field, to_reference

logger = logging.getLogger(__name__)


class NamedEntityService(ABC):
    """
    Business logic for an entity identified by a unique name.

    The session is injected at construction; one service instance serves
    one request.
    """

    model: ClassVar[Type] = None
    response_model: ClassVar[Type[NamedEntityResponse]] = NamedEntityResponse
    resource: ClassVar[str] = "entity"

    def __init__(
        self,
        db: AsyncSession,
        integrity: Optional[IntegrityCoordinator] = None,
    ):
        self.db = db
        self.integrity = integrity or IntegrityCoordinator(db)

    async def list(self) -> List[NamedEntityResponse]:
        """
        All entities sorted by name, byte-wise.

        Capital letters sort before lowercase ("Zebra" < "apple"); the name
        column's collation makes the store sort that way.
        """
        result = await self.db.execute(
            select(self.model)
            .order_by(self.model.name)
            .execution_options(populate_existing=True)
        )
        return [self.response_model.model_validate(row) for row in result.scalars().all()]

    async def get_by_id(self, entity_id: str) -> Optional[NamedEntityResponse]:
        """
        Returns the entity, or None if no row matches.

        Raises:
            InvalidReferenceError: entity_id is malformed (no store access)
        """
        ref = to_reference(entity_id)
        row = await self._get(ref)
        return self.response_model.model_validate(row) if row else None

    async def create(self, name: Optional[str]) -> NamedEntityResponse:
        """
        Raises:
            MissingFieldError: name absent or blank
            FieldTooLongError: name over 255 characters
            ConflictError: name already taken
        """
        name = require_field({"name": name}, "name")
        await self._ensure_name_free(name)

        now = utcnow()
        row = self.model(name=name, created_at=now, updated_at=now)
        self.db.add(row)
        await self._flush(name)
        logger.info("Created %s %s (%s)", self.resource, row.id, name)
        return self.response_model.model_validate(row)

    async def update(self, entity_id: str, name: Optional[str]) -> Optional[NamedEntityResponse]:
        """
        Renames an entity. None if it does not exist.

        Raises:
            InvalidReferenceError, MissingFieldError, FieldTooLongError, ConflictError
        """
        ref = to_reference(entity_id)
        name = require_field({"name": name}, "name")

        row = await self._get(ref)
        if row is None:
            return None

        await self._ensure_name_free(name, exclude_id=ref)
        row.name = name
        row.updated_at = utcnow()
        await self._flush(name)
        logger.info("Renamed %s %s to %s", self.resource, ref, name)
        return self.response_model.model_validate(row)

    @abstractmethod
    async def remove(self, entity_id: str) -> None:
        """Deletes the entity and whatever its deletion cascades into."""

    # ── Helpers ───────────────────────────────────────────────────────────

    async def _get(self, ref: str):
        result = await self.db.execute(
            select(self.model)
            .where(self.model.id == ref)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def _ensure_name_free(self, name: str, exclude_id: Optional[str] = None) -> None:
        query = select(self.model.id).where(self.model.name == name)
        if exclude_id is not None:
            query = query.where(self.model.id != exclude_id)
        result = await self.db.execute(query.limit(1))
        if result.scalar_one_or_none() is not None:
            raise ConflictError(self.resource, name)

    async def _flush(self, name: str) -> None:
        try:
            await self.db.flush()
        except IntegrityError:
            # Session is unusable after a failed flush; the request is over anyway
            await self.db.rollback()
            raise ConflictError(self.resource, name)
