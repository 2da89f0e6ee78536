"""
Noteful Backend — Tag Service
===============================

What:  list/get/create/update/remove for tags.
How:   Same contract as folders. remove() runs the two-phase delete in
       IntegrityCoordinator.delete_tag(): the tag row first (committed),
       then the tag is pulled from every note that holds it.
"""

from noteful.models.tag import Tag
from noteful.schemas.tag import TagResponse
from noteful.services.named_entity_service import NamedEntityService
from noteful.validation import to_reference


class TagService(NamedEntityService):
    model = Tag
    response_model = TagResponse
    resource = "tag"

    async def remove(self, tag_id: str) -> None:
        """
        Deletes a tag and pulls it from notes. Idempotent: repeating the call
        for a deleted tag re-runs the pull, which repairs notes left behind by
        an earlier partial failure.

        Raises:
            InvalidReferenceError: tag_id is malformed
        """
        ref = to_reference(tag_id)
        await self.integrity.delete_tag(ref)
