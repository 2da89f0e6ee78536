"""
Noteful Backend — Folder Service
==================================

What:  list/get/create/update/remove for folders.
How:   NamedEntityService does the work; remove() hands off to the
       IntegrityCoordinator, which clears the folder from its notes unless
       CASCADE_FOLDER_DELETE is off.
"""

from noteful.models.folder import Folder
from noteful.schemas.folder import FolderResponse
from noteful.services.named_entity_service import NamedEntityService
from noteful.validation import to_reference


class FolderService(NamedEntityService):
    model = Folder
    response_model = FolderResponse
    resource = "folder"

    async def remove(self, folder_id: str) -> None:
        """
        Deletes a folder. Deleting a folder that does not exist is not an error.

        Raises:
            InvalidReferenceError: folder_id is malformed
        """
        ref = to_reference(folder_id)
        await self.integrity.delete_folder(ref)
