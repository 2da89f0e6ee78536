"""
Noteful Backend — Folder Route Handlers
=========================================

What:  CRUD endpoints under {API_PREFIX}/folders.
How:   Thin handlers: unpack the request, call FolderService, shape the
       response. Validation and conflict handling happen in the service.

    GET    /folders          200 list sorted by name
    GET    /folders/{id}     200 | 400 invalid id | 404
    POST   /folders          201 + Location | 400 missing name / conflict
    PUT    /folders/{id}     200 | 400 | 404
    DELETE /folders/{id}     204 (idempotent) | 400 invalid id
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Request, Response

from noteful.dependencies import get_folder_service
from noteful.routes.responses import BAD_REQUEST, NOT_FOUND, found_or_404, set_location
from noteful.schemas.folder import FolderResponse, FolderWrite
from noteful.services.folder_service import FolderService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/folders", tags=["Folders"])


@router.get(
    "",
    response_model=List[FolderResponse],
    summary="List folders",
    description="All folders sorted by name. Upper-case names sort before lower-case ones.",
)
async def list_folders(
    service: FolderService = Depends(get_folder_service),
) -> List[FolderResponse]:
    return await service.list()


@router.get(
    "/{folder_id}",
    response_model=FolderResponse,
    responses={**BAD_REQUEST, **NOT_FOUND},
    summary="Get a folder by id",
)
async def get_folder(
    folder_id: str,
    service: FolderService = Depends(get_folder_service),
) -> FolderResponse:
    return found_or_404(await service.get_by_id(folder_id))


@router.post(
    "",
    status_code=201,
    response_model=FolderResponse,
    responses=BAD_REQUEST,
    summary="Create a folder",
)
async def create_folder(
    payload: FolderWrite,
    request: Request,
    response: Response,
    service: FolderService = Depends(get_folder_service),
) -> FolderResponse:
    folder = await service.create(payload.name)
    set_location(request, response, folder.id)
    return folder


@router.put(
    "/{folder_id}",
    response_model=FolderResponse,
    responses={**BAD_REQUEST, **NOT_FOUND},
    summary="Rename a folder",
)
async def update_folder(
    folder_id: str,
    payload: FolderWrite,
    service: FolderService = Depends(get_folder_service),
) -> FolderResponse:
    return found_or_404(await service.update(folder_id, payload.name))


@router.delete(
    "/{folder_id}",
    status_code=204,
    response_class=Response,
    responses=BAD_REQUEST,
    summary="Delete a folder",
    description=(
        "Deletes the folder and, unless CASCADE_FOLDER_DELETE is off, clears it "
        "from the notes filed in it. Deleting an unknown id also returns 204."
    ),
)
async def delete_folder(
    folder_id: str,
    service: FolderService = Depends(get_folder_service),
) -> Response:
    await service.remove(folder_id)
    return Response(status_code=204)
