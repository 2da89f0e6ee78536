"""
Noteful Backend — Notes Route Handlers
========================================

What:  CRUD endpoints under {API_PREFIX}/notes.
How:   Extracts query parameters and bodies, delegates to NoteService.

    GET    /notes?searchTerm=&folderId=&tagId=   200 list, newest update first
    GET    /notes/{id}                           200 with tags populated | 400 | 404
    POST   /notes                                201 + Location | 400
    PUT    /notes/{id}                           200 (partial update) | 400 | 404
    DELETE /notes/{id}                           204 (idempotent) | 400
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request, Response

from noteful.dependencies import get_note_service
from noteful.exceptions import ValidationError
from noteful.routes.responses import BAD_REQUEST, NOT_FOUND, found_or_404, set_location
from noteful.schemas.note import (
    NoteCreate,
    NoteDetailResponse,
    NoteFilter,
    NoteResponse,
    NoteUpdate,
)
from noteful.services.note_service import NoteService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/notes", tags=["Notes"])


@router.get(
    "",
    response_model=List[NoteResponse],
    responses=BAD_REQUEST,
    summary="List notes",
    description=(
        "Returns every note matching all supplied filters, most recently updated first. "
        "searchTerm matches title or content, case-insensitively."
    ),
)
async def list_notes(
    search_term: Optional[str] = Query(
        default=None,
        alias="searchTerm",
        description="Case-insensitive substring of the title or content",
    ),
    folder_id: Optional[str] = Query(
        default=None,
        alias="folderId",
        description="Only notes filed in this folder",
    ),
    tag_id: Optional[str] = Query(
        default=None,
        alias="tagId",
        description="Only notes labelled with this tag",
    ),
    service: NoteService = Depends(get_note_service),
) -> List[NoteResponse]:
    filters = NoteFilter(search_term=search_term, folder_id=folder_id, tag_id=tag_id)
    return await service.list(filters)


@router.get(
    "/{note_id}",
    response_model=NoteDetailResponse,
    responses={**BAD_REQUEST, **NOT_FOUND},
    summary="Get a note with its tags",
)
async def get_note(
    note_id: str,
    service: NoteService = Depends(get_note_service),
) -> NoteDetailResponse:
    return found_or_404(await service.get_by_id(note_id))


@router.post(
    "",
    status_code=201,
    response_model=NoteResponse,
    responses=BAD_REQUEST,
    summary="Create a note",
    description=(
        "title is required. folderId and tags must be well-formed ids but the "
        "folder and tags they name do not have to exist."
    ),
)
async def create_note(
    payload: NoteCreate,
    request: Request,
    response: Response,
    service: NoteService = Depends(get_note_service),
) -> NoteResponse:
    note = await service.create(payload)
    set_location(request, response, note.id)
    return note


@router.put(
    "/{note_id}",
    response_model=NoteResponse,
    responses={**BAD_REQUEST, **NOT_FOUND},
    summary="Update a note",
    description=(
        "Only fields present in the body change. Send folderId as an empty string "
        "to remove the note from its folder."
    ),
)
async def update_note(
    note_id: str,
    payload: NoteUpdate,
    service: NoteService = Depends(get_note_service),
) -> NoteResponse:
    if payload.id is not None and payload.id != note_id:
        raise ValidationError(
            message=(
                f"Request path id ({note_id}) and request body id "
                f"({payload.id}) must match"
            ),
            field="id",
        )
    return found_or_404(await service.update(note_id, payload.to_patch()))


@router.delete(
    "/{note_id}",
    status_code=204,
    response_class=Response,
    responses=BAD_REQUEST,
    summary="Delete a note",
)
async def delete_note(
    note_id: str,
    service: NoteService = Depends(get_note_service),
) -> Response:
    await service.remove(note_id)
    return Response(status_code=204)
