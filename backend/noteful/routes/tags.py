"""
Noteful Backend — Tag Route Handlers
======================================

What:  CRUD endpoints under {API_PREFIX}/tags, same contract as folders.
       DELETE also pulls the tag from every note that holds it.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Request, Response

from noteful.dependencies import get_tag_service
from noteful.routes.responses import BAD_REQUEST, NOT_FOUND, found_or_404, set_location
from noteful.schemas.tag import TagResponse, TagWrite
from noteful.services.tag_service import TagService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tags", tags=["Tags"])


@router.get("", response_model=List[TagResponse], summary="List tags sorted by name")
async def list_tags(
    service: TagService = Depends(get_tag_service),
) -> List[TagResponse]:
    return await service.list()


@router.get(
    "/{tag_id}",
    response_model=TagResponse,
    responses={**BAD_REQUEST, **NOT_FOUND},
    summary="Get a tag by id",
)
async def get_tag(
    tag_id: str,
    service: TagService = Depends(get_tag_service),
) -> TagResponse:
    return found_or_404(await service.get_by_id(tag_id))


@router.post(
    "",
    status_code=201,
    response_model=TagResponse,
    responses=BAD_REQUEST,
    summary="Create a tag",
)
async def create_tag(
    payload: TagWrite,
    request: Request,
    response: Response,
    service: TagService = Depends(get_tag_service),
) -> TagResponse:
    tag = await service.create(payload.name)
    set_location(request, response, tag.id)
    return tag


@router.put(
    "/{tag_id}",
    response_model=TagResponse,
    responses={**BAD_REQUEST, **NOT_FOUND},
    summary="Rename a tag",
)
async def update_tag(
    tag_id: str,
    payload: TagWrite,
    service: TagService = Depends(get_tag_service),
) -> TagResponse:
    return found_or_404(await service.update(tag_id, payload.name))


@router.delete(
    "/{tag_id}",
    status_code=204,
    response_class=Response,
    responses=BAD_REQUEST,
    summary="Delete a tag and pull it from notes",
    description=(
        "The tag row is removed and committed first, then the tag is pulled from "
        "notes. If the second step fails the request returns 500; repeating the "
        "DELETE finishes the cleanup."
    ),
)
async def delete_tag(
    tag_id: str,
    service: TagService = Depends(get_tag_service),
) -> Response:
    await service.remove(tag_id)
    return Response(status_code=204)
