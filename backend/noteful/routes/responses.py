"""
Noteful Backend — Route Response Helpers
==========================================

Services report a missing entity as None instead of raising; every route
hands its result to found_or_404() so all of them fall through to the same
404 body.
"""

from typing import Optional, TypeVar

from fastapi import Request, Response

from noteful.exceptions import NotFoundError
from noteful.schemas.common import ErrorResponse

T = TypeVar("T")

# OpenAPI `responses=` entries shared by the entity routers
BAD_REQUEST = {400: {"description": "Invalid id, missing field or name conflict", "model": ErrorResponse}}
NOT_FOUND = {404: {"description": "No entity with this id", "model": ErrorResponse}}


def found_or_404(result: Optional[T]) -> T:
    if result is None:
        raise NotFoundError()
    return result


def set_location(request: Request, response: Response, entity_id: str) -> None:
    """Location header for a 201: the collection path the request was sent to, plus the id."""
    response.headers["Location"] = f"{request.url.path.rstrip('/')}/{entity_id}"
