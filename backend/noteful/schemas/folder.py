"""
Noteful Backend — Folder and Tag Schemas
==========================================

Folders and tags share one shape: a unique name plus identity and timestamps.
`name` is Optional in the request models on purpose: a missing name must
produce the MissingFieldError message, not a generic schema error.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from noteful.schemas.common import ApiModel


class NamedEntityWrite(ApiModel):
    """Body of POST and PUT for /folders and /tags."""
    name: Optional[str] = Field(default=None, description="Unique, case-sensitive name")


class NamedEntityResponse(ApiModel):
    id: str = Field(description="Entity reference (24 hex characters)")
    name: str
    created_at: datetime
    updated_at: datetime


class FolderWrite(NamedEntityWrite):
    pass


class FolderResponse(NamedEntityResponse):
    pass
