"""
Noteful Backend — Note Schemas
================================

What:  Request/response bodies for /notes plus the NotePatch update type.

Partial updates:
    PUT /notes/{id} applies only the fields present in the body. JSON can say
    three different things about a field, and the service must tell them apart:

        field missing            → leave as is            (UNSET)
        "folderId": ""           → clear the reference    (None)
        "folderId": "<ref>"      → set it                 ("<ref>")

    NoteUpdate.to_patch() turns the parsed body into a NotePatch where each
    field is exactly one of those, so NoteService never inspects which keys
    the client sent.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, List, Optional, Union

from pydantic import Field

from noteful.schemas.common import ApiModel
from noteful.schemas.tag import TagResponse


class _Unset:
    """Marker for a field the client did not send."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNSET"


UNSET: Any = _Unset()


@dataclass(frozen=True)
class NotePatch:
    """
    Fields to change on an existing note; UNSET means untouched.

    folder_id=None clears the folder. tags=[] empties the tag set.
    Values are raw client input; NoteService validates them.
    """
    title: Union[str, None, _Unset] = UNSET
    content: Union[str, None, _Unset] = UNSET
    folder_id: Union[str, None, _Unset] = UNSET
    tags: Union[List[str], _Unset] = UNSET

    def is_set(self, field: str) -> bool:
        return getattr(self, field) is not UNSET


@dataclass(frozen=True)
class NoteFilter:
    """Query parameters of GET /notes; every field optional, raw client input."""
    search_term: Optional[str] = None
    folder_id: Optional[str] = None
    tag_id: Optional[str] = None


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class NoteCreate(ApiModel):
    """
    Body of POST /notes.

    title is Optional here so that a missing title reaches require_field()
    and gets the "Missing `title` in request body" message.
    """
    title: Optional[str] = Field(default=None, description="Required, non-blank")
    content: Optional[str] = None
    folder_id: Optional[str] = Field(default=None, description="Folder reference; '' means none")
    tags: Optional[List[str]] = Field(default=None, description="Tag references")


class NoteUpdate(ApiModel):
    """Body of PUT /notes/{id}; any subset of the NoteCreate fields."""
    id: Optional[str] = Field(default=None, description="If sent, must equal the path id")
    title: Optional[str] = None
    content: Optional[str] = None
    folder_id: Optional[str] = None
    tags: Optional[List[str]] = None

    def to_patch(self) -> NotePatch:
        sent = self.model_fields_set
        values = {}
        if "title" in sent:
            values["title"] = self.title
        if "content" in sent:
            values["content"] = self.content
        if "folder_id" in sent:
            values["folder_id"] = self.folder_id or None
        if "tags" in sent:
            values["tags"] = list(self.tags or [])
        return NotePatch(**values)


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class NoteResponse(ApiModel):
    """Note with tag references as ids: list, create and update responses."""
    id: str
    title: str
    content: Optional[str] = None
    folder_id: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime


class NoteDetailResponse(NoteResponse):
    """Note with its tags populated: GET /notes/{id}."""
    tags: List[TagResponse] = Field(default_factory=list)
