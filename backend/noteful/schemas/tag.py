"""Noteful Backend — Tag Schemas (same shape as folders)."""

from noteful.schemas.folder import NamedEntityResponse, NamedEntityWrite


class TagWrite(NamedEntityWrite):
    pass


class TagResponse(NamedEntityResponse):
    pass
