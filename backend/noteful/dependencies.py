"""
Noteful Backend — Service Dependencies
========================================

What:  FastAPI dependencies that build one service per request around the
       request's database session.
Why:   Services receive the store as a constructor argument instead of
       reaching for a global, so tests can hand them any session.
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from noteful.database import get_db_session
from noteful.services.folder_service import FolderService
from noteful.services.integrity import IntegrityCoordinator
from noteful.services.note_service import NoteService
from noteful.services.tag_service import TagService


def get_integrity_coordinator(
    db: AsyncSession = Depends(get_db_session),
) -> IntegrityCoordinator:
    return IntegrityCoordinator(db)


def get_folder_service(
    db: AsyncSession = Depends(get_db_session),
    integrity: IntegrityCoordinator = Depends(get_integrity_coordinator),
) -> FolderService:
    return FolderService(db, integrity)


def get_tag_service(
    db: AsyncSession = Depends(get_db_session),
    integrity: IntegrityCoordinator = Depends(get_integrity_coordinator),
) -> TagService:
    return TagService(db, integrity)


def get_note_service(db: AsyncSession = Depends(get_db_session)) -> NoteService:
    return NoteService(db)
