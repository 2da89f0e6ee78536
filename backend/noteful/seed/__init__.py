"""
Noteful Backend — Seed Data
=============================

What:  Loads the sample folders, tags and notes in data.json.
Who:   `python -m noteful.seed` for a fresh development database, and the
       test fixtures.

The JSON uses the API's field names (folderId, createdAt) and fixed ids so
tests can refer to known entities.
"""

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from noteful.models import Folder, Note, Tag
from noteful.models.mixins import utcnow

DATA_FILE = Path(__file__).with_name("data.json")


def load_seed_data(path: Path = DATA_FILE) -> Dict[str, Any]:
    with open(path, encoding="utf-8") as fh:
        return json.load(fh)


def _timestamps(item: Dict[str, Any]) -> Dict[str, datetime]:
    created = datetime.fromisoformat(item["createdAt"]) if "createdAt" in item else utcnow()
    updated = datetime.fromisoformat(item["updatedAt"]) if "updatedAt" in item else created
    return {"created_at": created, "updated_at": updated}


async def seed_database(db: AsyncSession, data: Optional[Dict[str, Any]] = None) -> Dict[str, int]:
    """
    Inserts the seed entities and flushes. The caller commits.

    Returns:
        Count of inserted rows per entity type
    """
    data = data if data is not None else load_seed_data()

    for item in data.get("folders", []):
        db.add(Folder(id=item["id"], name=item["name"], **_timestamps(item)))

    for item in data.get("tags", []):
        db.add(Tag(id=item["id"], name=item["name"], **_timestamps(item)))

    for item in data.get("notes", []):
        note = Note(
            id=item["id"],
            title=item["title"],
            content=item.get("content"),
            folder_id=item.get("folderId"),
            **_timestamps(item),
        )
        note.set_tags(item.get("tags", []))
        db.add(note)

    await db.flush()
    return {key: len(data.get(key, [])) for key in ("folders", "tags", "notes")}
