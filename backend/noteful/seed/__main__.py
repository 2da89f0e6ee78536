"""
Reset the configured database to the seed data.

    python -m noteful.seed

Drops every table, recreates the schema and inserts data.json.
DESTRUCTIVE: all existing data is lost.
"""

import asyncio
import logging

from noteful.database import async_session_factory, create_schema, dispose_engine, drop_schema
from noteful.main import setup_logging
from noteful.seed import seed_database

logger = logging.getLogger("noteful.seed")


async def reset_and_seed() -> None:
    await drop_schema()
    await create_schema()
    async with async_session_factory() as session:
        counts = await seed_database(session)
        await session.commit()
    logger.info(
        "Inserted %d folders, %d tags, %d notes",
        counts["folders"],
        counts["tags"],
        counts["notes"],
    )


async def main() -> None:
    try:
        await reset_and_seed()
    finally:
        await dispose_engine()


if __name__ == "__main__":
    setup_logging()
    asyncio.run(main())
