"""
Database table creation script.

Creates all tables defined in ORM models using SQLAlchemy metadata.

Dependencies: sqlalchemy, meeting_indexer.configs
System role: Database schema initialization

Usage:
    python -m meeting_indexer.boundary.db.create_tables
"""

import asyncio

from sqlalchemy.ext.asyncio import AsyncEngine

from meeting_indexer.boundary.db import models  # noqa: F401
from meeting_indexer.boundary.db.base import Base
from meeting_indexer.boundary.db.connection import get_async_engine
from meeting_indexer.observability import configure_logging, get_logger

logger = get_logger(__name__)


async def create_all_tables(engine: AsyncEngine | None = None) -> None:
    """
    Create all database tables from registered ORM models.

    Idempotent: calls CREATE TABLE IF NOT EXISTS for each model, so safe
    to run multiple times. Existing tables remain unchanged.

    Args:
        engine: Target engine (configured database if None)

    Raises:
        SQLAlchemyError: If database connection fails or table creation fails
    """
    engine = engine or get_async_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info(
        f"{__name__}:create_all_tables - Tables created",
        extra={"tables": sorted(Base.metadata.tables)},
    )


async def drop_all_tables(engine: AsyncEngine | None = None) -> None:
    """
    Drop all database tables and their data.

    WARNING: Irreversible data loss. Only use in development environments.
    """
    engine = engine or get_async_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    logger.info(f"{__name__}:drop_all_tables - Tables dropped")


def main() -> None:
    configure_logging()
    asyncio.run(create_all_tables())


if __name__ == "__main__":
    main()
