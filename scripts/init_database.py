#!/usr/bin/env python3
"""Initialize database tables from model metadata (development only)."""

import asyncio
import sys

from loguru import logger

from asset_indexer.config.database import create_engine_from_url
from asset_indexer.config.settings import get_settings
from asset_indexer.models import Base

# Configure logger for script
logger.remove()
logger.add(sys.stderr, level="INFO")


async def init_database() -> None:
    """Create all database tables."""
    settings = get_settings()

    logger.info("Connecting to database...")
    engine = create_engine_from_url(settings.database_url)

    async with engine.begin() as conn:
        logger.info("Creating tables (checkfirst=True)...")
        await conn.run_sync(Base.metadata.create_all, checkfirst=True)

    await engine.dispose()
    logger.success("Database tables created successfully!")


if __name__ == "__main__":
    asyncio.run(init_database())
