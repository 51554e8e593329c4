"""
Worker main entry point.

Builds the chain client, store and indexer from settings and runs the
polling loop until SIGINT/SIGTERM.

Usage:
    python -m worker.main
"""

import asyncio
import sys

from loguru import logger
from pydantic import ValidationError

from asset_indexer.config.database import (
    create_engine_from_url,
    create_session_maker,
)
from asset_indexer.config.settings import IndexerConfig, get_settings
from asset_indexer.services.chain import ChainClient
from asset_indexer.services.chain_indexer import (
    ChainIndexerService,
    IndexerStore,
)
from asset_indexer.utils.exceptions import IndexerStartupError
from worker.initialization.logging import setup_logging
from worker.initialization.shutdown import install_signal_handlers


async def main() -> int:
    """Initialize and run the indexer."""
    try:
        settings = get_settings()
    except ValidationError as e:
        setup_logging()
        logger.error(f"Invalid configuration: {e}")
        return 1

    setup_logging(settings.log_level)

    engine = create_engine_from_url(
        settings.database_url, echo=settings.database_echo
    )
    store = IndexerStore(create_session_maker(engine), engine=engine)
    chain = ChainClient.from_settings(settings)
    indexer = ChainIndexerService(
        chain=chain,
        store=store,
        config=IndexerConfig.from_settings(settings),
    )

    install_signal_handlers(indexer)

    try:
        await indexer.run()
    except IndexerStartupError as e:
        logger.error(f"Failed to start indexer: {e}")
        return 1

    logger.info("Graceful shutdown complete")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
