"""
Worker Initialization - Shutdown Module.

Wires process signals to the indexer's graceful stop.
"""

import asyncio
import signal

from loguru import logger

from asset_indexer.services.chain_indexer import ChainIndexerService


def install_signal_handlers(indexer: ChainIndexerService) -> None:
    """Call indexer.stop() on SIGINT and SIGTERM."""
    loop = asyncio.get_running_loop()

    def _handle(sig: signal.Signals) -> None:
        logger.info(f"Received {sig.name}, graceful shutdown initiated...")
        indexer.stop()

    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, _handle, sig)
        except NotImplementedError:
            # Windows event loops have no signal handler support
            logger.warning(f"Cannot install handler for {sig.name}")
