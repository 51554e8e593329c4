"""
Worker Initialization - Logging Module.

Configures loguru logger for the indexer worker.
Sets up log rotation and retention policies.
"""

import sys

from loguru import logger


def setup_logging(level: str = "INFO") -> None:
    """Configure stderr and rotating file sinks."""
    logger.remove()
    logger.add(sys.stderr, level=level)
    logger.add(
        "logs/indexer.log",
        rotation="1 day",
        retention="7 days",
        level=level,
        encoding="utf-8",
    )

    logger.info("Starting asset indexer worker...")
