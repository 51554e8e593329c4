"""
Checkpoint Tracker.

Owns the "last processed block" cursor of the scan loop.
"""

from collections.abc import Awaitable, Callable

from loguru import logger

from asset_indexer.config.constants import INDEXER_CHECKPOINT_NAME


class CheckpointTracker:
    """
    Durable scan cursor.

    Seeded on startup from, in order:
    1. the dedicated checkpoint record
    2. the highest stored transfer block
    3. current height minus one batch (fast start, no genesis backfill)

    The cursor only moves forward and only after the new value is persisted.
    """

    def __init__(self, store, name: str = INDEXER_CHECKPOINT_NAME) -> None:
        self.store = store
        self.name = name
        self._block: int | None = None

    @property
    def last_processed_block(self) -> int:
        if self._block is None:
            raise RuntimeError("Checkpoint not loaded")
        return self._block

    @property
    def is_loaded(self) -> bool:
        return self._block is not None

    async def load(
        self,
        chain_head: Callable[[], Awaitable[int]],
        batch_size: int,
    ) -> int:
        """
        Load the cursor.

        Args:
            chain_head: Coroutine function returning the current height
            batch_size: Blocks per batch, used for the fresh-start offset

        Returns:
            Last processed block
        """
        block = await self.store.load_checkpoint(self.name)
        if block is not None:
            logger.info(f"[Indexer] Resuming from checkpoint block {block}")
        else:
            block = await self.store.latest_transfer_block()
            if block is not None:
                logger.info(
                    f"[Indexer] No checkpoint record, resuming from last "
                    f"transfer block {block}"
                )
            else:
                head = await chain_head()
                block = max(0, head - batch_size)
                logger.info(
                    f"[Indexer] Empty store, starting from block {block} "
                    f"(head {head} - {batch_size})"
                )

        self._block = block
        return block

    async def advance(self, block: int) -> None:
        """Persist and move the cursor to block (never backwards)."""
        if self._block is not None and block <= self._block:
            return
        await self.store.save_checkpoint(self.name, block)
        self._block = block
