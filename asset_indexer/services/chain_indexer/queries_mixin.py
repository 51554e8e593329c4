"""
Chain Indexer Queries Mixin.

Read-only status reporting for operators.
"""

from loguru import logger


class QueriesMixin:
    """Mixin providing indexer status queries."""

    async def get_indexer_stats(self) -> dict:
        """
        Get indexer progress and stored row counts.

        Returns:
            Dict with state, checkpoint, chain height, lag and the store
            counters. Chain height and lag are None if the node is down.
        """
        last_block = (
            self.checkpoint.last_processed_block
            if self.checkpoint.is_loaded
            else None
        )

        try:
            latest_block = await self.chain.get_block_number()
        except Exception as e:
            logger.warning(f"[Indexer] Cannot get chain height: {e}")
            latest_block = None

        blocks_behind = None
        if latest_block is not None and last_block is not None:
            blocks_behind = max(0, latest_block - last_block)

        return {
            "state": self.state.value,
            "last_processed_block": last_block,
            "latest_block": latest_block,
            "blocks_behind": blocks_behind,
            **await self.store.get_stats(),
        }
