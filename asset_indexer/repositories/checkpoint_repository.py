"""
Checkpoint repository.

Reads and writes the durable scan cursor.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from asset_indexer.models.indexer_checkpoint import IndexerCheckpoint
from asset_indexer.repositories.base import BaseRepository


class CheckpointRepository(BaseRepository[IndexerCheckpoint]):
    """Repository for indexer checkpoints."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository."""
        super().__init__(IndexerCheckpoint, session)

    async def get_block(self, name: str) -> int | None:
        """
        Get last processed block of a named checkpoint.

        Returns:
            Block number or None if the checkpoint was never written
        """
        checkpoint = await self.get_by(name=name)
        return checkpoint.last_processed_block if checkpoint else None

    async def set_block(self, name: str, block_number: int) -> None:
        """Create or move a named checkpoint."""
        stmt = self._insert().values(
            name=name, last_processed_block=block_number
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["name"],
            set_={
                "last_processed_block": stmt.excluded.last_processed_block,
                "updated_at": stmt.excluded.updated_at,
            },
        )
        await self.session.execute(stmt)
