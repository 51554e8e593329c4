"""
Transfer Event repository.

Data access layer for token transfers.
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from asset_indexer.models.transfer_event import TransferEvent
from asset_indexer.repositories.base import BaseRepository


class TransferEventRepository(BaseRepository[TransferEvent]):
    """Repository for transfer events."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository."""
        super().__init__(TransferEvent, session)

    async def upsert(
        self,
        tx_hash: str,
        log_index: int,
        block_number: int,
        from_address: str,
        to_address: str,
        token_address: str,
        amount: int | None = None,
        token_id: str | None = None,
        block_timestamp: datetime | None = None,
    ) -> bool:
        """
        Store a transfer keyed by (tx_hash, log_index).

        Re-inserting an already seen log is a no-op.

        Returns:
            True if a new row was written
        """
        if (amount is None) == (token_id is None):
            raise ValueError(
                "Exactly one of amount or token_id must be set"
            )

        return await self.insert_ignore(
            ["tx_hash", "log_index"],
            tx_hash=tx_hash.lower(),
            log_index=log_index,
            block_number=block_number,
            block_timestamp=block_timestamp,
            from_address=from_address,
            to_address=to_address,
            token_address=token_address,
            amount=Decimal(amount) if amount is not None else None,
            token_id=token_id,
        )

    async def get_latest_block(self) -> int | None:
        """
        Get the highest block number among stored transfers.

        Returns:
            Block number or None if no transfer was stored yet
        """
        result = await self.session.execute(
            select(func.max(TransferEvent.block_number))
        )
        return result.scalar()
