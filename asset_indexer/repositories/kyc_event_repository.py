"""
KYC Event repository.

Data access layer for registry status changes.
"""

from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from asset_indexer.models.kyc_event import KycEvent
from asset_indexer.repositories.base import BaseRepository


class KycEventRepository(BaseRepository[KycEvent]):
    """Repository for KYC events."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository."""
        super().__init__(KycEvent, session)

    async def record(
        self,
        user_address: str,
        action: str,
        tx_hash: str,
        log_index: int,
        block_number: int,
        block_timestamp: datetime | None = None,
    ) -> bool:
        """
        Append a status change, ignoring reprocessed logs.

        Returns:
            True if a new row was written
        """
        return await self.insert_ignore(
            ["tx_hash", "log_index"],
            user_address=user_address,
            action=action,
            tx_hash=tx_hash.lower(),
            log_index=log_index,
            block_number=block_number,
            block_timestamp=block_timestamp,
        )
