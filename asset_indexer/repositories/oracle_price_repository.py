"""
Oracle Price repository.

Data access layer for price observations.
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from asset_indexer.models.oracle_price import OraclePrice
from asset_indexer.repositories.base import BaseRepository


class OraclePriceRepository(BaseRepository[OraclePrice]):
    """Repository for oracle prices."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository."""
        super().__init__(OraclePrice, session)

    async def record(
        self,
        price: int,
        timestamp: datetime,
        tx_hash: str,
        log_index: int,
        block_number: int,
    ) -> bool:
        """
        Store a price observation, ignoring reprocessed logs.

        Returns:
            True if a new row was written
        """
        return await self.insert_ignore(
            ["tx_hash", "log_index"],
            price=Decimal(price),
            timestamp=timestamp,
            tx_hash=tx_hash.lower(),
            log_index=log_index,
            block_number=block_number,
        )

    async def get_latest(self) -> OraclePrice | None:
        """Get the most recent observation by block order."""
        query = (
            select(OraclePrice)
            .order_by(
                OraclePrice.block_number.desc(),
                OraclePrice.log_index.desc(),
            )
            .limit(1)
        )
        result = await self.session.execute(query)
        return result.scalar_one_or_none()
