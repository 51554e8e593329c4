"""
Indexer Store.

Persistence adapter used by the scan loop. Every write runs in its own
transaction so a failing record never poisons its siblings.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from asset_indexer.repositories import (
    CheckpointRepository,
    KycEventRepository,
    OraclePriceRepository,
    TokenRepository,
    TransferEventRepository,
    UserRepository,
)
from asset_indexer.services.event_decoder import (
    DecodedKycChange,
    DecodedPriceUpdate,
    DecodedTransfer,
)

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"


class IndexerStore:
    """Store contract consumed by the scan loop."""

    def __init__(
        self,
        session_maker: async_sessionmaker[AsyncSession],
        engine: AsyncEngine | None = None,
    ) -> None:
        """
        Initialize store.

        Args:
            session_maker: Factory for database sessions
            engine: Engine to dispose on close (optional)
        """
        self.session_maker = session_maker
        self.engine = engine

    @asynccontextmanager
    async def _transaction(self) -> AsyncIterator[AsyncSession]:
        async with self.session_maker() as session:
            async with session.begin():
                yield session

    async def register_token(
        self, address: str, standard: str, name: str | None = None
    ) -> None:
        """Record a watched token contract."""
        async with self._transaction() as session:
            if await TokenRepository(session).register(address, standard, name):
                logger.info(f"[Store] Registered {standard} token {address}")

    async def latest_transfer_block(self) -> int | None:
        """Highest block number among stored transfers."""
        async with self.session_maker() as session:
            return await TransferEventRepository(session).get_latest_block()

    async def load_checkpoint(self, name: str) -> int | None:
        """Read a named checkpoint."""
        async with self.session_maker() as session:
            return await CheckpointRepository(session).get_block(name)

    async def save_checkpoint(self, name: str, block_number: int) -> None:
        """Durably write a named checkpoint."""
        async with self._transaction() as session:
            await CheckpointRepository(session).set_block(name, block_number)

    async def save_transfer(self, event: DecodedTransfer) -> bool:
        """
        Store a transfer and make sure both parties have a user row.

        Returns:
            True if the transfer was new
        """
        async with self._transaction() as session:
            inserted = await TransferEventRepository(session).upsert(
                tx_hash=event.tx_hash,
                log_index=event.log_index,
                block_number=event.block_number,
                block_timestamp=event.block_timestamp,
                from_address=event.from_address,
                to_address=event.to_address,
                token_address=event.token_address,
                amount=event.amount,
                token_id=event.token_id,
            )
            if inserted:
                users = UserRepository(session)
                parties = {event.from_address, event.to_address} - {ZERO_ADDRESS}
                for address in sorted(parties):
                    await users.ensure_exists(address)
        return inserted

    async def save_kyc_change(self, event: DecodedKycChange) -> bool:
        """
        Append the status change and update the user projection.

        The projection is updated even for an already stored event so a
        reprocessed batch converges on the observed chain state.

        Returns:
            True if the event was new
        """
        async with self._transaction() as session:
            inserted = await KycEventRepository(session).record(
                user_address=event.user_address,
                action=event.action.value,
                tx_hash=event.tx_hash,
                log_index=event.log_index,
                block_number=event.block_number,
                block_timestamp=event.block_timestamp,
            )
            await UserRepository(session).upsert_kyc_flag(
                event.user_address, event.kind, event.status
            )
        return inserted

    async def save_price_update(self, event: DecodedPriceUpdate) -> bool:
        """
        Store an oracle price observation.

        Returns:
            True if the observation was new
        """
        async with self._transaction() as session:
            return await OraclePriceRepository(session).record(
                price=event.price,
                timestamp=event.timestamp,
                tx_hash=event.tx_hash,
                log_index=event.log_index,
                block_number=event.block_number,
            )

    async def get_stats(self) -> dict:
        """Row counts and latest price."""
        async with self.session_maker() as session:
            latest_price = await OraclePriceRepository(session).get_latest()
            return {
                "transfers": await TransferEventRepository(session).count(),
                "kyc_events": await KycEventRepository(session).count(),
                "oracle_prices": await OraclePriceRepository(session).count(),
                "users": await UserRepository(session).count(),
                "latest_price": (
                    int(latest_price.price) if latest_price else None
                ),
            }

    async def close(self) -> None:
        """Release database connections."""
        if self.engine is not None:
            await self.engine.dispose()
            logger.info("[Store] Database connections closed")

