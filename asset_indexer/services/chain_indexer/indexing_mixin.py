"""
Chain Indexer Indexing Mixin.

Provides batch processing: log queries, decoding and persistence for
each event family.
"""

from collections.abc import Awaitable
from datetime import datetime

from loguru import logger

from asset_indexer.models.enums import KycListKind, TokenStandard
from asset_indexer.services.event_decoder import (
    BLACKLIST_UPDATED_TOPIC,
    PRICE_UPDATED_TOPIC,
    TRANSFER_TOPIC,
    WHITELIST_UPDATED_TOPIC,
    decode_kyc_change,
    decode_price_update,
    decode_transfer,
)
from asset_indexer.utils.exceptions import DecodeError
from asset_indexer.utils.security import mask_address, mask_tx_hash

from .batches import BatchStats, BlockRange

KYC_TOPICS = {
    KycListKind.WHITELIST: WHITELIST_UPDATED_TOPIC,
    KycListKind.BLACKLIST: BLACKLIST_UPDATED_TOPIC,
}


class IndexingMixin:
    """Mixin providing batch indexing functionality."""

    async def process_batch(self, block_range: BlockRange) -> BatchStats:
        """
        Scan one batch for every configured event family.

        Families run in a fixed order: fungible transfers, non-fungible
        transfers, whitelist changes, blacklist changes, oracle prices.
        A failing family is logged and does not stop the others.

        Args:
            block_range: Inclusive block range of the batch

        Returns:
            BatchStats with counters for the batch
        """
        stats = BatchStats(block_range)
        # Block timestamps are fetched once per block within the batch
        timestamps: dict[int, datetime | None] = {}
        contracts = self.config.contracts

        if contracts.fund_token:
            await self._run_family(
                "ERC20 transfers",
                self._index_transfers(
                    contracts.fund_token,
                    TokenStandard.ERC20,
                    block_range,
                    timestamps,
                    stats,
                ),
                stats,
            )

        if contracts.certificate_nft:
            await self._run_family(
                "ERC721 transfers",
                self._index_transfers(
                    contracts.certificate_nft,
                    TokenStandard.ERC721,
                    block_range,
                    timestamps,
                    stats,
                ),
                stats,
            )

        if contracts.kyc_registry:
            for kind in (KycListKind.WHITELIST, KycListKind.BLACKLIST):
                await self._run_family(
                    f"{kind.value} changes",
                    self._index_kyc_changes(
                        contracts.kyc_registry,
                        kind,
                        block_range,
                        timestamps,
                        stats,
                    ),
                    stats,
                )

        if contracts.oracle:
            await self._run_family(
                "oracle prices",
                self._index_price_updates(
                    contracts.oracle, block_range, stats
                ),
                stats,
            )

        if stats.stored:
            logger.info(
                f"[Indexer] Batch {block_range}: "
                f"transfers={stats.transfers}, kyc={stats.kyc_changes}, "
                f"prices={stats.price_updates}"
            )
        return stats

    async def _run_family(
        self,
        family: str,
        work: Awaitable[None],
        stats: BatchStats,
    ) -> None:
        try:
            await work
        except Exception as e:
            stats.failed_families.append(family)
            logger.error(
                f"[Indexer] {family} failed for batch "
                f"{stats.block_range}: {e}"
            )

    async def _block_timestamp(
        self,
        block_number: int,
        cache: dict[int, datetime | None],
    ) -> datetime | None:
        """Resolve a block timestamp, once per block and batch."""
        if block_number not in cache:
            try:
                cache[block_number] = await self.chain.get_block_timestamp(
                    block_number
                )
            except Exception as e:
                logger.warning(
                    f"[Indexer] Failed to get block {block_number} "
                    f"timestamp: {e}"
                )
                cache[block_number] = None
        return cache[block_number]

    async def _index_transfers(
        self,
        token_address: str,
        standard: TokenStandard,
        block_range: BlockRange,
        timestamps: dict[int, datetime | None],
        stats: BatchStats,
    ) -> None:
        logs = await self.chain.get_logs(
            token_address, TRANSFER_TOPIC, block_range.start, block_range.end
        )

        for log in logs:
            try:
                event = decode_transfer(log, standard)
            except DecodeError as e:
                stats.decode_errors += 1
                logger.warning(f"[Indexer] Skipping {standard} log: {e}")
                continue

            try:
                block_timestamp = await self._block_timestamp(
                    event.block_number, timestamps
                )
                if block_timestamp is not None:
                    event = event.with_timestamp(block_timestamp)

                if await self.store.save_transfer(event):
                    stats.transfers += 1
                    logger.debug(
                        f"[Indexer] {standard} transfer "
                        f"{mask_address(event.from_address)} -> "
                        f"{mask_address(event.to_address)}"
                    )
                else:
                    stats.duplicates += 1
            except Exception as e:
                stats.write_errors += 1
                logger.error(
                    f"[Indexer] Failed to store transfer "
                    f"{mask_tx_hash(log.tx_hash)}#{log.log_index}: {e}"
                )

    async def _index_kyc_changes(
        self,
        registry_address: str,
        kind: KycListKind,
        block_range: BlockRange,
        timestamps: dict[int, datetime | None],
        stats: BatchStats,
    ) -> None:
        logs = await self.chain.get_logs(
            registry_address,
            KYC_TOPICS[kind],
            block_range.start,
            block_range.end,
        )

        for log in logs:
            try:
                event = decode_kyc_change(log, kind)
            except DecodeError as e:
                stats.decode_errors += 1
                logger.warning(f"[Indexer] Skipping {kind.value} log: {e}")
                continue

            try:
                block_timestamp = await self._block_timestamp(
                    event.block_number, timestamps
                )
                if block_timestamp is not None:
                    event = event.with_timestamp(block_timestamp)

                if await self.store.save_kyc_change(event):
                    stats.kyc_changes += 1
                    logger.info(
                        f"[Indexer] KYC {event.action.value} for "
                        f"{mask_address(event.user_address)}"
                    )
                else:
                    stats.duplicates += 1
            except Exception as e:
                stats.write_errors += 1
                logger.error(
                    f"[Indexer] Failed to store KYC change "
                    f"{mask_tx_hash(log.tx_hash)}#{log.log_index}: {e}"
                )

    async def _index_price_updates(
        self,
        oracle_address: str,
        block_range: BlockRange,
        stats: BatchStats,
    ) -> None:
        logs = await self.chain.get_logs(
            oracle_address,
            PRICE_UPDATED_TOPIC,
            block_range.start,
            block_range.end,
        )

        for log in logs:
            try:
                event = decode_price_update(log)
            except DecodeError as e:
                stats.decode_errors += 1
                logger.warning(f"[Indexer] Skipping oracle log: {e}")
                continue

            try:
                if await self.store.save_price_update(event):
                    stats.price_updates += 1
                    logger.info(
                        f"[Indexer] Oracle price {event.price} "
                        f"at {event.timestamp.isoformat()}"
                    )
                else:
                    stats.duplicates += 1
            except Exception as e:
                stats.write_errors += 1
                logger.error(
                    f"[Indexer] Failed to store oracle price "
                    f"{mask_tx_hash(log.tx_hash)}#{log.log_index}: {e}"
                )
