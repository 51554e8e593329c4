"""
Chain Indexer Monitoring Mixin.

Provides the service lifecycle and the polling loop over new blocks.
"""

import asyncio

from loguru import logger

from asset_indexer.models.enums import TokenStandard
from asset_indexer.utils.exceptions import IndexerStartupError

from .batches import CycleResult, plan_batches
from .state import IndexerState


class MonitoringMixin:
    """Mixin providing block monitoring functionality."""

    async def start(self) -> bool:
        """
        Prepare the indexer for scanning.

        Registers the watched token contracts and loads the checkpoint.

        Returns:
            False if the indexer was not stopped, True otherwise

        Raises:
            IndexerStartupError: If the store or chain is unreachable
        """
        if self.state != IndexerState.STOPPED:
            logger.warning(f"[Indexer] Start ignored, state is {self.state}")
            return False

        self.state = IndexerState.STARTING
        self._stop_event.clear()

        try:
            contracts = self.config.contracts
            if contracts.fund_token:
                await self.store.register_token(
                    contracts.fund_token, TokenStandard.ERC20.value, "fund"
                )
            if contracts.certificate_nft:
                await self.store.register_token(
                    contracts.certificate_nft,
                    TokenStandard.ERC721.value,
                    "certificate",
                )

            await self.checkpoint.load(
                self.chain.get_block_number, self.config.batch_size
            )
        except Exception as e:
            self.state = IndexerState.STOPPED
            logger.error(f"[Indexer] Startup failed: {e}")
            raise IndexerStartupError(f"Indexer startup failed: {e}") from e

        self.state = IndexerState.RUNNING
        logger.success(
            f"[Indexer] Started at block "
            f"{self.checkpoint.last_processed_block}, "
            f"batch={self.config.batch_size}, "
            f"poll={self.config.poll_interval}s"
        )
        return True

    async def run_cycle(self) -> CycleResult:
        """
        Scan every block between the checkpoint and the current height.

        Batches run in ascending order and the checkpoint is advanced
        after each one. Stops between batches once stop() was called.

        Returns:
            CycleResult with per-batch counters

        Raises:
            Exception: If the height query or a checkpoint write fails;
                the checkpoint is left at the last completed batch
        """
        head = await self.chain.get_block_number()
        result = CycleResult(head)

        start = self.checkpoint.last_processed_block + 1
        if start > head:
            logger.debug(f"[Indexer] No new blocks (head {head})")
            return result

        for batch in plan_batches(start, head, self.config.batch_size):
            if self._stop_event.is_set():
                logger.info(f"[Indexer] Stop requested before batch {batch}")
                break

            stats = await self.process_batch(batch)
            await self.checkpoint.advance(batch.end)
            result.batches.append(stats)

        if result.stored:
            logger.info(
                f"[Indexer] Cycle done: {result.stored} events stored, "
                f"checkpoint {self.checkpoint.last_processed_block}/{head}"
            )
        return result

    async def run(self) -> None:
        """
        Start and poll until stop() is called.

        A failing cycle is logged and retried after the poll interval.
        Resources are released when the loop exits.
        """
        try:
            await self.start()

            while not self._stop_event.is_set():
                try:
                    await self.run_cycle()
                except Exception as e:
                    logger.exception(f"[Indexer] Cycle failed: {e}")

                await self._sleep(self.config.poll_interval)
        finally:
            await self._shutdown()

    def stop(self) -> None:
        """Request a graceful stop after the in-flight batch."""
        if self.state in (IndexerState.STOPPED, IndexerState.STOPPING):
            self._stop_event.set()
            return

        logger.info("[Indexer] Stop requested")
        self.state = IndexerState.STOPPING
        self._stop_event.set()

    async def _sleep(self, seconds: float) -> None:
        """Sleep for the poll interval or until stop() is called."""
        try:
            await asyncio.wait_for(self._stop_event.wait(), timeout=seconds)
        except TimeoutError:
            pass

    async def _shutdown(self) -> None:
        """Release the store and chain client."""
        try:
            await self.store.close()
        except Exception as e:
            logger.error(f"[Indexer] Error closing store: {e}")

        try:
            await self.chain.close()
        except Exception as e:
            logger.error(f"[Indexer] Error closing chain client: {e}")

        self.state = IndexerState.STOPPED
        logger.info("[Indexer] Stopped")
