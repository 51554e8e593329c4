"""Unit tests for the chain indexer scan loop."""

import asyncio
from datetime import UTC, datetime
from unittest.mock import AsyncMock

import pytest

from asset_indexer.config.settings import ContractAddresses, IndexerConfig
from asset_indexer.services.chain_indexer import (
    BlockRange,
    ChainIndexerService,
    IndexerState,
)
from asset_indexer.services.event_decoder import TRANSFER_TOPIC
from asset_indexer.utils.exceptions import ChainClientError, IndexerStartupError
from tests.factories import (
    ALICE,
    BOB,
    CERTIFICATE_NFT,
    FUND_TOKEN,
    FakeStore,
    address_topic,
    kyc_log,
    logs_by_filter,
    make_log,
    price_log,
    transfer_log,
)


@pytest.fixture
def store():
    return FakeStore(checkpoint=100)


@pytest.fixture
def indexer(mock_chain, store, indexer_config):
    return ChainIndexerService(mock_chain, store, indexer_config)


async def started(indexer, head: int = 100):
    indexer.chain.get_block_number.return_value = head
    await indexer.start()
    return indexer


class TestStart:
    """Tests for startup."""

    @pytest.mark.asyncio
    async def test_start_loads_checkpoint_and_registers_tokens(
        self, indexer, store
    ):
        assert await indexer.start() is True

        assert indexer.state == IndexerState.RUNNING
        assert indexer.is_running
        assert indexer.checkpoint.last_processed_block == 100
        assert store.tokens == [(FUND_TOKEN, "ERC20"), (CERTIFICATE_NFT, "ERC721")]

    @pytest.mark.asyncio
    async def test_start_twice_is_ignored(self, indexer):
        await indexer.start()

        assert await indexer.start() is False
        assert indexer.state == IndexerState.RUNNING

    @pytest.mark.asyncio
    async def test_unreachable_store_is_fatal(self, indexer, store):
        store.load_checkpoint = AsyncMock(side_effect=OSError("db down"))

        with pytest.raises(IndexerStartupError):
            await indexer.start()

        assert indexer.state == IndexerState.STOPPED


class TestRunCycle:
    """Tests for one scan cycle."""

    @pytest.mark.asyncio
    async def test_processes_batches_in_order(self, indexer, store, mock_chain):
        """Checkpoint 100, head 125, batch 10 gives three batches."""
        await started(indexer)
        mock_chain.get_block_number.return_value = 125

        result = await indexer.run_cycle()

        assert [b.block_range for b in result.batches] == [
            BlockRange(101, 110),
            BlockRange(111, 120),
            BlockRange(121, 125),
        ]
        assert store.saved_checkpoints == [110, 120, 125]
        assert indexer.checkpoint.last_processed_block == 125
        assert result.last_block == 125
        # 5 families per batch
        assert mock_chain.get_logs.await_count == 15

    @pytest.mark.asyncio
    async def test_head_failure_keeps_checkpoint(self, indexer, store, mock_chain):
        await started(indexer)
        mock_chain.get_block_number.side_effect = ChainClientError("down")

        with pytest.raises(ChainClientError):
            await indexer.run_cycle()

        assert indexer.checkpoint.last_processed_block == 100
        assert store.saved_checkpoints == []

    @pytest.mark.asyncio
    async def test_no_new_blocks(self, indexer, store, mock_chain):
        await started(indexer)
        mock_chain.get_block_number.return_value = 100

        result = await indexer.run_cycle()

        assert result.batches == []
        mock_chain.get_logs.assert_not_awaited()
        assert store.saved_checkpoints == []

    @pytest.mark.asyncio
    async def test_events_from_all_families_are_stored(
        self, indexer, store, mock_chain
    ):
        mock_chain.get_logs.side_effect = logs_by_filter(
            [
                transfer_log(recipient=ALICE, block_number=101, tx=1),
                transfer_log(
                    token=CERTIFICATE_NFT,
                    recipient=BOB,
                    value=7,
                    indexed_value=True,
                    block_number=102,
                    tx=2,
                ),
                kyc_log(user=ALICE, block_number=103, tx=3),
                kyc_log(user=BOB, blacklist=True, block_number=104, tx=4),
                price_log(block_number=105, tx=5),
            ]
        )
        await started(indexer)
        mock_chain.get_block_number.return_value = 110

        result = await indexer.run_cycle()

        stats = result.batches[0]
        assert (stats.transfers, stats.kyc_changes, stats.price_updates) == (2, 2, 1)
        assert result.stored == 5
        assert store.transfers[1].token_id == "7"
        assert [e.action.value for e in store.kyc_changes] == [
            "whitelist_added",
            "blacklist_added",
        ]
        assert store.prices[0].price == 1000

    @pytest.mark.asyncio
    async def test_stop_between_batches(self, indexer, store, mock_chain):
        """In-flight batch completes, the next one is not started."""

        async def get_logs(address, topic, from_block, to_block):
            indexer.stop()
            return []

        mock_chain.get_logs.side_effect = get_logs
        await started(indexer)
        mock_chain.get_block_number.return_value = 125

        result = await indexer.run_cycle()

        assert len(result.batches) == 1
        assert store.saved_checkpoints == [110]
        assert indexer.state == IndexerState.STOPPING


class TestFailureIsolation:
    """A bad family, log or write never blocks the rest of the batch."""

    @pytest.mark.asyncio
    async def test_family_failure_isolated(self, indexer, store, mock_chain):
        good = logs_by_filter([kyc_log(user=ALICE, block_number=101)])

        async def get_logs(address, topic, from_block, to_block):
            if address == FUND_TOKEN:
                raise ChainClientError("eth_getLogs failed")
            return await good(address, topic, from_block, to_block)

        mock_chain.get_logs.side_effect = get_logs
        await started(indexer)
        mock_chain.get_block_number.return_value = 110

        result = await indexer.run_cycle()

        stats = result.batches[0]
        assert stats.failed_families == ["ERC20 transfers"]
        assert stats.kyc_changes == 1
        assert store.saved_checkpoints == [110]

    @pytest.mark.asyncio
    async def test_malformed_log_skipped(self, indexer, store, mock_chain):
        malformed = make_log(
            FUND_TOKEN,
            [TRANSFER_TOPIC, address_topic(ALICE)],
            block_number=102,
            tx=2,
        )
        mock_chain.get_logs.side_effect = logs_by_filter(
            [
                transfer_log(block_number=101, tx=1),
                malformed,
                transfer_log(block_number=103, tx=3),
            ]
        )
        await started(indexer)
        mock_chain.get_block_number.return_value = 110

        result = await indexer.run_cycle()

        stats = result.batches[0]
        assert stats.decode_errors == 1
        assert stats.transfers == 2
        assert stats.failed_families == []

    @pytest.mark.asyncio
    async def test_write_failure_isolated(self, indexer, store, mock_chain):
        mock_chain.get_logs.side_effect = logs_by_filter(
            [
                transfer_log(block_number=101, tx=1),
                transfer_log(block_number=102, tx=2),
            ]
        )
        real_save = store.save_transfer

        async def flaky_save(event):
            if event.block_number == 101:
                raise RuntimeError("constraint violated")
            return await real_save(event)

        store.save_transfer = flaky_save
        await started(indexer)
        mock_chain.get_block_number.return_value = 110

        result = await indexer.run_cycle()

        stats = result.batches[0]
        assert stats.write_errors == 1
        assert stats.transfers == 1

    @pytest.mark.asyncio
    async def test_reprocessed_logs_count_as_duplicates(
        self, indexer, store, mock_chain
    ):
        mock_chain.get_logs.side_effect = logs_by_filter(
            [transfer_log(block_number=101, tx=1)]
        )
        await started(indexer)

        first = await indexer.process_batch(BlockRange(101, 110))
        second = await indexer.process_batch(BlockRange(101, 110))

        assert first.transfers == 1
        assert second.transfers == 0
        assert second.duplicates == 1
        assert len(store.transfers) == 1


class TestBlockTimestamps:
    """Tests for timestamp resolution."""

    @pytest.mark.asyncio
    async def test_one_lookup_per_block(self, indexer, store, mock_chain):
        ts = datetime(2024, 1, 1, tzinfo=UTC)
        mock_chain.get_block_timestamp.return_value = ts
        mock_chain.get_logs.side_effect = logs_by_filter(
            [
                transfer_log(block_number=101, tx=1, log_index=0),
                transfer_log(block_number=101, tx=1, log_index=1),
                kyc_log(block_number=101, tx=1, log_index=2),
            ]
        )
        await started(indexer)

        await indexer.process_batch(BlockRange(101, 110))

        mock_chain.get_block_timestamp.assert_awaited_once_with(101)
        assert all(e.block_timestamp == ts for e in store.transfers)
        assert store.kyc_changes[0].block_timestamp == ts

    @pytest.mark.asyncio
    async def test_lookup_failure_stores_without_timestamp(
        self, indexer, store, mock_chain
    ):
        mock_chain.get_block_timestamp.side_effect = ChainClientError("down")
        mock_chain.get_logs.side_effect = logs_by_filter(
            [transfer_log(block_number=101)]
        )
        await started(indexer)

        stats = await indexer.process_batch(BlockRange(101, 110))

        assert stats.transfers == 1
        assert store.transfers[0].block_timestamp is None

    @pytest.mark.asyncio
    async def test_failed_lookup_not_repeated_within_batch(
        self, indexer, store, mock_chain
    ):
        """A block whose timestamp lookup failed is not queried again."""
        mock_chain.get_block_timestamp.side_effect = ChainClientError("down")
        mock_chain.get_logs.side_effect = logs_by_filter(
            [
                transfer_log(block_number=101, tx=1, log_index=0),
                transfer_log(block_number=101, tx=1, log_index=1),
                kyc_log(block_number=101, tx=1, log_index=2),
            ]
        )
        await started(indexer)

        stats = await indexer.process_batch(BlockRange(101, 110))

        mock_chain.get_block_timestamp.assert_awaited_once_with(101)
        assert stats.transfers == 2
        assert stats.kyc_changes == 1


class TestConfiguredFamilies:
    @pytest.mark.asyncio
    async def test_only_configured_contracts_are_scanned(self, mock_chain):
        config = IndexerConfig(
            contracts=ContractAddresses(oracle="0x" + "4" * 40),
            batch_size=10,
        )
        indexer = ChainIndexerService(mock_chain, FakeStore(checkpoint=0), config)
        await indexer.start()

        await indexer.process_batch(BlockRange(1, 10))

        assert mock_chain.get_logs.await_count == 1


class TestRunLoop:
    """Tests for the polling loop and shutdown."""

    @pytest.mark.asyncio
    async def test_run_until_stopped(self, indexer, store, mock_chain):
        mock_chain.get_block_number.return_value = 100

        task = asyncio.create_task(indexer.run())
        await asyncio.sleep(0.05)
        indexer.stop()
        await asyncio.wait_for(task, timeout=1)

        assert indexer.state == IndexerState.STOPPED
        assert store.closed is True
        mock_chain.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_cycle_error_does_not_stop_loop(self, indexer, mock_chain):
        calls = 0

        async def head():
            nonlocal calls
            calls += 1
            if calls == 1:
                return 100
            if calls == 2:
                raise ChainClientError("down")
            indexer.stop()
            return 100

        mock_chain.get_block_number.side_effect = head

        await asyncio.wait_for(indexer.run(), timeout=1)

        assert calls >= 3
        assert indexer.state == IndexerState.STOPPED


class TestIndexerStats:
    @pytest.mark.asyncio
    async def test_stats(self, indexer, mock_chain):
        await started(indexer)
        mock_chain.get_block_number.return_value = 130

        stats = await indexer.get_indexer_stats()

        assert stats["state"] == "running"
        assert stats["last_processed_block"] == 100
        assert stats["latest_block"] == 130
        assert stats["blocks_behind"] == 30
        assert stats["transfers"] == 0

    @pytest.mark.asyncio
    async def test_stats_without_node(self, indexer, mock_chain):
        mock_chain.get_block_number.side_effect = ChainClientError("down")

        stats = await indexer.get_indexer_stats()

        assert stats["state"] == "stopped"
        assert stats["last_processed_block"] is None
        assert stats["latest_block"] is None
        assert stats["blocks_behind"] is None
