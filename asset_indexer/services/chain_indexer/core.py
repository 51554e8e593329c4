"""
Chain Indexer Core Service.

Main service class that combines all indexer functionality.
Inherits from mixins to provide indexing, monitoring, and query methods.
"""

import asyncio

from asset_indexer.config.settings import IndexerConfig
from asset_indexer.services.chain import ChainClient

from .checkpoint import CheckpointTracker
from .indexing_mixin import IndexingMixin
from .monitoring_mixin import MonitoringMixin
from .queries_mixin import QueriesMixin
from .state import IndexerState
from .store import IndexerStore


class ChainIndexerService(IndexingMixin, MonitoringMixin, QueriesMixin):
    """
    Blockchain-to-database indexer.

    Polls the chain for new blocks, scans them in bounded batches for
    transfer, KYC and oracle logs, persists decoded events idempotently
    and advances a durable checkpoint after each batch.

    Key features:
    - Strictly sequential, ascending batches
    - Per-log and per-family failure isolation
    - Reprocessing bounded to one batch after a crash
    """

    def __init__(
        self,
        chain: ChainClient,
        store: IndexerStore,
        config: IndexerConfig,
    ) -> None:
        """
        Initialize indexer.

        Args:
            chain: Read-only chain client
            store: Persistence adapter
            config: Watched contracts and scan parameters
        """
        self.chain = chain
        self.store = store
        self.config = config
        self.checkpoint = CheckpointTracker(store)
        self.state = IndexerState.STOPPED
        self._stop_event = asyncio.Event()

    @property
    def is_running(self) -> bool:
        return self.state == IndexerState.RUNNING
