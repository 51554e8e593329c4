"""
Chain Indexer Service.

Follows the chain in bounded block batches and mirrors token transfers,
KYC registry changes and oracle prices into the relational store.

Key features:
- Durable checkpoint, advanced only after a batch completes
- Idempotent writes keyed by (tx_hash, log_index)
- Failure isolation per event family and per log
"""

from .batches import BatchStats, BlockRange, CycleResult, plan_batches
from .checkpoint import CheckpointTracker
from .core import ChainIndexerService
from .indexing_mixin import IndexingMixin
from .monitoring_mixin import MonitoringMixin
from .queries_mixin import QueriesMixin
from .state import IndexerState
from .store import ZERO_ADDRESS, IndexerStore

__all__ = [
    "BatchStats",
    "BlockRange",
    "ChainIndexerService",
    "CheckpointTracker",
    "CycleResult",
    "IndexerState",
    "IndexerStore",
    "IndexingMixin",
    "MonitoringMixin",
    "QueriesMixin",
    "ZERO_ADDRESS",
    "plan_batches",
]
