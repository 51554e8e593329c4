"""Data access layer."""

from asset_indexer.repositories.checkpoint_repository import (
    CheckpointRepository,
)
from asset_indexer.repositories.kyc_event_repository import KycEventRepository
from asset_indexer.repositories.oracle_price_repository import (
    OraclePriceRepository,
)
from asset_indexer.repositories.token_repository import TokenRepository
from asset_indexer.repositories.transfer_event_repository import (
    TransferEventRepository,
)
from asset_indexer.repositories.user_repository import UserRepository

__all__ = [
    "CheckpointRepository",
    "KycEventRepository",
    "OraclePriceRepository",
    "TokenRepository",
    "TransferEventRepository",
    "UserRepository",
]
