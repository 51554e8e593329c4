"""
Database models.

Exports all SQLAlchemy models for easy imports.
"""

from asset_indexer.models.base import Base
from asset_indexer.models.enums import (
    KycAction,
    KycListKind,
    KycStatus,
    TokenStandard,
)
from asset_indexer.models.indexer_checkpoint import IndexerCheckpoint
from asset_indexer.models.kyc_event import KycEvent
from asset_indexer.models.oracle_price import OraclePrice
from asset_indexer.models.token import Token
from asset_indexer.models.transfer_event import TransferEvent
from asset_indexer.models.user import User

__all__ = [
    "Base",
    "IndexerCheckpoint",
    "KycAction",
    "KycEvent",
    "KycListKind",
    "KycStatus",
    "OraclePrice",
    "Token",
    "TokenStandard",
    "TransferEvent",
    "User",
]
