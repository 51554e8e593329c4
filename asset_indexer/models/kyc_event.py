"""
KYC Event model.

Append-only log of whitelist/blacklist changes emitted by the KYC registry.
The current status of an address lives on the User model.
"""

from datetime import UTC, datetime

from sqlalchemy import (
    BigInteger,
    DateTime,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from asset_indexer.models.base import Base
from asset_indexer.models.types import AddressType, TxHashType


class KycEvent(Base):
    """Whitelist/blacklist status change for one address."""

    __tablename__ = "kyc_events"
    __table_args__ = (
        UniqueConstraint(
            "tx_hash", "log_index", name="uq_kyc_events_tx_log"
        ),
    )

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True
    )

    user_address: Mapped[str] = mapped_column(
        AddressType, nullable=False, index=True
    )
    # whitelist_added, whitelist_removed, blacklist_added, blacklist_removed
    action: Mapped[str] = mapped_column(String(32), nullable=False)

    tx_hash: Mapped[str] = mapped_column(TxHashType, nullable=False)
    log_index: Mapped[int] = mapped_column(Integer, nullable=False)
    block_number: Mapped[int] = mapped_column(
        BigInteger, nullable=False, index=True
    )
    block_timestamp: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        nullable=False,
    )

    def __repr__(self) -> str:
        """String representation."""
        return (
            f"<KycEvent(user={self.user_address}, action={self.action}, "
            f"block={self.block_number})>"
        )
