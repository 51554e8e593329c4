"""
Transfer Event model.

Stores ERC-20 and ERC-721 transfers observed on the watched token contracts.
"""

from datetime import UTC, datetime
from decimal import Decimal

from sqlalchemy import (
    BigInteger,
    CheckConstraint,
    DateTime,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from asset_indexer.models.base import Base
from asset_indexer.models.types import AddressType, TxHashType, Uint256Type


class TransferEvent(Base):
    """
    Token transfer observed on-chain.

    Identified by (tx_hash, log_index). Exactly one of amount (fungible)
    or token_id (non-fungible) is set. Rows are never updated.
    """

    __tablename__ = "transfer_events"
    __table_args__ = (
        UniqueConstraint(
            "tx_hash", "log_index", name="uq_transfer_events_tx_log"
        ),
        CheckConstraint(
            "(amount IS NULL) <> (token_id IS NULL)",
            name="check_transfer_amount_xor_token_id",
        ),
    )

    # Primary key
    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True
    )

    # Log identification
    tx_hash: Mapped[str] = mapped_column(TxHashType, nullable=False)
    log_index: Mapped[int] = mapped_column(Integer, nullable=False)
    block_number: Mapped[int] = mapped_column(
        BigInteger, nullable=False, index=True
    )
    block_timestamp: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    # Parties (checksummed)
    from_address: Mapped[str] = mapped_column(
        AddressType, nullable=False, index=True
    )
    to_address: Mapped[str] = mapped_column(
        AddressType, nullable=False, index=True
    )
    token_address: Mapped[str] = mapped_column(
        AddressType, nullable=False, index=True
    )

    # Value: amount for ERC20, token id for ERC721
    amount: Mapped[Decimal | None] = mapped_column(
        Uint256Type, nullable=True
    )
    token_id: Mapped[str | None] = mapped_column(
        String(78), nullable=True
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        nullable=False,
    )

    def __repr__(self) -> str:
        """String representation."""
        value = self.amount if self.token_id is None else f"#{self.token_id}"
        return (
            f"<TransferEvent(tx_hash={self.tx_hash[:16]}..., "
            f"log_index={self.log_index}, value={value})>"
        )

    @property
    def is_nft(self) -> bool:
        """Check if this is a non-fungible transfer."""
        return self.token_id is not None
