"""
Oracle Price model.

One row per PriceUpdated log of the price oracle.
"""

from datetime import UTC, datetime
from decimal import Decimal

from sqlalchemy import (
    BigInteger,
    DateTime,
    Integer,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from asset_indexer.config.constants import ORACLE_PRICE_SCALE
from asset_indexer.models.base import Base
from asset_indexer.models.types import TxHashType, Uint256Type


class OraclePrice(Base):
    """
    On-chain price observation.

    price is fixed-point, in thousandths of the quoted currency.
    timestamp comes from the event payload, not from the block.
    """

    __tablename__ = "oracle_prices"
    __table_args__ = (
        UniqueConstraint(
            "tx_hash", "log_index", name="uq_oracle_prices_tx_log"
        ),
    )

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True
    )

    price: Mapped[Decimal] = mapped_column(Uint256Type, nullable=False)
    timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, index=True
    )

    tx_hash: Mapped[str] = mapped_column(TxHashType, nullable=False)
    log_index: Mapped[int] = mapped_column(Integer, nullable=False)
    block_number: Mapped[int] = mapped_column(
        BigInteger, nullable=False, index=True
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        nullable=False,
    )

    def __repr__(self) -> str:
        """String representation."""
        return f"<OraclePrice(price={self.price}, timestamp={self.timestamp})>"

    @property
    def price_decimal(self) -> Decimal:
        """Price in units of the quoted currency."""
        return Decimal(self.price) / Decimal(ORACLE_PRICE_SCALE)
