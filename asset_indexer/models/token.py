"""
Token model.

Registry of watched token contracts and their standard.
"""

from datetime import UTC, datetime

from sqlalchemy import DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from asset_indexer.models.base import Base
from asset_indexer.models.types import AddressType


class Token(Base):
    """Watched token contract."""

    __tablename__ = "tokens"

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True
    )

    address: Mapped[str] = mapped_column(
        AddressType, nullable=False, unique=True, index=True
    )
    standard: Mapped[str] = mapped_column(
        String(10), nullable=False
    )  # ERC20, ERC721
    name: Mapped[str | None] = mapped_column(String(64), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        nullable=False,
    )
