"""
Indexer Checkpoint model.

Tracks the last fully processed block of the scan loop.
"""

from datetime import UTC, datetime

from sqlalchemy import BigInteger, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from asset_indexer.models.base import Base


class IndexerCheckpoint(Base):
    """
    Durable scan cursor.

    Used to:
    - Resume scanning after restart
    - Keep progress independent of which event family wrote last
    """

    __tablename__ = "indexer_checkpoints"

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True
    )

    name: Mapped[str] = mapped_column(
        String(64), nullable=False, unique=True, index=True
    )
    last_processed_block: Mapped[int] = mapped_column(
        BigInteger, nullable=False, default=0
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
        nullable=False,
    )
