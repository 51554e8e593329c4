"""
User model.

Mutable projection of an address's KYC state, kept in sync from
registry events and from the admin surface.
"""

from datetime import UTC, datetime

from sqlalchemy import Boolean, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from asset_indexer.models.base import Base
from asset_indexer.models.enums import KycStatus
from asset_indexer.models.types import AddressType


class User(Base):
    """KYC projection keyed by address."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True
    )

    address: Mapped[str] = mapped_column(
        AddressType, nullable=False, unique=True, index=True
    )

    # KYC flags (not mutually exclusive at the data layer)
    is_whitelisted: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False
    )
    is_blacklisted: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False
    )
    # pending, approved, rejected - derived from the flags
    kyc_status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=KycStatus.PENDING.value
    )

    email: Mapped[str | None] = mapped_column(String(255), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
        nullable=False,
    )

    def __repr__(self) -> str:
        """String representation."""
        return f"<User(address={self.address}, kyc_status={self.kyc_status})>"

    def refresh_kyc_status(self) -> None:
        """Recompute kyc_status from the flags."""
        self.kyc_status = KycStatus.from_flags(
            self.is_whitelisted, self.is_blacklisted
        ).value
