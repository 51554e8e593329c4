"""
User repository.

Upsert-by-address access to the KYC projection. Both the indexer and the
admin surface write through here so either order converges.
"""

from loguru import logger
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from asset_indexer.models.enums import KycListKind, KycStatus
from asset_indexer.models.user import User
from asset_indexer.repositories.base import BaseRepository
from asset_indexer.utils.security import mask_address


class UserRepository(BaseRepository[User]):
    """User repository with KYC specific writes."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize user repository."""
        super().__init__(User, session)

    async def get_by_address(
        self, address: str, for_update: bool = False
    ) -> User | None:
        """
        Get user by checksummed address.

        Args:
            address: Checksummed address
            for_update: Lock the row until the transaction ends

        Returns:
            User or None
        """
        stmt = select(User).where(User.address == address)
        if for_update:
            stmt = stmt.with_for_update()
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def ensure_exists(self, address: str) -> bool:
        """
        Create a pending user row if the address is unknown.

        Existing rows are left untouched.

        Returns:
            True if a row was created
        """
        return await self.insert_ignore(
            ["address"],
            address=address,
            is_whitelisted=False,
            is_blacklisted=False,
            kyc_status=KycStatus.PENDING.value,
        )

    async def upsert_kyc_flag(
        self,
        address: str,
        kind: KycListKind,
        status: bool,
    ) -> User:
        """
        Apply an observed registry flag to the user projection.

        Only the flag of the given list is merged; the other list's flag
        is left as is. The status is recomputed from both flags.

        Args:
            address: Checksummed user address
            kind: Registry list the change belongs to
            status: New on-chain flag value

        Returns:
            Updated user
        """
        user = await self.get_by_address(address, for_update=True)

        if user is None:
            whitelisted = kind == KycListKind.WHITELIST and status
            blacklisted = kind == KycListKind.BLACKLIST and status
            await self.insert_ignore(
                ["address"],
                address=address,
                is_whitelisted=whitelisted,
                is_blacklisted=blacklisted,
                kyc_status=KycStatus.from_flags(
                    whitelisted, blacklisted
                ).value,
            )
            # Re-read: a concurrent writer may have created the row first
            user = await self.get_by_address(address, for_update=True)

        if kind == KycListKind.WHITELIST:
            user.is_whitelisted = status
        else:
            user.is_blacklisted = status
        user.refresh_kyc_status()

        await self.session.flush()
        logger.debug(
            f"[Users] {mask_address(address)} {kind.value}={status} "
            f"-> {user.kyc_status}"
        )
        return user

    async def apply_admin_decision(
        self,
        address: str,
        kind: KycListKind,
        status: bool,
        email: str | None = None,
    ) -> User:
        """
        Optimistic update after the admin surface submitted a registry call.

        Setting one list clears the other, matching what the registry
        enforces on-chain. The indexer later reconciles with observed logs.

        Args:
            address: Checksummed user address
            kind: Registry list that was modified
            status: Flag value that was submitted
            email: Optional contact e-mail to store

        Returns:
            Updated user
        """
        user = await self.upsert_kyc_flag(address, kind, status)

        if status:
            if kind == KycListKind.WHITELIST:
                user.is_blacklisted = False
            else:
                user.is_whitelisted = False
            user.refresh_kyc_status()
        if email:
            user.email = email

        await self.session.flush()
        return user
