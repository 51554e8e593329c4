"""Token repository."""

from sqlalchemy.ext.asyncio import AsyncSession

from asset_indexer.models.token import Token
from asset_indexer.repositories.base import BaseRepository


class TokenRepository(BaseRepository[Token]):
    """Repository for watched token contracts."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository."""
        super().__init__(Token, session)

    async def register(
        self, address: str, standard: str, name: str | None = None
    ) -> bool:
        """Register a token contract if unknown."""
        return await self.insert_ignore(
            ["address"],
            address=address,
            standard=standard,
            name=name,
        )
