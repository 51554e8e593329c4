"""
Chain client.

Read-only adapter over AsyncWeb3 exposing the three calls the indexer needs:
current height, range-scoped log queries and block timestamps. Every call
goes through the timeout/retry wrapper.

The client is constructed explicitly and passed to its consumers.
"""

from datetime import UTC, datetime

from loguru import logger
from web3 import AsyncHTTPProvider, AsyncWeb3

from asset_indexer.config.constants import (
    BLOCKCHAIN_MAX_RETRIES,
    BLOCKCHAIN_RETRY_DELAY_BASE,
    BLOCKCHAIN_TIMEOUT,
)
from asset_indexer.config.settings import Settings
from asset_indexer.services.event_decoder.events import RawLog
from asset_indexer.utils.security import mask_address, mask_rpc_url

from .rpc_wrapper import rpc_call_with_retry


class ChainClient:
    """Read-only chain access used by the scan loop."""

    def __init__(
        self,
        web3: AsyncWeb3,
        timeout: float = BLOCKCHAIN_TIMEOUT,
        max_retries: int = BLOCKCHAIN_MAX_RETRIES,
        retry_delay_base: float = BLOCKCHAIN_RETRY_DELAY_BASE,
    ) -> None:
        """
        Initialize chain client.

        Args:
            web3: AsyncWeb3 instance
            timeout: Timeout per RPC attempt in seconds
            max_retries: Attempts per RPC call
            retry_delay_base: Base of the exponential backoff in seconds
        """
        self.web3 = web3
        self.timeout = timeout
        self.max_retries = max_retries
        self.retry_delay_base = retry_delay_base

    @classmethod
    def from_settings(cls, settings: Settings) -> "ChainClient":
        """Create client for the configured HTTP endpoint."""
        provider = AsyncHTTPProvider(
            settings.rpc_url,
            request_kwargs={"timeout": settings.rpc_timeout},
        )
        logger.info(f"[Chain] Using RPC {mask_rpc_url(settings.rpc_url)}")
        return cls(
            AsyncWeb3(provider),
            timeout=settings.rpc_timeout,
            max_retries=settings.rpc_max_retries,
        )

    async def _call(self, factory, operation_name: str):
        return await rpc_call_with_retry(
            factory,
            max_retries=self.max_retries,
            timeout=self.timeout,
            operation_name=operation_name,
            retry_delay_base=self.retry_delay_base,
        )

    async def get_block_number(self) -> int:
        """Get current chain height."""
        return await self._call(
            lambda: self.web3.eth.block_number, "eth_blockNumber"
        )

    async def get_logs(
        self,
        address: str,
        topic: str,
        from_block: int,
        to_block: int,
    ) -> list[RawLog]:
        """
        Get logs of one contract and event for an inclusive block range.

        Args:
            address: Contract address
            topic: topic0 of the event
            from_block: First block of the range
            to_block: Last block of the range

        Returns:
            Logs in the order returned by the node
        """
        filter_params = {
            "address": AsyncWeb3.to_checksum_address(address),
            "topics": [topic],
            "fromBlock": from_block,
            "toBlock": to_block,
        }
        logs = await self._call(
            lambda: self.web3.eth.get_logs(filter_params),
            f"eth_getLogs {mask_address(address)} [{from_block}-{to_block}]",
        )
        return [RawLog.from_web3(log) for log in logs]

    async def get_block_timestamp(self, block_number: int) -> datetime:
        """Get timestamp of a block as an aware UTC datetime."""
        block = await self._call(
            lambda: self.web3.eth.get_block(block_number),
            f"eth_getBlockByNumber {block_number}",
        )
        return datetime.fromtimestamp(int(block["timestamp"]), tz=UTC)

    async def close(self) -> None:
        """Release HTTP sessions held by the provider."""
        await self.web3.provider.disconnect()
