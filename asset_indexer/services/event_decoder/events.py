"""
Raw and decoded log types.

RawLog is the decoder input; the Decoded* dataclasses are its outputs.
"""

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any

from web3 import Web3

from asset_indexer.models.enums import (
    KycAction,
    KycListKind,
    TokenStandard,
)


def _to_hex(value: Any) -> str:
    if isinstance(value, str):
        return value.lower()
    return Web3.to_hex(value)


@dataclass(frozen=True)
class RawLog:
    """Log record as returned by a range-scoped log query."""

    address: str
    topics: list[str]
    data: str
    block_number: int
    tx_hash: str
    log_index: int

    @classmethod
    def from_web3(cls, log: Any) -> "RawLog":
        """
        Normalise a web3 LogReceipt.

        HexBytes fields become 0x-prefixed lowercase hex strings.
        """
        return cls(
            address=str(log["address"]),
            topics=[_to_hex(topic) for topic in log["topics"]],
            data=_to_hex(log["data"]),
            block_number=int(log["blockNumber"]),
            tx_hash=_to_hex(log["transactionHash"]),
            log_index=int(log["logIndex"]),
        )


@dataclass(frozen=True)
class DecodedTransfer:
    """ERC-20 or ERC-721 transfer."""

    token_address: str
    standard: TokenStandard
    from_address: str
    to_address: str
    amount: int | None
    token_id: str | None
    tx_hash: str
    log_index: int
    block_number: int
    block_timestamp: datetime | None = None

    def with_timestamp(self, block_timestamp: datetime) -> "DecodedTransfer":
        return replace(self, block_timestamp=block_timestamp)


@dataclass(frozen=True)
class DecodedKycChange:
    """Whitelist or blacklist flag change for one address."""

    user_address: str
    kind: KycListKind
    status: bool
    tx_hash: str
    log_index: int
    block_number: int
    block_timestamp: datetime | None = None

    @property
    def action(self) -> KycAction:
        return KycAction.from_status(self.kind, self.status)

    def with_timestamp(self, block_timestamp: datetime) -> "DecodedKycChange":
        return replace(self, block_timestamp=block_timestamp)


@dataclass(frozen=True)
class DecodedPriceUpdate:
    """Oracle price observation."""

    price: int
    timestamp: datetime
    tx_hash: str
    log_index: int
    block_number: int
