"""
Event decoder.

Pure functions mapping a RawLog to a typed event. No I/O: block timestamps
are attached by the caller.

Layout of the decoded logs:
- Transfer(address indexed from, address indexed to, uint256 value)
  topics = [sig, from, to] and value in data (ERC-20), or
  topics = [sig, from, to, tokenId] (ERC-721 indexes the token id)
- WhitelistUpdated / BlacklistUpdated(address indexed user, bool status)
  topics = [sig, user], data = status
- PriceUpdated(uint256 indexed price, uint256 timestamp)
  topics = [sig, price], data = timestamp
"""

from datetime import UTC, datetime

from eth_abi import decode as abi_decode
from eth_abi.exceptions import DecodingError
from eth_utils import decode_hex, to_checksum_address

from asset_indexer.models.enums import KycListKind, TokenStandard
from asset_indexer.utils.exceptions import DecodeError

from .events import (
    DecodedKycChange,
    DecodedPriceUpdate,
    DecodedTransfer,
    RawLog,
)

WORD_SIZE = 32


def _fail(log: RawLog, message: str) -> DecodeError:
    return DecodeError(message, tx_hash=log.tx_hash, log_index=log.log_index)


def _expect_topics(log: RawLog, *allowed: int) -> None:
    if len(log.topics) not in allowed:
        raise _fail(
            log,
            f"Expected {' or '.join(map(str, allowed))} topics, "
            f"got {len(log.topics)}",
        )


def _topic_bytes(log: RawLog, position: int) -> bytes:
    try:
        raw = decode_hex(log.topics[position])
    except ValueError as e:
        raise _fail(log, f"Malformed topic[{position}]: {e}") from e
    if len(raw) != WORD_SIZE:
        raise _fail(
            log, f"topic[{position}] is {len(raw)} bytes, expected 32"
        )
    return raw


def _topic_address(log: RawLog, position: int) -> str:
    # Left-padded: the address is the low-order 20 bytes
    return to_checksum_address(_topic_bytes(log, position)[-20:])


def _topic_uint(log: RawLog, position: int) -> int:
    return int.from_bytes(_topic_bytes(log, position), "big")


def _is_empty_data(data: str) -> bool:
    return data.lower() in ("", "0x", "0x0")


def _decode_data(log: RawLog, abi_type: str):
    try:
        (value,) = abi_decode([abi_type], decode_hex(log.data))
    except (DecodingError, ValueError) as e:
        raise _fail(log, f"Cannot decode data as {abi_type}: {e}") from e
    return value


def decode_transfer(log: RawLog, standard: TokenStandard) -> DecodedTransfer:
    """
    Decode a Transfer log.

    Args:
        log: Raw log from the token contract
        standard: Token kind of the contract the log was queried from

    Returns:
        DecodedTransfer with amount (ERC20) or token_id (ERC721) set

    Raises:
        DecodeError: On malformed topics or payload
    """
    _expect_topics(log, 3, 4)

    from_address = _topic_address(log, 1)
    to_address = _topic_address(log, 2)

    if len(log.topics) == 4:
        value = _topic_uint(log, 3)
    elif _is_empty_data(log.data):
        value = 0
    else:
        value = _decode_data(log, "uint256")

    is_nft = standard == TokenStandard.ERC721
    return DecodedTransfer(
        token_address=to_checksum_address(log.address),
        standard=standard,
        from_address=from_address,
        to_address=to_address,
        amount=None if is_nft else value,
        token_id=str(value) if is_nft else None,
        tx_hash=log.tx_hash,
        log_index=log.log_index,
        block_number=log.block_number,
    )


def decode_kyc_change(log: RawLog, kind: KycListKind) -> DecodedKycChange:
    """
    Decode a WhitelistUpdated / BlacklistUpdated log.

    Args:
        log: Raw log from the KYC registry
        kind: List the log's filter was querying

    Raises:
        DecodeError: On malformed topics or a non-boolean payload
    """
    _expect_topics(log, 2)

    user_address = _topic_address(log, 1)
    status = _decode_data(log, "bool")

    return DecodedKycChange(
        user_address=user_address,
        kind=kind,
        status=bool(status),
        tx_hash=log.tx_hash,
        log_index=log.log_index,
        block_number=log.block_number,
    )


def decode_price_update(log: RawLog) -> DecodedPriceUpdate:
    """
    Decode a PriceUpdated log.

    The price is the indexed topic (plain integer, not an address);
    the payload holds the observation time in unix seconds.

    Raises:
        DecodeError: On malformed topics or payload
    """
    _expect_topics(log, 2)

    price = _topic_uint(log, 1)
    seconds = _decode_data(log, "uint256")
    try:
        timestamp = datetime.fromtimestamp(seconds, tz=UTC)
    except (OverflowError, OSError, ValueError) as e:
        raise _fail(log, f"Timestamp {seconds} out of range") from e

    return DecodedPriceUpdate(
        price=price,
        timestamp=timestamp,
        tx_hash=log.tx_hash,
        log_index=log.log_index,
        block_number=log.block_number,
    )
